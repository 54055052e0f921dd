"""Record selection for role views and dashboard filters.

Every function returns a new list and leaves its input untouched, so the
same loaded dataset can back any number of views.
"""

from collections.abc import Collection, Sequence

from hiring_analytics.tracker.models import CandidateRecord, DateFilters
from hiring_analytics.utils.types import MaybeDate


def _key(name: str | None) -> str:
    return (name or "").strip().lower()


def filter_data_for_hiring_manager(data: Sequence[CandidateRecord], hm_name: str) -> list[CandidateRecord]:
    wanted = _key(hm_name)
    return [r for r in data if _key(r.hm_details) == wanted]


def filter_data_for_recruiter(data: Sequence[CandidateRecord], recruiter_name: str) -> list[CandidateRecord]:
    wanted = _key(recruiter_name)
    return [r for r in data if _key(r.recruiter_name) == wanted]


def panelist_matches(cell: str, panelist_name: str) -> bool:
    """Substring match: panelist cells often carry extra annotation text."""
    return bool(cell) and _key(panelist_name) in cell.lower()


def filter_data_for_panellist(data: Sequence[CandidateRecord], panelist_name: str) -> list[CandidateRecord]:
    return [
        r for r in data
        if any(panelist_matches(slot.panelist_name, panelist_name) for _, slot in r.rounds())
    ]


def _within(value: MaybeDate, lower: MaybeDate, upper: MaybeDate) -> bool:
    # An absent value never fails a bound.
    if value is None:
        return True
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def filter_by_date_range(data: Sequence[CandidateRecord], filters: DateFilters) -> list[CandidateRecord]:
    """Keep records whose present dates fall inside the inclusive bounds."""
    return [
        r for r in data
        if _within(r.req_date, filters.req_date_from, filters.req_date_to)
        and _within(r.sourcing_date, filters.sourcing_date_from, filters.sourcing_date_to)
        and _within(r.screening_date, filters.screening_date_from, filters.screening_date_to)
    ]


def filter_by_attributes(
    data: Sequence[CandidateRecord],
    skills: Collection[str] = (),
    candidates: Collection[str] = (),
    locations: Collection[str] = (),
) -> list[CandidateRecord]:
    """Multi-select filters; an empty selection does not constrain."""
    return [
        r for r in data
        if (not skills or r.skill in skills)
        and (not candidates or r.candidate_name in candidates)
        and (not locations or r.location_of_posting in locations)
    ]


def search_candidates(data: Sequence[CandidateRecord], term: str) -> list[CandidateRecord]:
    needle = _key(term)
    if not needle:
        return list(data)
    return [
        r for r in data
        if needle in r.candidate_name.lower()
        or needle in r.skill.lower()
        or needle in r.designation.lower()
    ]
