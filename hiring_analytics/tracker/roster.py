"""Name lists used to populate the role selectors."""

from collections.abc import Iterable, Sequence

from hiring_analytics.tracker.models import CandidateRecord

PLACEHOLDER_NAMES = frozenset({"na", "n/a", "-", "#n/a"})


def _distinct_sorted(names: Iterable[str]) -> list[str]:
    return sorted({name.strip() for name in names if name and name.strip()})


def unique_hiring_managers(data: Sequence[CandidateRecord]) -> list[str]:
    return _distinct_sorted(r.hm_details for r in data if "#N/A" not in r.hm_details)


def unique_recruiters(data: Sequence[CandidateRecord]) -> list[str]:
    return _distinct_sorted(r.recruiter_name for r in data)


def unique_panelists(data: Sequence[CandidateRecord]) -> list[str]:
    """Every panelist named in any round, minus placeholders and stray initials."""
    names = _distinct_sorted(slot.panelist_name for r in data for _, slot in r.rounds())
    return [n for n in names if len(n) > 1 and n.lower() not in PLACEHOLDER_NAMES]
