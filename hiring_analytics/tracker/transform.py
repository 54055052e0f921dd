"""Normalize raw tracker rows into typed candidate records."""

import logging
from collections.abc import Sequence

from hiring_analytics.tracker.models import CandidateRecord
from hiring_analytics.utils.parsing import parse_date, parse_number
from hiring_analytics.utils.types import FinalStatus, InterviewStatus, ScreeningStatus

logger = logging.getLogger(__name__)

CANDIDATE_NAME_HEADER = "Candidate Name"
HEADER_ANCHOR = "Sr No."
PLACEHOLDER_PHRASE = "insert new row"

# The sheet repeats these column groups once per interview round instead of
# naming them R1/R2/R3, so they are resolved by occurrence order.
PANELIST_LABEL = "panelist name"
FEEDBACK_LABEL = "date of feedback"
ROUND_SLOTS = 3

TEXT_COLUMNS = {
    "HM Details": "hm_details",
    "Skill": "skill",
    "Designation": "designation",
    "Location of posting": "location_of_posting",
    "Status": "status",
    "Resume": "resume",
    "Recruiter Name": "recruiter_name",
    "Source": "source",
    "Sub Source": "sub_source",
    "Mobile Number": "mobile_number",
    "Mail Id": "mail_id",
    "Gender": "gender",
    "Current Company": "current_company",
    "Current location": "current_location",
    "Notice Period/Last working day": "notice_period",
    "Test for screening": "test_for_screening",
    "Recruiter remarks if any": "recruiter_remarks",
    "Assignment Status": "assignment_status",
    "Rejection Reason": "rejection_reason",
    "Reason for Others in AM column": "reason_for_others_in_am_column",
}

DATE_COLUMNS = {
    "Req Date": "req_date",
    "Sourcing Date": "sourcing_date",
    "Date of Birth": "date_of_birth",
    "Screening Date": "screening_date",
    "Date R1 Interview": "date_r1_interview",
    "Date R2 Interview": "date_r2_interview",
    "Date R3 Interview": "date_r3_interview",
    "Rejection Mailer Date": "rejection_mailer_date",
    "Onboarding doc date": "onboarding_doc_date",
    "Approval date": "approval_date",
    "Offer date": "offer_date",
    "Offer Acceptance Date": "offer_acceptance_date",
    "PC Request date": "pc_request_date",
    "Joining Date": "joining_date",
}

NUMBER_COLUMNS = {
    "Experience": "experience",
    "Current CTC": "current_ctc",
    "Expected CTC": "expected_ctc",
    "TTF (60 days)": "ttf_60_days",
    "Delay in TTF": "delay_in_ttf",
    "TTH (30 days)": "tth_30_days",
    "Delay in TTH": "delay_in_tth",
}


def _fold(value: str | None) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def normalize_screening_status(value: str | None) -> ScreeningStatus:
    match _fold(value):
        case "cleared":
            return ScreeningStatus.CLEARED
        case "not cleared":
            return ScreeningStatus.NOT_CLEARED
        case "in progress":
            return ScreeningStatus.IN_PROGRESS
        case "":
            return ScreeningStatus.UNKNOWN
        case other:
            logger.debug("Unmapped screening status: %r", other)
            return ScreeningStatus.UNKNOWN


def normalize_interview_status(value: str | None) -> InterviewStatus:
    match _fold(value):
        case "cleared":
            return InterviewStatus.CLEARED
        case "not cleared":
            return InterviewStatus.NOT_CLEARED
        case text if "pending at r1" in text:
            return InterviewStatus.PENDING_R1
        case text if "pending at r2" in text:
            return InterviewStatus.PENDING_R2
        case text if "pending at r3" in text:
            return InterviewStatus.PENDING_R3
        case "":
            return InterviewStatus.UNKNOWN
        case other:
            logger.debug("Unmapped interview status: %r", other)
            return InterviewStatus.UNKNOWN


def normalize_final_status(value: str | None) -> FinalStatus:
    match _fold(value):
        case text if "reject" in text:
            return FinalStatus.REJECTED
        case "selected" | "yes":
            return FinalStatus.SELECTED
        case "in progress":
            return FinalStatus.IN_PROGRESS
        case text if "hold" in text:
            return FinalStatus.ON_HOLD
        case text if "pending at r1" in text:
            return FinalStatus.PENDING_R1
        case text if "pending at r2" in text:
            return FinalStatus.PENDING_R2
        case text if "pending at r3" in text:
            return FinalStatus.PENDING_R3
        case "":
            return FinalStatus.UNKNOWN
        case other:
            logger.debug("Unmapped final status: %r", other)
            return FinalStatus.UNKNOWN


def assign_round_slots(
    headers: Sequence[str],
    cells: Sequence[str],
    label: str,
    slots: int = ROUND_SLOTS,
) -> list[str]:
    """Collect the cells under a repeated column label, in column order.

    The first column whose header contains ``label`` feeds round 1, the
    second round 2 and so on. Occurrences beyond ``slots`` are ignored and
    missing ones stay blank.
    """
    values = [""] * slots
    ordinal = 0
    for header, cell in zip(headers, cells):
        if label in header.lower():
            if ordinal < slots:
                values[ordinal] = _clean(cell)
            ordinal += 1
    return values


def count_round_slots(headers: Sequence[str], label: str) -> int:
    return sum(1 for header in headers if label in header.lower())


def _clean(value: str | None) -> str:
    return value.strip() if isinstance(value, str) else ""


def _first_cells(headers: Sequence[str], cells: Sequence[str]) -> dict[str, str]:
    """Map each header to the cell under its first occurrence."""
    lookup: dict[str, str] = {}
    for header, cell in zip(headers, cells):
        lookup.setdefault(header, _clean(cell))
    return lookup


def is_placeholder_row(cells: Sequence[str]) -> bool:
    """Instruction rows, repeated header rows and blank rows carry no candidate."""
    first = _clean(cells[0]) if cells else ""
    return not first or PLACEHOLDER_PHRASE in first.lower() or first == HEADER_ANCHOR


def normalize_row(cells: Sequence[str], headers: Sequence[str]) -> CandidateRecord | None:
    """Build a ``CandidateRecord`` from one row, or ``None`` if the row is not a candidate.

    ``cells`` is positionally aligned with ``headers``; a plain mapping would
    lose the repeated panelist and feedback columns.
    """
    if is_placeholder_row(cells):
        return None

    row = _first_cells(headers, cells)
    candidate_name = row.get(CANDIDATE_NAME_HEADER, "")
    if not candidate_name:
        return None

    panelists = assign_round_slots(headers, cells, PANELIST_LABEL)
    feedback = [parse_date(v) for v in assign_round_slots(headers, cells, FEEDBACK_LABEL)]

    values: dict = {
        field_name: row.get(header, "") for header, field_name in TEXT_COLUMNS.items()
    }
    values.update(
        {field_name: parse_date(row.get(header)) for header, field_name in DATE_COLUMNS.items()}
    )
    values.update(
        {field_name: parse_number(row.get(header)) for header, field_name in NUMBER_COLUMNS.items()}
    )

    return CandidateRecord(
        candidate_name=candidate_name,
        sr_no=int(parse_number(row.get("Sr No.")) or 0),
        no_of_openings=int(parse_number(row.get("No. of Openings")) or 0),
        screening_check_status=normalize_screening_status(row.get("Screening check status")),
        panelist_name_r1=panelists[0],
        panelist_name_r2=panelists[1],
        panelist_name_r3=panelists[2],
        status_of_r1=normalize_interview_status(row.get("Status of R1")),
        status_of_r2=normalize_interview_status(row.get("Status of R2")),
        status_of_r3=normalize_interview_status(row.get("Status of R3")),
        date_of_feedback_shared_r1=feedback[0],
        date_of_feedback_shared_r2=feedback[1],
        date_of_feedback_shared_r3=feedback[2],
        final_status=normalize_final_status(row.get("Final Status")),
        **values,
    )
