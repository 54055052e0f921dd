"""Typed records for the TA tracker and the metric structures derived from them."""

from collections.abc import Iterator, Sequence
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import NamedTuple

import pandas as pd
import pandera as pa
from pandera import Check, Column

from hiring_analytics.utils.types import (
    AlertKind,
    FinalStatus,
    InterviewStatus,
    MaybeDate,
    MaybeNumber,
    Round,
    ScreeningStatus,
)


class InterviewSlot(NamedTuple):
    interview_date: MaybeDate
    panelist_name: str
    status: InterviewStatus
    feedback_date: MaybeDate


@dataclass(frozen=True)
class CandidateRecord:
    """One candidate against one requisition, as normalized from a tracker row."""

    candidate_name: str
    sr_no: int = 0
    req_date: MaybeDate = None
    hm_details: str = ""
    skill: str = ""
    designation: str = ""
    location_of_posting: str = ""
    no_of_openings: int = 0
    status: str = ""
    resume: str = ""
    recruiter_name: str = ""
    source: str = ""
    sub_source: str = ""
    sourcing_date: MaybeDate = None
    mobile_number: str = ""
    mail_id: str = ""
    gender: str = ""
    experience: MaybeNumber = None
    current_ctc: MaybeNumber = None
    expected_ctc: MaybeNumber = None
    current_company: str = ""
    current_location: str = ""
    notice_period: str = ""
    date_of_birth: MaybeDate = None

    # Screening
    screening_date: MaybeDate = None
    test_for_screening: str = ""
    recruiter_remarks: str = ""
    screening_check_status: ScreeningStatus = ScreeningStatus.UNKNOWN

    # Interview rounds
    date_r1_interview: MaybeDate = None
    panelist_name_r1: str = ""
    status_of_r1: InterviewStatus = InterviewStatus.UNKNOWN
    date_of_feedback_shared_r1: MaybeDate = None
    date_r2_interview: MaybeDate = None
    panelist_name_r2: str = ""
    status_of_r2: InterviewStatus = InterviewStatus.UNKNOWN
    date_of_feedback_shared_r2: MaybeDate = None
    date_r3_interview: MaybeDate = None
    panelist_name_r3: str = ""
    status_of_r3: InterviewStatus = InterviewStatus.UNKNOWN
    date_of_feedback_shared_r3: MaybeDate = None

    # Outcome
    assignment_status: str = ""
    final_status: FinalStatus = FinalStatus.UNKNOWN
    rejection_reason: str = ""
    reason_for_others_in_am_column: str = ""
    rejection_mailer_date: MaybeDate = None
    onboarding_doc_date: MaybeDate = None
    approval_date: MaybeDate = None
    offer_date: MaybeDate = None
    offer_acceptance_date: MaybeDate = None
    pc_request_date: MaybeDate = None
    joining_date: MaybeDate = None

    # As exported by the sheet; recompute rather than trust.
    ttf_60_days: MaybeNumber = None
    delay_in_ttf: MaybeNumber = None
    tth_30_days: MaybeNumber = None
    delay_in_tth: MaybeNumber = None

    def interview_round(self, number: int) -> InterviewSlot:
        match number:
            case 1:
                return InterviewSlot(
                    self.date_r1_interview, self.panelist_name_r1,
                    self.status_of_r1, self.date_of_feedback_shared_r1,
                )
            case 2:
                return InterviewSlot(
                    self.date_r2_interview, self.panelist_name_r2,
                    self.status_of_r2, self.date_of_feedback_shared_r2,
                )
            case 3:
                return InterviewSlot(
                    self.date_r3_interview, self.panelist_name_r3,
                    self.status_of_r3, self.date_of_feedback_shared_r3,
                )
            case other:
                raise ValueError(f"Unknown interview round: {other}")

    def rounds(self) -> Iterator[tuple[Round, InterviewSlot]]:
        for label in Round:
            yield label, self.interview_round(label.number)


@dataclass(frozen=True)
class DateFilters:
    req_date_from: MaybeDate = None
    req_date_to: MaybeDate = None
    sourcing_date_from: MaybeDate = None
    sourcing_date_to: MaybeDate = None
    screening_date_from: MaybeDate = None
    screening_date_to: MaybeDate = None


@dataclass(frozen=True)
class PipelineMetrics:
    total_candidates: int = 0
    screening_cleared: int = 0
    screening_not_cleared: int = 0
    screening_in_progress: int = 0
    r1_cleared: int = 0
    r1_not_cleared: int = 0
    r1_pending: int = 0
    r2_cleared: int = 0
    r2_not_cleared: int = 0
    r2_pending: int = 0
    r3_cleared: int = 0
    r3_not_cleared: int = 0
    r3_pending: int = 0
    offered: int = 0
    joined: int = 0
    selected: int = 0
    rejected: int = 0
    in_progress: int = 0
    on_hold: int = 0


@dataclass(frozen=True)
class SubSourceCount:
    sub_source: str
    count: int


@dataclass(frozen=True)
class SourceDistributionItem:
    source: str
    count: int
    percentage: int
    sub_sources: list[SubSourceCount] = field(default_factory=list)


@dataclass(frozen=True)
class RecruiterMetrics:
    recruiter_name: str
    candidates_sourced: int
    screening_cleared: int
    screening_not_cleared: int
    screening_in_progress: int
    screening_rate: float
    alert_count: int
    avg_sourcing_to_screening_hours: float
    conversion_rate: float
    candidates: list[CandidateRecord] = field(default_factory=list, repr=False)


@dataclass(frozen=True)
class InterviewRecord:
    candidate_name: str
    round: Round
    interview_date: MaybeDate
    feedback_date: MaybeDate
    time_difference_hours: int | None
    status: InterviewStatus
    final_status: FinalStatus
    is_alert: bool
    is_pending_feedback: bool
    panelist_name: str = ""


@dataclass(frozen=True)
class PanelistMetrics:
    panelist_name: str
    total_interviews: int
    r1_interviews: int
    r2_interviews: int
    r3_interviews: int
    passed_interviews: int
    failed_interviews: int
    pending_interviews: int
    pass_rate: float
    r1_pass_rate: float
    r2_pass_rate: float
    r3_pass_rate: float
    avg_feedback_time_hours: float
    alert_count: int
    interviews: list[InterviewRecord] = field(default_factory=list, repr=False)


@dataclass(frozen=True)
class RecruiterAlert:
    recruiter_name: str
    candidate_name: str
    sourcing_date: MaybeDate
    screening_date: MaybeDate
    hours: int


@dataclass(frozen=True)
class PanelistAlert:
    panelist_name: str
    candidate_name: str
    round: Round
    interview_date: MaybeDate
    feedback_date: MaybeDate
    hours: int | None
    is_pending: bool


@dataclass(frozen=True)
class TimelineAlert:
    """A time-to-hire or time-to-fill breach, measured in whole days."""

    kind: AlertKind
    candidate_name: str
    designation: str
    recruiter_name: str
    hm_details: str
    start_date: datetime
    offer_acceptance_date: datetime
    days_elapsed: int
    expected_days: int

    @property
    def days_over(self) -> int:
        return self.days_elapsed - self.expected_days


DATE_FIELDS = [f.name for f in fields(CandidateRecord) if f.type is MaybeDate]
STATUS_VOCABULARIES = {
    "screening_check_status": [s.value for s in ScreeningStatus],
    "status_of_r1": [s.value for s in InterviewStatus],
    "status_of_r2": [s.value for s in InterviewStatus],
    "status_of_r3": [s.value for s in InterviewStatus],
    "final_status": [s.value for s in FinalStatus],
}


def records_to_frame(records: Sequence[CandidateRecord]) -> pd.DataFrame:
    """Flatten records into a DataFrame, one column per record field."""
    columns = [f.name for f in fields(CandidateRecord)]
    df = pd.DataFrame([asdict(r) for r in records], columns=columns)
    for col in STATUS_VOCABULARIES:
        df[col] = df[col].astype(str)
    for col in DATE_FIELDS:
        df[col] = pd.to_datetime(df[col])
    return df


candidate_schema = pa.DataFrameSchema(
    {
        "candidate_name": Column(str, Check.str_length(min_value=1)),
        "sr_no": Column(int, Check.greater_than_or_equal_to(0)),
        "no_of_openings": Column(int, Check.greater_than_or_equal_to(0)),
        **{
            col: Column(str, Check.isin(values))
            for col, values in STATUS_VOCABULARIES.items()
        },
        **{
            col: Column(pa.DateTime, nullable=True)
            for col in DATE_FIELDS
        },
    },
    strict=False,
    coerce=True,
)
