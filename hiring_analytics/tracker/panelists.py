"""Panelist performance: interviews taken, pass rates and feedback turnaround."""

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from hiring_analytics.config import DEFAULT_SLA_POLICY, SLAPolicy
from hiring_analytics.tracker.filters import panelist_matches
from hiring_analytics.tracker.models import CandidateRecord, InterviewRecord, InterviewSlot, PanelistMetrics
from hiring_analytics.tracker.roster import unique_panelists
from hiring_analytics.utils.parsing import (
    is_48_hour_alert_triggered,
    is_feedback_pending,
    safe_rate,
    time_difference_hours,
)
from hiring_analytics.utils.types import AWAITING_OUTCOME_STATUSES, InterviewStatus, Round

logger = logging.getLogger(__name__)


def build_interview_record(
    record: CandidateRecord,
    label: Round,
    slot: InterviewSlot,
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> InterviewRecord:
    return InterviewRecord(
        candidate_name=record.candidate_name,
        round=label,
        interview_date=slot.interview_date,
        feedback_date=slot.feedback_date,
        time_difference_hours=time_difference_hours(slot.interview_date, slot.feedback_date),
        status=slot.status,
        final_status=record.final_status,
        is_alert=is_48_hour_alert_triggered(slot.interview_date, slot.feedback_date, sla.feedback_hours),
        is_pending_feedback=is_feedback_pending(slot.interview_date, slot.feedback_date, slot.status),
        panelist_name=slot.panelist_name,
    )


def extract_interviews_for_panelist(
    data: Sequence[CandidateRecord],
    panelist_name: str,
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[InterviewRecord]:
    """One interview per candidate and round the panelist sat on.

    Rounds are checked independently, so a panelist who took both R1 and R3
    for a candidate gets two entries.
    """
    return [
        build_interview_record(record, label, slot, sla)
        for record in data
        for label, slot in record.rounds()
        if panelist_matches(slot.panelist_name, panelist_name)
    ]


def _pass_rate(interviews: Iterable[InterviewRecord]) -> float:
    """Cleared over completed rounds; rounds without an outcome don't count."""
    completed = [i for i in interviews if i.status in (InterviewStatus.CLEARED, InterviewStatus.NOT_CLEARED)]
    passed = sum(1 for i in completed if i.status == InterviewStatus.CLEARED)
    return safe_rate(passed, len(completed))


def calculate_panelist_metrics(
    data: Sequence[CandidateRecord],
    panelist_name: str,
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> PanelistMetrics:
    interviews = extract_interviews_for_panelist(data, panelist_name, sla)
    by_round = {label: [i for i in interviews if i.round == label] for label in Round}

    feedback_hours = [
        i.time_difference_hours for i in interviews
        if i.time_difference_hours is not None and i.time_difference_hours >= 0
    ]

    return PanelistMetrics(
        panelist_name=panelist_name,
        total_interviews=len(interviews),
        r1_interviews=len(by_round[Round.R1]),
        r2_interviews=len(by_round[Round.R2]),
        r3_interviews=len(by_round[Round.R3]),
        passed_interviews=sum(1 for i in interviews if i.status == InterviewStatus.CLEARED),
        failed_interviews=sum(1 for i in interviews if i.status == InterviewStatus.NOT_CLEARED),
        pending_interviews=sum(1 for i in interviews if i.status in AWAITING_OUTCOME_STATUSES),
        pass_rate=_pass_rate(interviews),
        r1_pass_rate=_pass_rate(by_round[Round.R1]),
        r2_pass_rate=_pass_rate(by_round[Round.R2]),
        r3_pass_rate=_pass_rate(by_round[Round.R3]),
        avg_feedback_time_hours=float(np.mean(feedback_hours)) if feedback_hours else 0.0,
        alert_count=sum(1 for i in interviews if i.is_alert or i.is_pending_feedback),
        interviews=interviews,
    )


def calculate_all_panelist_metrics(
    data: Sequence[CandidateRecord],
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[PanelistMetrics]:
    report = [calculate_panelist_metrics(data, name, sla) for name in unique_panelists(data)]
    logger.info("Computed metrics for %d panelists", len(report))
    return report
