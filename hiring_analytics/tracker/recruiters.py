"""Recruiter performance: screening throughput, sourcing SLA and conversion."""

import logging
from collections import Counter
from collections.abc import Sequence

import numpy as np

from hiring_analytics.config import DEFAULT_SLA_POLICY, SLAPolicy
from hiring_analytics.tracker.filters import filter_data_for_recruiter
from hiring_analytics.tracker.models import CandidateRecord, RecruiterMetrics
from hiring_analytics.tracker.roster import unique_recruiters
from hiring_analytics.utils.parsing import is_48_hour_alert_triggered, safe_rate, time_difference_hours
from hiring_analytics.utils.types import FinalStatus, ScreeningStatus

logger = logging.getLogger(__name__)


def _sourcing_to_screening_hours(records: Sequence[CandidateRecord]) -> list[int]:
    """Whole-hour gaps for records with both dates, ignoring negative gaps."""
    hours = (time_difference_hours(r.sourcing_date, r.screening_date) for r in records)
    return [h for h in hours if h is not None and h >= 0]


def calculate_recruiter_metrics(
    data: Sequence[CandidateRecord],
    recruiter_name: str,
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> RecruiterMetrics:
    """Summarize one recruiter's candidates.

    Screening rate and conversion rate are percentages of everything the
    recruiter sourced; the SLA alert count is the number of candidates
    screened more than ``sla.sourcing_to_screening_hours`` after sourcing.
    """
    recruiter_data = filter_data_for_recruiter(data, recruiter_name)
    total = len(recruiter_data)
    screening = Counter(r.screening_check_status for r in recruiter_data)

    alert_count = sum(
        1 for r in recruiter_data
        if is_48_hour_alert_triggered(r.sourcing_date, r.screening_date, sla.sourcing_to_screening_hours)
    )
    durations = _sourcing_to_screening_hours(recruiter_data)
    selected = sum(1 for r in recruiter_data if r.final_status == FinalStatus.SELECTED)

    return RecruiterMetrics(
        recruiter_name=recruiter_name,
        candidates_sourced=total,
        screening_cleared=screening[ScreeningStatus.CLEARED],
        screening_not_cleared=screening[ScreeningStatus.NOT_CLEARED],
        screening_in_progress=screening[ScreeningStatus.IN_PROGRESS],
        screening_rate=safe_rate(screening[ScreeningStatus.CLEARED], total),
        alert_count=alert_count,
        avg_sourcing_to_screening_hours=float(np.mean(durations)) if durations else 0.0,
        conversion_rate=safe_rate(selected, total),
        candidates=recruiter_data,
    )


def calculate_all_recruiter_metrics(
    data: Sequence[CandidateRecord],
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[RecruiterMetrics]:
    """Metrics for every recruiter present in ``data``, by name."""
    report = [calculate_recruiter_metrics(data, name, sla) for name in unique_recruiters(data)]
    logger.info("Computed metrics for %d recruiters", len(report))
    return report
