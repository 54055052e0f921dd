"""SLA breach alerts for the dashboard notification panels.

Two families of checks:

* hour-based: sourcing to screening (recruiter) and interview to feedback
  (panelist), both against a 48 hour ceiling by default;
* day-based: time-to-hire (screening clearance to offer acceptance, 30 days) and
  time-to-fill (requisition to offer acceptance, 60 days).

Elapsed time is plain wall-clock time; there is no business-day calendar.
"""

import logging
from collections.abc import Sequence

from hiring_analytics.config import DEFAULT_SLA_POLICY, SLAPolicy
from hiring_analytics.tracker.models import CandidateRecord, PanelistAlert, RecruiterAlert, TimelineAlert
from hiring_analytics.tracker.panelists import build_interview_record
from hiring_analytics.utils.parsing import elapsed_days, is_48_hour_alert_triggered, time_difference_hours
from hiring_analytics.utils.types import AlertKind, MaybeDate, ScreeningStatus

logger = logging.getLogger(__name__)


def sourcing_sla_alerts(
    data: Sequence[CandidateRecord],
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[RecruiterAlert]:
    """Candidates screened later than the sourcing-to-screening ceiling."""
    alerts = [
        RecruiterAlert(
            recruiter_name=r.recruiter_name,
            candidate_name=r.candidate_name,
            sourcing_date=r.sourcing_date,
            screening_date=r.screening_date,
            hours=time_difference_hours(r.sourcing_date, r.screening_date),
        )
        for r in data
        if is_48_hour_alert_triggered(r.sourcing_date, r.screening_date, sla.sourcing_to_screening_hours)
    ]
    logger.debug("Sourcing SLA: %d breaches", len(alerts))
    return alerts


def feedback_sla_alerts(
    data: Sequence[CandidateRecord],
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[PanelistAlert]:
    """Interview rounds whose feedback was late or is still outstanding."""
    alerts = []
    for record in data:
        for label, slot in record.rounds():
            if not slot.panelist_name:
                continue
            interview = build_interview_record(record, label, slot, sla)
            if not (interview.is_alert or interview.is_pending_feedback):
                continue
            alerts.append(PanelistAlert(
                panelist_name=slot.panelist_name,
                candidate_name=record.candidate_name,
                round=label,
                interview_date=interview.interview_date,
                feedback_date=interview.feedback_date,
                hours=interview.time_difference_hours,
                is_pending=interview.is_pending_feedback,
            ))
    logger.debug("Feedback SLA: %d breaches", len(alerts))
    return alerts


def _timeline_alert(
    record: CandidateRecord,
    kind: AlertKind,
    start: MaybeDate,
    expected_days: int,
) -> TimelineAlert | None:
    days = elapsed_days(start, record.offer_acceptance_date)
    if days is None or days <= expected_days:
        return None
    return TimelineAlert(
        kind=kind,
        candidate_name=record.candidate_name,
        designation=record.designation,
        recruiter_name=record.recruiter_name,
        hm_details=record.hm_details,
        start_date=start,
        offer_acceptance_date=record.offer_acceptance_date,
        days_elapsed=days,
        expected_days=expected_days,
    )


def _screening_clear_date(record: CandidateRecord) -> MaybeDate:
    if record.screening_check_status != ScreeningStatus.CLEARED:
        return None
    return record.screening_date


def time_to_hire_alerts(
    data: Sequence[CandidateRecord],
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[TimelineAlert]:
    alerts = (
        _timeline_alert(r, AlertKind.TIME_TO_HIRE, _screening_clear_date(r), sla.time_to_hire_days)
        for r in data
    )
    return [a for a in alerts if a is not None]


def time_to_fill_alerts(
    data: Sequence[CandidateRecord],
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> list[TimelineAlert]:
    alerts = (
        _timeline_alert(r, AlertKind.TIME_TO_FILL, r.req_date, sla.time_to_fill_days)
        for r in data
    )
    return [a for a in alerts if a is not None]
