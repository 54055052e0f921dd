"""Pipeline funnel counts, final-status buckets and source distribution."""

import logging
from collections import Counter
from collections.abc import Sequence

import pandas as pd

from hiring_analytics.tracker.models import (
    CandidateRecord,
    PipelineMetrics,
    SourceDistributionItem,
    SubSourceCount,
)
from hiring_analytics.utils.parsing import round_half_up, safe_rate
from hiring_analytics.utils.types import (
    IN_PROGRESS_FINAL_STATUSES,
    FinalStatus,
    InterviewStatus,
    Round,
    ScreeningStatus,
)

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "Unknown"
DIRECT_SUB_SOURCE = "Direct"


def calculate_pipeline_metrics(data: Sequence[CandidateRecord]) -> PipelineMetrics:
    """Count candidates at each stage of the hiring funnel."""
    screening: Counter = Counter()
    rounds = {label: Counter() for label in Round}
    final: Counter = Counter()
    offered = joined = 0

    for record in data:
        screening[record.screening_check_status] += 1
        for label, slot in record.rounds():
            rounds[label][slot.status] += 1
        final[record.final_status] += 1
        offered += record.offer_date is not None
        joined += record.joining_date is not None

    r1, r2, r3 = rounds[Round.R1], rounds[Round.R2], rounds[Round.R3]
    return PipelineMetrics(
        total_candidates=len(data),
        screening_cleared=screening[ScreeningStatus.CLEARED],
        screening_not_cleared=screening[ScreeningStatus.NOT_CLEARED],
        screening_in_progress=screening[ScreeningStatus.IN_PROGRESS],
        r1_cleared=r1[InterviewStatus.CLEARED],
        r1_not_cleared=r1[InterviewStatus.NOT_CLEARED],
        r1_pending=r1[InterviewStatus.PENDING_R1],
        r2_cleared=r2[InterviewStatus.CLEARED],
        r2_not_cleared=r2[InterviewStatus.NOT_CLEARED],
        r2_pending=r2[InterviewStatus.PENDING_R2],
        r3_cleared=r3[InterviewStatus.CLEARED],
        r3_not_cleared=r3[InterviewStatus.NOT_CLEARED],
        r3_pending=r3[InterviewStatus.PENDING_R3],
        offered=offered,
        joined=joined,
        selected=final[FinalStatus.SELECTED],
        rejected=final[FinalStatus.REJECTED],
        in_progress=sum(final[s] for s in IN_PROGRESS_FINAL_STATUSES),
        on_hold=final[FinalStatus.ON_HOLD],
    )


def calculate_source_distribution(data: Sequence[CandidateRecord]) -> list[SourceDistributionItem]:
    """Group candidates by source and sub-source, largest source first.

    Percentages are whole numbers rounded per source, so they may not sum to
    exactly 100. Sources with equal counts keep their first-seen order.
    """
    if not data:
        return []

    df = pd.DataFrame({
        "source": [r.source or UNKNOWN_SOURCE for r in data],
        "sub_source": [r.sub_source or DIRECT_SUB_SOURCE for r in data],
    })
    total = len(df)
    counts = df.groupby("source", sort=False).size().sort_values(ascending=False, kind="stable")

    items = []
    for source, count in counts.items():
        subs = df[df["source"] == source].groupby("sub_source", sort=False).size()
        items.append(SourceDistributionItem(
            source=source,
            count=int(count),
            percentage=round_half_up(count / total * 100),
            sub_sources=[SubSourceCount(sub, int(n)) for sub, n in subs.items()],
        ))

    logger.debug("Source distribution over %d candidates: %d sources", total, len(items))
    return items


def funnel_stages(metrics: PipelineMetrics) -> list[dict[str, str | int]]:
    return [
        {"name": "Total Candidates", "value": metrics.total_candidates},
        {"name": "Screening Cleared", "value": metrics.screening_cleared},
        {"name": "R1 Cleared", "value": metrics.r1_cleared},
        {"name": "R2 Cleared", "value": metrics.r2_cleared},
        {"name": "R3 Cleared", "value": metrics.r3_cleared},
        {"name": "Offered", "value": metrics.offered},
        {"name": "Joined", "value": metrics.joined},
    ]


def final_status_breakdown(metrics: PipelineMetrics) -> list[dict[str, str | int]]:
    """Final-status buckets for the status chart; empty buckets are omitted."""
    buckets = [
        {"name": "Selected", "value": metrics.selected},
        {"name": "Rejected", "value": metrics.rejected},
        {"name": "In Progress", "value": metrics.in_progress},
        {"name": "On Hold", "value": metrics.on_hold},
    ]
    return [b for b in buckets if b["value"] > 0]


def round_summary(metrics: PipelineMetrics, label: Round) -> dict[str, int | float]:
    prefix = label.value.lower()
    cleared = getattr(metrics, f"{prefix}_cleared")
    not_cleared = getattr(metrics, f"{prefix}_not_cleared")
    return {
        "cleared": cleared,
        "not_cleared": not_cleared,
        "pending": getattr(metrics, f"{prefix}_pending"),
        "pass_rate": safe_rate(cleared, cleared + not_cleared),
    }
