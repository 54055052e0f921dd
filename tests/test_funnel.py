from datetime import datetime

from hiring_analytics.tracker.funnel import (
    calculate_pipeline_metrics,
    calculate_source_distribution,
    final_status_breakdown,
    funnel_stages,
    round_summary,
)
from hiring_analytics.tracker.models import CandidateRecord, PipelineMetrics
from hiring_analytics.utils.types import FinalStatus, InterviewStatus, Round, ScreeningStatus


def _candidate(name, **kwargs):
    return CandidateRecord(candidate_name=name, **kwargs)


def test_pipeline_metrics_count_each_stage():
    data = [
        _candidate(
            "a", screening_check_status=ScreeningStatus.CLEARED,
            status_of_r1=InterviewStatus.CLEARED, status_of_r2=InterviewStatus.CLEARED,
            status_of_r3=InterviewStatus.CLEARED, final_status=FinalStatus.SELECTED,
            offer_date=datetime(2025, 2, 1), joining_date=datetime(2025, 3, 1),
        ),
        _candidate(
            "b", screening_check_status=ScreeningStatus.CLEARED,
            status_of_r1=InterviewStatus.NOT_CLEARED, final_status=FinalStatus.REJECTED,
        ),
        _candidate(
            "c", screening_check_status=ScreeningStatus.CLEARED,
            status_of_r1=InterviewStatus.CLEARED, status_of_r2=InterviewStatus.PENDING_R2,
            final_status=FinalStatus.PENDING_R2,
        ),
        _candidate("d", screening_check_status=ScreeningStatus.NOT_CLEARED, final_status=FinalStatus.ON_HOLD),
        _candidate("e", screening_check_status=ScreeningStatus.IN_PROGRESS, final_status=FinalStatus.IN_PROGRESS),
        _candidate("f"),
    ]
    metrics = calculate_pipeline_metrics(data)

    assert metrics.total_candidates == 6
    assert (metrics.screening_cleared, metrics.screening_not_cleared, metrics.screening_in_progress) == (3, 1, 1)
    assert (metrics.r1_cleared, metrics.r1_not_cleared, metrics.r1_pending) == (2, 1, 0)
    assert (metrics.r2_cleared, metrics.r2_pending) == (1, 1)
    assert metrics.r3_cleared == 1
    assert (metrics.offered, metrics.joined) == (1, 1)
    assert (metrics.selected, metrics.rejected, metrics.in_progress, metrics.on_hold) == (1, 1, 2, 1)


def test_pipeline_metrics_empty_input():
    assert calculate_pipeline_metrics([]) == PipelineMetrics()


def test_pending_status_only_counts_in_its_own_round():
    metrics = calculate_pipeline_metrics([_candidate("a", status_of_r1=InterviewStatus.PENDING_R2)])
    assert metrics.r1_pending == 0
    assert metrics.r2_pending == 0


def test_source_distribution_orders_by_count_with_defaults():
    data = [
        _candidate("a", source="Referral", sub_source="Employee"),
        _candidate("b", source="Naukri", sub_source="Search"),
        _candidate("c", source="Naukri"),
        _candidate("d", source="Naukri", sub_source="Search"),
        _candidate("e"),
    ]
    items = calculate_source_distribution(data)

    assert [(i.source, i.count, i.percentage) for i in items] == [
        ("Naukri", 3, 60),
        ("Referral", 1, 20),
        ("Unknown", 1, 20),
    ]
    naukri = items[0]
    assert [(s.sub_source, s.count) for s in naukri.sub_sources] == [("Search", 2), ("Direct", 1)]
    assert items[2].sub_sources[0].sub_source == "Direct"


def test_source_distribution_counts_are_consistent():
    data = [_candidate(str(n), source=["A", "B", "C"][n % 3], sub_source=str(n % 2)) for n in range(7)]
    items = calculate_source_distribution(data)

    assert sum(i.count for i in items) == len(data)
    for item in items:
        assert sum(s.count for s in item.sub_sources) == item.count
    # 3/7, 2/7, 2/7 rounded separately
    assert [i.percentage for i in items] == [43, 29, 29]


def test_source_distribution_empty():
    assert calculate_source_distribution([]) == []


def test_funnel_stages_order():
    metrics = PipelineMetrics(total_candidates=10, screening_cleared=6, offered=2, joined=1)
    stages = funnel_stages(metrics)
    assert [s["name"] for s in stages] == [
        "Total Candidates", "Screening Cleared", "R1 Cleared", "R2 Cleared", "R3 Cleared", "Offered", "Joined",
    ]
    assert stages[0]["value"] == 10
    assert stages[-1]["value"] == 1


def test_final_status_breakdown_omits_empty_buckets():
    metrics = PipelineMetrics(selected=2, on_hold=1)
    assert final_status_breakdown(metrics) == [
        {"name": "Selected", "value": 2},
        {"name": "On Hold", "value": 1},
    ]


def test_round_summary_pass_rate():
    metrics = PipelineMetrics(r2_cleared=3, r2_not_cleared=1, r2_pending=4)
    summary = round_summary(metrics, Round.R2)
    assert summary == {"cleared": 3, "not_cleared": 1, "pending": 4, "pass_rate": 75.0}
    assert round_summary(metrics, Round.R3)["pass_rate"] == 0.0
