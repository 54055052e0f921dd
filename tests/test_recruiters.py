from datetime import datetime

import pytest

from hiring_analytics.config import SLAPolicy
from hiring_analytics.tracker.ingest import parse_tracker_content
from hiring_analytics.tracker.models import CandidateRecord
from hiring_analytics.tracker.recruiters import calculate_all_recruiter_metrics, calculate_recruiter_metrics
from hiring_analytics.utils.types import FinalStatus, ScreeningStatus


@pytest.fixture()
def tracker_records(tracker_csv):
    text = tracker_csv([
        {
            "Sr No.": "1", "Candidate Name": "Asha", "Recruiter Name": "Kiran",
            "Sourcing Date": "2025-01-01T00:00:00", "Screening Date": "2025-01-04T01:00:00",
            "Screening check status": "Cleared", "Final Status": "Selected",
        },
        {
            "Sr No.": "2", "Candidate Name": "Bala", "Recruiter Name": "kiran",
            "Sourcing Date": "1-Jan-2025", "Screening check status": "Not cleared",
        },
        {
            "Sr No.": "3", "Candidate Name": "Chitra", "Recruiter Name": "Rohit",
            "Sourcing Date": "1-Jan-2025", "Screening Date": "10-Jan-2025",
            "Screening check status": "Cleared",
        },
    ])
    return parse_tracker_content(text)


def test_recruiter_metrics_from_tracker_export(tracker_records):
    m = calculate_recruiter_metrics(tracker_records, "Kiran")

    assert m.candidates_sourced == 2
    assert [c.candidate_name for c in m.candidates] == ["Asha", "Bala"]
    assert (m.screening_cleared, m.screening_not_cleared, m.screening_in_progress) == (1, 1, 0)
    assert m.screening_rate == 50.0
    assert m.conversion_rate == 50.0
    assert m.alert_count == 1
    assert m.avg_sourcing_to_screening_hours == 73.0


def test_recruiter_with_no_candidates_has_zero_rates(tracker_records):
    m = calculate_recruiter_metrics(tracker_records, "Nobody")
    assert m.candidates_sourced == 0
    assert m.screening_rate == 0.0
    assert m.conversion_rate == 0.0
    assert m.avg_sourcing_to_screening_hours == 0.0
    assert m.alert_count == 0


def test_average_ignores_negative_and_incomplete_gaps():
    data = [
        CandidateRecord(
            candidate_name="a", recruiter_name="R",
            sourcing_date=datetime(2025, 1, 1), screening_date=datetime(2025, 1, 2),
        ),
        CandidateRecord(
            candidate_name="b", recruiter_name="R",
            sourcing_date=datetime(2025, 1, 5), screening_date=datetime(2025, 1, 1),
        ),
        CandidateRecord(
            candidate_name="c", recruiter_name="R",
            sourcing_date=datetime(2025, 1, 1), screening_date=datetime(2025, 1, 1, 12),
        ),
        CandidateRecord(candidate_name="d", recruiter_name="R", sourcing_date=datetime(2025, 1, 1)),
    ]
    assert calculate_recruiter_metrics(data, "R").avg_sourcing_to_screening_hours == 18.0


def test_alert_threshold_follows_policy():
    data = [
        CandidateRecord(
            candidate_name="a", recruiter_name="R",
            sourcing_date=datetime(2025, 1, 1), screening_date=datetime(2025, 1, 2, 1),
        ),
    ]
    assert calculate_recruiter_metrics(data, "R").alert_count == 0
    assert calculate_recruiter_metrics(data, "R", SLAPolicy(sourcing_to_screening_hours=24)).alert_count == 1


def test_all_recruiter_metrics_sorted_by_name(tracker_records):
    report = calculate_all_recruiter_metrics(tracker_records)
    assert [m.recruiter_name for m in report] == ["Kiran", "Rohit", "kiran"]
    # case-insensitive matching means both spellings see the same candidates
    assert report[0].candidates_sourced == report[2].candidates_sourced == 2
    assert report[1].screening_rate == 100.0
    assert report[1].conversion_rate == 0.0


def test_selected_status_is_normalized_before_counting():
    data = [CandidateRecord(candidate_name="a", recruiter_name="R", final_status=FinalStatus.SELECTED,
                            screening_check_status=ScreeningStatus.IN_PROGRESS)]
    m = calculate_recruiter_metrics(data, "R")
    assert m.conversion_rate == 100.0
    assert m.screening_in_progress == 1
