import logging

import pytest

from hiring_analytics.config import LoaderConfig
from hiring_analytics.tracker.ingest import (
    HeaderNotFoundError,
    load_tracker,
    locate_header,
    parse_tracker_content,
)

from conftest import TRACKER_HEADERS


def test_instruction_rows_above_header_are_skipped(tracker_csv):
    text = tracker_csv([
        {"Sr No.": "1", "Candidate Name": "Asha", "Recruiter Name": "Kiran"},
        {"Sr No.": "2", "Candidate Name": "Bala", "Recruiter Name": "Kiran"},
    ])
    records = parse_tracker_content(text)
    assert [r.candidate_name for r in records] == ["Asha", "Bala"]
    assert records[0].recruiter_name == "Kiran"


def test_placeholder_and_blank_rows_are_dropped_in_order(tracker_csv):
    text = tracker_csv([
        {"Sr No.": "1", "Candidate Name": "Asha"},
        {"Sr No.": "Insert new row above this line"},
        {"Sr No.": "2", "Candidate Name": ""},
        {},
        {"Sr No.": "3", "Candidate Name": "Chitra"},
    ])
    records = parse_tracker_content(text)
    assert [r.candidate_name for r in records] == ["Asha", "Chitra"]


def test_quoted_fields_and_positional_rounds_survive_parsing(tracker_csv):
    text = tracker_csv([{
        "Sr No.": "1",
        "Candidate Name": "Doe, Jane",
        "Panelist name": ["Alice", "Bob (backup: Dan)", "Carol"],
        "Date of feedback shared": ["3-Feb-2025", "", ""],
    }])
    [record] = parse_tracker_content(text)
    assert record.candidate_name == "Doe, Jane"
    assert record.panelist_name_r2 == "Bob (backup: Dan)"
    assert record.panelist_name_r3 == "Carol"
    assert record.date_of_feedback_shared_r1 is not None


def test_rows_wider_or_narrower_than_header_are_tolerated():
    text = "Sr No.,Candidate Name,Skill\n1,Asha,Java,extra,cells\n2,Bala\n"
    records = parse_tracker_content(text)
    assert [(r.candidate_name, r.skill) for r in records] == [("Asha", "Java"), ("Bala", "")]


def test_crlf_line_endings():
    text = "Sr No.,Candidate Name\r\n1,Asha\r\n2,Bala\r\n"
    assert [r.candidate_name for r in parse_tracker_content(text)] == ["Asha", "Bala"]


def test_missing_anchor_falls_back_to_first_line(caplog):
    text = "No.,Candidate Name\n1,Asha\n"
    with caplog.at_level(logging.WARNING):
        records = parse_tracker_content(text)
    assert [r.candidate_name for r in records] == ["Asha"]
    assert "not found" in caplog.text


def test_missing_anchor_raises_when_header_required():
    with pytest.raises(HeaderNotFoundError):
        parse_tracker_content("No.,Candidate Name\n1,Asha\n", LoaderConfig(require_header=True))


def test_anchor_outside_scan_window_is_not_found():
    lines = ["title"] * 10 + ["Sr No.,Candidate Name"]
    assert locate_header(lines, "Sr No.", 10) is None
    assert locate_header(lines, "Sr No.", 11) == 10


def test_empty_content_yields_no_records():
    assert parse_tracker_content("") == []


def test_unexpected_round_layout_is_reported(caplog):
    headers = [h for h in TRACKER_HEADERS if h != "Panelist name"] + ["Panelist name", "Panelist name"]
    text = ",".join(headers) + "\n1," + ",".join([""] * (len(headers) - 1)) + "\n"
    with caplog.at_level(logging.WARNING):
        parse_tracker_content(text)
    assert "appears 2 times" in caplog.text


def test_load_tracker_reads_from_disk(tmp_path, tracker_csv):
    path = tmp_path / "tracker.csv"
    path.write_text(tracker_csv([{"Sr No.": "1", "Candidate Name": "Asha"}]), encoding="utf-8")
    assert [r.candidate_name for r in load_tracker(path)] == ["Asha"]


def test_load_tracker_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tracker(tmp_path / "missing.csv")
