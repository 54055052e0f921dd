import csv
import io
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# Column layout of the HM sheet; the per-round panelist and feedback columns
# repeat with identical labels.
TRACKER_HEADERS = [
    "Sr No.", "Req Date", "HM Details", "Skill", "Designation", "Location of posting",
    "No. of Openings", "Status", "Candidate Name", "Resume", "Recruiter Name", "Source",
    "Sub Source", "Sourcing Date", "Mobile Number", "Mail Id", "Gender", "Experience",
    "Current CTC", "Expected CTC", "Current Company", "Current location",
    "Notice Period/Last working day", "Date of Birth", "Screening Date", "Test for screening",
    "Recruiter remarks if any", "Screening check status",
    "Date R1 Interview", "Panelist name", "Status of R1", "Date of feedback shared",
    "Date R2 Interview", "Panelist name", "Status of R2", "Date of feedback shared",
    "Date R3 Interview", "Panelist name", "Status of R3", "Date of feedback shared",
    "Assignment Status", "Final Status", "Rejection Reason", "Reason for Others in AM column",
    "Rejection Mailer Date", "Onboarding doc date", "Approval date", "Offer date",
    "Offer Acceptance Date", "PC Request date", "Joining Date", "TTF (60 days)", "Delay in TTF",
    "TTH (30 days)", "Delay in TTH",
]

REPEATED = {"Panelist name", "Date of feedback shared"}


def build_row(headers: list[str], values: dict) -> list[str]:
    """Lay ``values`` out under ``headers``.

    Repeated labels take a list of per-round values, e.g.
    ``{"Panelist name": ["Alice", "Bob", "Carol"]}``.
    """
    seen: dict[str, int] = {}
    row = []
    for header in headers:
        value = values.get(header, "")
        if header in REPEATED:
            index = seen.get(header, 0)
            seen[header] = index + 1
            value = value[index] if isinstance(value, list) and index < len(value) else ""
        row.append(str(value))
    return row


def render_csv(headers: list[str], rows: list[dict], preamble: list[str] | None = None) -> str:
    buf = io.StringIO()
    for line in preamble or []:
        buf.write(line + "\n")
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(headers)
    for values in rows:
        writer.writerow(build_row(headers, values))
    return buf.getvalue()


@pytest.fixture()
def tracker_csv():
    """Build tracker export text from per-row dicts keyed by header label."""

    def _build(rows: list[dict], headers: list[str] | None = None, preamble: list[str] | None = None) -> str:
        if preamble is None:
            preamble = ["TA Tracker - HM Sheet,,,", "Please insert new rows above the last line,,,"]
        return render_csv(headers or TRACKER_HEADERS, rows, preamble)

    return _build
