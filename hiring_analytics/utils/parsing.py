"""Tolerant parsers for tracker cells and elapsed-time helpers.

Every parser here maps a raw spreadsheet token onto either a real value or
``None``. Nothing raises for bad data: a cell that cannot be read is simply
absent, and callers treat absence as "no information".
"""

import logging
import math
import re
from datetime import datetime

import pandas as pd

from hiring_analytics.utils.types import AWAITING_OUTCOME_STATUSES, MaybeDate, MaybeNumber

logger = logging.getLogger(__name__)

# Regional layouts seen in tracker exports, tried in order. Ambiguous values
# such as 01/02/2025 therefore resolve day-first.
DATE_FORMATS = (
    "%d-%b-%Y",   # 1-Dec-2025
    "%d-%b-%y",   # 1-Dec-25
    "%Y-%m-%d",   # 2025-12-01
    "%d/%m/%Y",   # 01/12/2025
    "%d/%m/%y",   # 01/12/25
    "%m/%d/%Y",   # 12/31/2025
)

MIN_FALLBACK_YEAR = 1990
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

_ABSENT_TOKENS = frozenset({"", "-", "0"})
_NEGATIVE_SERIAL = re.compile(r"-\d+")
_NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def _fallback_parse(token: str) -> MaybeDate:
    """Last-resort parse through pandas; rejects implausibly old results."""
    parsed = pd.to_datetime(token, errors="coerce")
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    if parsed.year <= MIN_FALLBACK_YEAR:
        logger.debug("Discarding fallback date %r (year %d)", token, parsed.year)
        return None
    return parsed.to_pydatetime()


def parse_date(value: str | None) -> MaybeDate:
    """Parse a tracker date cell, returning ``None`` when it holds no usable date."""
    if value is None:
        return None
    token = str(value).strip()
    if token in _ABSENT_TOKENS:
        return None

    # A negative integer is a spreadsheet serial left behind by a broken formula.
    if _NEGATIVE_SERIAL.fullmatch(token):
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(token, fmt)
        except ValueError:
            continue

    return _fallback_parse(token)


def parse_number(value: str | None) -> MaybeNumber:
    """Parse a numeric cell, ignoring currency symbols, commas and units."""
    if value is None:
        return None
    token = str(value).strip()
    if token in ("", "-"):
        return None

    cleaned = re.sub(r"[^0-9.\-]", "", token)
    match = _NUMBER_PREFIX.match(cleaned)
    if match is None:
        return None
    return float(match.group())


def elapsed_hours(start: MaybeDate, end: MaybeDate) -> float | None:
    """Exact wall-clock hours from ``start`` to ``end``."""
    if start is None or end is None:
        return None
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def time_difference_hours(start: MaybeDate, end: MaybeDate) -> int | None:
    """Whole hours from ``start`` to ``end``, truncated toward zero."""
    hours = elapsed_hours(start, end)
    if hours is None:
        return None
    return math.trunc(hours)


def elapsed_days(start: MaybeDate, end: MaybeDate) -> int | None:
    """Whole calendar days from ``start`` to ``end``, truncated toward zero."""
    if start is None or end is None:
        return None
    return math.trunc((end - start).total_seconds() / SECONDS_PER_DAY)


def is_48_hour_alert_triggered(
    start: MaybeDate,
    end: MaybeDate,
    threshold_hours: float = 48,
) -> bool:
    """True when strictly more than ``threshold_hours`` passed between the two dates."""
    hours = elapsed_hours(start, end)
    return hours is not None and hours > threshold_hours


def is_feedback_pending(interview_date: MaybeDate, feedback_date: MaybeDate, status: str) -> bool:
    """An interview took place, no feedback is recorded and the round has no outcome yet."""
    if interview_date is None or feedback_date is not None:
        return False
    return status in AWAITING_OUTCOME_STATUSES


def safe_rate(numerator: int | float, denominator: int | float) -> float:
    """Percentage of ``numerator`` over ``denominator``; 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return (numerator / denominator) * 100


def format_rate(rate: float | None) -> str:
    if rate is None or math.isnan(rate):
        return "0.0%"
    return f"{rate:.1f}%"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_hours_to_readable(hours: float | None) -> str:
    """Render an hour count as ``5h``, ``2d`` or ``2d 3h``."""
    if hours is None:
        return "N/A"
    if hours < 24:
        return f"{round_half_up(hours)}h"

    days = math.floor(hours / 24)
    remaining = round_half_up(hours % 24)
    if remaining == 24:
        days, remaining = days + 1, 0

    match remaining:
        case 0:
            return f"{days}d"
        case _:
            return f"{days}d {remaining}h"


def format_date(value: MaybeDate) -> str:
    if value is None:
        return "-"
    return value.strftime("%d %b %Y")
