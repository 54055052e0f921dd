"""Load a TA tracker CSV export into normalized candidate records."""

import io
import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from hiring_analytics.config import DEFAULT_LOADER_CONFIG, LoaderConfig
from hiring_analytics.tracker.models import CandidateRecord
from hiring_analytics.tracker.transform import (
    FEEDBACK_LABEL,
    PANELIST_LABEL,
    count_round_slots,
    normalize_row,
)
from hiring_analytics.utils.io import FilePath, read_tracker_file
from hiring_analytics.utils.validators import check_round_slots

logger = logging.getLogger(__name__)


class HeaderNotFoundError(ValueError):
    """The header anchor was not found where the tracker layout puts it."""


def locate_header(lines: Sequence[str], anchor: str, scan_lines: int) -> int | None:
    """Index of the first line within ``scan_lines`` that contains ``anchor``."""
    for index, line in enumerate(lines[:scan_lines]):
        if anchor in line:
            return index
    return None


def _read_table(content: str) -> pd.DataFrame:
    """Parse delimited text into an all-string frame, header row included as row 0."""
    try:
        head = pd.read_csv(io.StringIO(content), header=None, nrows=1, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()

    width = head.shape[1]
    # Rows wider than the header are truncated; short rows are padded below.
    table = pd.read_csv(
        io.StringIO(content),
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=lambda bad_line: bad_line[:width],
    )
    return table.fillna("")


def _warn_on_slot_mismatch(headers: list[str], expected: int) -> None:
    counts = {
        PANELIST_LABEL: count_round_slots(headers, PANELIST_LABEL),
        FEEDBACK_LABEL: count_round_slots(headers, FEEDBACK_LABEL),
    }
    result = check_round_slots(counts, expected)
    for error in result["errors"]:
        logger.warning("Round column layout: %s", error)


def parse_tracker_content(
    content: str,
    config: LoaderConfig = DEFAULT_LOADER_CONFIG,
) -> list[CandidateRecord]:
    """Turn the text of a tracker export into records, in source row order.

    Title and instruction rows above the header are skipped by looking for
    the header anchor in the first ``config.header_scan_lines`` lines.
    """
    lines = content.split("\n")
    header_index = locate_header(lines, config.header_anchor, config.header_scan_lines)
    if header_index is None:
        if config.require_header:
            raise HeaderNotFoundError(
                f"No line containing {config.header_anchor!r} in the first "
                f"{config.header_scan_lines} lines"
            )
        logger.warning(
            "Header anchor %r not found in first %d lines; parsing from line 0",
            config.header_anchor, config.header_scan_lines,
        )
        header_index = 0

    table = _read_table("\n".join(lines[header_index:]))
    if table.empty:
        logger.warning("Tracker content is empty")
        return []

    headers = [str(h).strip() for h in table.iloc[0]]
    _warn_on_slot_mismatch(headers, config.expected_round_slots)

    records: list[CandidateRecord] = []
    dropped = 0
    for cells in table.iloc[1:].itertuples(index=False, name=None):
        record = normalize_row(list(cells), headers)
        if record is None:
            dropped += 1
            logger.debug("Dropped non-candidate row: %r", cells[:3])
            continue
        records.append(record)

    logger.info("Loaded %d candidate records (%d rows dropped)", len(records), dropped)
    return records


def load_tracker(path: FilePath, config: LoaderConfig = DEFAULT_LOADER_CONFIG) -> list[CandidateRecord]:
    """Read a tracker export from disk and normalize it."""
    logger.info("Reading tracker export: %s", Path(path).name)
    return parse_tracker_content(read_tracker_file(path), config)
