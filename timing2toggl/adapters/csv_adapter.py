"""CSV reader for Timing exports."""

from __future__ import annotations

import csv
import logging
from typing import Iterator, Optional

from timing2toggl.errors import FileReadError, MalformedRowError
from timing2toggl.normalizer import ErrorPolicy, collect, normalize
from timing2toggl.schema import RawRecord, ReadResult, TogglEntry

logger = logging.getLogger(__name__)

_DELIMITERS = ",;\t|"
_SNIFF_BYTES = 64 * 1024


def _load_rows(file_path: str) -> list[list[str]]:
    try:
        with open(file_path, newline="", encoding="utf-8-sig") as handle:
            sample = handle.read(_SNIFF_BYTES)
            handle.seek(0)
            # Only the delimiter is sniffed; quoting is always the standard double quote.
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=_DELIMITERS).delimiter
            except csv.Error:
                delimiter = ","
            return list(csv.reader(handle, delimiter=delimiter))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise FileReadError(f'Could not read CSV file "{file_path}": {exc}') from exc


def _combine(headers: list[str], cells: list[str]) -> dict[str, str]:
    if len(cells) != len(headers):
        raise MalformedRowError(f"expected {len(headers)} columns, found {len(cells)}")
    return dict(zip(headers, cells))


def _labelled_rows(rows: list[list[str]]) -> Iterator[tuple[str, list[str]]]:
    for row_number, cells in enumerate(rows, start=2):
        if not any(cell.strip() for cell in cells):
            continue
        yield f"Row {row_number}", cells


def to_raw_record(row: dict[str, str]) -> RawRecord:
    """Map a lower-cased header row onto the format-neutral record."""

    return RawRecord(
        start=row.get("start date"),
        duration=row.get("duration"),
        description=row.get("task title"),
        project=row.get("project"),
    )


def parse(
    file_path: str,
    email: str,
    project: Optional[str] = None,
    policy: ErrorPolicy = ErrorPolicy.CONTINUE,
) -> ReadResult:
    """Parse a CSV export into Toggl entries.

    The first row is the header, matched case-insensitively. Timestamps keep
    their wall-clock components.
    """

    rows = _load_rows(file_path)
    if not rows:
        return ReadResult()

    headers = [cell.strip().lower() for cell in rows[0]]

    def build(cells: list[str]) -> TogglEntry:
        return normalize(to_raw_record(_combine(headers, cells)), email, project)

    result = collect(_labelled_rows(rows[1:]), build, policy)
    logger.info("Read %d entries from %s", len(result.entries), file_path)
    return result
