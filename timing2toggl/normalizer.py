"""Turn raw source records into Toggl entries."""

from __future__ import annotations

import enum
import logging
import re
from typing import Callable, Iterable, Optional, TypeVar

import pandas as pd

from timing2toggl.duration import reformat
from timing2toggl.errors import MalformedTimestampError, MissingFieldError, RecordError
from timing2toggl.schema import RawRecord, ReadResult, TogglEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FIELD_LABELS = {
    "start": "start date",
    "duration": "duration",
    "description": "title",
}

# dd.mm.yyyy and dd-mm-yyyy are day-first; slashed dates stay month-first.
_DAY_FIRST = re.compile(r"\s*\d{1,2}[.-]\d{1,2}[.-]\d{4}\b")


class ErrorPolicy(enum.Enum):
    """What a batch does when one record fails to convert."""

    CONTINUE = "continue"
    ABORT = "abort"


def split_timestamp(value: str, to_utc: bool = False) -> tuple[str, str]:
    """Parse ``value`` and return its ``(YYYY-MM-DD, HH:MM:SS)`` components.

    With ``to_utc`` an offset-aware timestamp is converted to UTC first; a
    naive one is taken as UTC already. Without it the wall-clock components
    are used as written.
    """

    if not isinstance(value, str):
        raise MalformedTimestampError(f"start date must be a string, got {value!r}")

    try:
        if _DAY_FIRST.match(value):
            stamp = pd.to_datetime(value, dayfirst=True)
        else:
            stamp = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise MalformedTimestampError(f"malformed start date '{value}'") from exc

    if pd.isna(stamp):
        raise MalformedTimestampError(f"malformed start date '{value}'")

    if to_utc and stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC")
    return (
        f"{stamp.year:04d}-{stamp.month:02d}-{stamp.day:02d}",
        f"{stamp.hour:02d}:{stamp.minute:02d}:{stamp.second:02d}",
    )


def normalize(
    raw: RawRecord,
    email: str,
    project: Optional[str] = None,
    to_utc: bool = False,
) -> TogglEntry:
    """Build a Toggl entry from one raw record.

    A non-empty ``project`` overrides the record's own project.
    """

    missing = [label for name, label in _FIELD_LABELS.items() if getattr(raw, name) is None]
    resolved_project = project or raw.project
    if resolved_project is None:
        missing.append("project")
    if missing:
        raise MissingFieldError(f"missing required fields {missing}")

    start_date, start_time = split_timestamp(raw.start, to_utc=to_utc)
    return TogglEntry(
        email=email,
        project=str(resolved_project),
        description=str(raw.description),
        start_date=start_date,
        start_time=start_time,
        duration=reformat(raw.duration),
    )


def collect(
    items: Iterable[tuple[str, T]],
    build: Callable[[T], TogglEntry],
    policy: ErrorPolicy,
) -> ReadResult:
    """Run ``build`` over labelled items under the given error policy.

    ``CONTINUE`` drops failing records and flags the result as skipped;
    ``ABORT`` re-raises the first failure and nothing is returned.
    """

    result = ReadResult()
    for location, item in items:
        try:
            result.entries.append(build(item))
        except RecordError as exc:
            exc.location = exc.location or location
            if policy is ErrorPolicy.ABORT:
                raise
            logger.warning("Skipping %s", exc)
            result.skipped = True
    return result
