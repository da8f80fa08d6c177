"""JSON reader for Timing exports."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from timing2toggl.errors import FileReadError, MissingFieldError
from timing2toggl.normalizer import ErrorPolicy, collect, normalize
from timing2toggl.schema import RawRecord, ReadResult, TogglEntry

logger = logging.getLogger(__name__)


def to_raw_record(item: Any) -> RawRecord:
    """Map one exported JSON object onto the format-neutral record."""

    if not isinstance(item, dict):
        raise MissingFieldError(f"expected an object, got {type(item).__name__}")

    title = item.get("activityTitle")
    if title is None:
        title = item.get("taskActivityTitle")

    return RawRecord(
        start=item.get("startDate"),
        duration=item.get("duration"),
        description=title,
        project=item.get("project"),
    )


def parse(
    file_path: str,
    email: str,
    project: Optional[str] = None,
    policy: ErrorPolicy = ErrorPolicy.ABORT,
) -> ReadResult:
    """Parse a JSON export (a top-level array) into Toggl entries.

    Start timestamps are normalized to UTC.
    """

    try:
        with open(file_path, encoding="utf-8-sig") as handle:
            payload = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FileReadError(f'Could not read JSON file "{file_path}": {exc}') from exc

    if not isinstance(payload, list):
        raise FileReadError(f'JSON file "{file_path}" must contain a list of objects')

    def build(item: Any) -> TogglEntry:
        return normalize(to_raw_record(item), email, project, to_utc=True)

    items = ((f"Item {index}", item) for index, item in enumerate(payload, start=1))
    result = collect(items, build, policy)
    logger.info("Read %d entries from %s", len(result.entries), file_path)
    return result
