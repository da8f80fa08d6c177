"""End-to-end conversion: detect format, read, write, report."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

from timing2toggl.adapters import csv_adapter, json_adapter
from timing2toggl.errors import (
    ConversionError,
    InvalidInputError,
    InvalidOutputError,
    UnsupportedFileTypeError,
)
from timing2toggl.schema import ReadResult
from timing2toggl.writer import STDOUT, write_entries

logger = logging.getLogger(__name__)

Reader = Callable[..., ReadResult]

_READERS: dict[str, Reader] = {
    ".csv": csv_adapter.parse,
    ".json": json_adapter.parse,
}

NO_DATA_MESSAGE = "No data found in input file."
SKIPPED_WARNING = (
    "Some rows might have been skipped due to errors, please check the output file before importing"
)


@dataclass
class ConversionRequest:
    input_path: str
    output: str
    email: str
    project: Optional[str] = None


@dataclass
class ConversionReport:
    written: int
    skipped: bool
    to_stdout: bool


def validate_paths(input_path: str, output: str) -> None:
    if not input_path or not Path(input_path).is_file():
        raise InvalidInputError(f'Could not find input file "{input_path}".')
    if not output:
        raise InvalidOutputError("An output file (or - for standard output) is required.")


def resolve_reader(input_path: str) -> Reader:
    """Pick the reader for ``input_path`` by its extension."""

    reader = _READERS.get(Path(input_path).suffix.lower())
    if reader is None:
        raise UnsupportedFileTypeError()
    return reader


def convert(request: ConversionRequest, stdout: Optional[TextIO] = None) -> ConversionReport:
    """Read the input file and write the Toggl CSV.

    Returns a report with ``written == 0`` when the input holds no entries;
    nothing is written in that case.
    """

    validate_paths(request.input_path, request.output)
    email = (request.email or "").strip()
    if not email:
        raise InvalidInputError("A Toggl account email address is required.")

    reader = resolve_reader(request.input_path)
    result = reader(request.input_path, email, request.project or None)

    to_stdout = request.output == STDOUT
    if not result.entries:
        return ConversionReport(written=0, skipped=result.skipped, to_stdout=to_stdout)

    written = write_entries(request.output, result.entries, stdout=stdout)
    return ConversionReport(written=written, skipped=result.skipped, to_stdout=to_stdout)


def run_conversion(
    request: ConversionRequest,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Convert and report to the user; returns the process exit status."""

    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    try:
        report = convert(request, stdout=out)
    except ConversionError as exc:
        logger.debug("Conversion failed", exc_info=True)
        print(f"[ERROR] {exc}", file=err)
        return 1

    if report.written == 0:
        print(NO_DATA_MESSAGE, file=err if report.to_stdout else out)
        return 0

    if not report.to_stdout:
        if report.skipped:
            print(f"[WARNING] {SKIPPED_WARNING}", file=out)
        print(f"[OK] {report.written} entries have been written.", file=out)
    return 0
