"""Serialize Toggl entries to the CSV import format."""

from __future__ import annotations

import csv
import io
import logging
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO

from timing2toggl.errors import WriteError
from timing2toggl.schema import OUTPUT_HEADER, TogglEntry

logger = logging.getLogger(__name__)

STDOUT = "-"


def write_csv(handle: TextIO, entries: list[TogglEntry]) -> None:
    writer = csv.writer(handle, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for entry in entries:
        writer.writerow(entry.as_row())


def render_csv(entries: list[TogglEntry]) -> str:
    """Return the full import file (header and rows) as text."""

    buffer = io.StringIO()
    write_csv(buffer, entries)
    return buffer.getvalue()


def _target_mode(target: Path) -> int:
    """Mode the output should end up with: the existing file's, else 0666 minus umask."""

    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_file(destination: str, entries: list[TogglEntry]) -> None:
    target = Path(destination)
    try:
        handle = tempfile.NamedTemporaryFile(
            "w",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
            newline="",
            encoding="utf-8",
        )
    except OSError as exc:
        raise WriteError(f'Could not open "{destination}" for writing.') from exc

    try:
        with handle:
            write_csv(handle, entries)
        os.chmod(handle.name, _target_mode(target))
        os.replace(handle.name, target)
    except OSError as exc:
        raise WriteError(f'Could not open "{destination}" for writing.') from exc
    finally:
        if os.path.exists(handle.name):
            os.unlink(handle.name)


def write_entries(destination: str, entries: list[TogglEntry], stdout: Optional[TextIO] = None) -> int:
    """Write ``entries`` to ``destination`` (``-`` for standard output).

    A real file is written to a temporary sibling first and renamed into
    place, so a failed write never leaves a partial file behind.
    """

    if not entries:
        raise ValueError("No entries to write")

    if destination == STDOUT:
        stream = stdout if stdout is not None else sys.stdout
        stream.write(render_csv(entries))
        stream.flush()
    else:
        _write_file(destination, entries)

    logger.debug("Wrote %d entries to %s", len(entries), destination)
    return len(entries)
