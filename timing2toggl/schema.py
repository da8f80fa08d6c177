"""Record shapes shared by the readers, the normalizer and the writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

OUTPUT_HEADER = ("Email", "Project", "Description", "Start date", "Start time", "Duration")


@dataclass
class RawRecord:
    """Format-neutral view of one source row; missing keys stay ``None``."""

    start: Optional[str]
    duration: Optional[str]
    description: Optional[str]
    project: Optional[str]


@dataclass
class TogglEntry:
    """One row of the Toggl CSV import file."""

    email: str
    project: str
    description: str
    start_date: str
    start_time: str
    duration: str

    def as_row(self) -> list[str]:
        return [self.email, self.project, self.description, self.start_date, self.start_time, self.duration]


@dataclass
class ReadResult:
    """Entries produced by a reader and whether any source row was dropped."""

    skipped: bool = False
    entries: list[TogglEntry] = field(default_factory=list)
