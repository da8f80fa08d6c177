"""Parsing and rendering of ``H:M:S`` elapsed-time values."""

from __future__ import annotations

from dataclasses import dataclass

from timing2toggl.errors import MalformedDurationError


@dataclass(frozen=True)
class Duration:
    """Elapsed time split into components; hours are not capped at 24."""

    hours: int
    minutes: int
    seconds: int

    @classmethod
    def parse(cls, value: object) -> "Duration":
        """Parse ``H:M:S``. Minutes and seconds are passed through unvalidated."""

        if not isinstance(value, str):
            raise MalformedDurationError(f"duration must be a string, got {value!r}")

        parts = value.strip().split(":")
        if len(parts) != 3:
            raise MalformedDurationError(f"malformed duration '{value}'")

        parts = [part.strip() for part in parts]
        if not all(part.isascii() and part.isdigit() for part in parts):
            raise MalformedDurationError(f"malformed duration '{value}'")

        hours, minutes, seconds = (int(part) for part in parts)
        return cls(hours, minutes, seconds)

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def format(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"


def reformat(value: object) -> str:
    """Return ``value`` re-rendered as zero-padded ``HH:MM:SS``."""

    return Duration.parse(value).format()
