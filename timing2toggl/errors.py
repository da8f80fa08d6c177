"""Error types raised during a conversion run."""

from __future__ import annotations

from typing import Optional


class ConversionError(ValueError):
    """Base class for every failure the converter reports to the user."""


class InvalidInputError(ConversionError):
    pass


class InvalidOutputError(ConversionError):
    pass


class UnsupportedFileTypeError(ConversionError):
    def __init__(self, message: str = "This file type is not supported.") -> None:
        super().__init__(message)


class FileReadError(ConversionError):
    pass


class WriteError(ConversionError):
    pass


class RecordError(ConversionError):
    """A single source record could not be converted.

    ``location`` is filled in by the batch layer (``Row 3``, ``Item 2``) and
    prefixes the message.
    """

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        super().__init__(message)
        self.reason = message
        self.location = location

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.reason}"
        return self.reason


class MalformedDurationError(RecordError):
    pass


class MalformedTimestampError(RecordError):
    pass


class MissingFieldError(RecordError):
    pass


class MalformedRowError(RecordError):
    pass
