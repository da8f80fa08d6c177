"""Environment-backed defaults for the converter."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class ConverterSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    email: Optional[str] = Field(default=None, validation_alias="TOGGL_EMAIL")
    project: Optional[str] = Field(default=None, validation_alias="TOGGL_PROJECT")
    log_level: str = Field(
        default="WARNING",
        validation_alias="TIMING2TOGGL_LOG_LEVEL",
    )

    @field_validator("email", "project", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _default_level(cls, value: object) -> object:
        return _blank_to_none(value) or "WARNING"

    def merged(self, email: Optional[str] = None, project: Optional[str] = None) -> "ConverterSettings":
        """Return settings where non-blank explicit values win over these."""

        return self.model_copy(
            update={
                "email": _blank_to_none(email) or self.email,
                "project": _blank_to_none(project) or self.project,
            }
        )


def load_settings() -> ConverterSettings:
    return ConverterSettings()
