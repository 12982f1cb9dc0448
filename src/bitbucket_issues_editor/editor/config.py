"""Configuration for the editor.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

None of the settings are required; the defaults reproduce the plain behaviour of
printing compact JSON and only logging warnings.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EditorSettings(BaseSettings):
    """Settings for the editor CLI.

    Environment variables:
    - LOG_LEVEL                  (optional)
    - ISSUE_EDITOR_JSON_INDENT   (optional)
    - ISSUE_EDITOR_ENSURE_ASCII  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `EditorSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    json_indent: int | None = Field(
        default=None,
        ge=0,
        validation_alias="ISSUE_EDITOR_JSON_INDENT",
        description="Indent for JSON output; unset or 0 prints compact JSON",
    )

    ensure_ascii: bool = Field(
        default=False,
        validation_alias="ISSUE_EDITOR_ENSURE_ASCII",
        description="Escape non-ASCII characters in JSON output",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized
