"""
Application settings.

Values come from environment variables prefixed with ``BOOKSHELF_``
(or a local ``.env`` file). The only setting the catalog core needs is
the path of the backing file; when it is absent ``Book.txt`` in the
working directory is used.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PATH_TO_FILE = Path("Book.txt")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOOKSHELF_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    path_to_file: Path = Field(
        default=DEFAULT_PATH_TO_FILE,
        description="File the catalog is persisted to.",
    )

    @field_validator("path_to_file", mode="before")
    @classmethod
    def _not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("path_to_file must not be blank")
        return value


def get_settings() -> Settings:
    """Load settings, falling back to defaults when they cannot be read."""
    try:
        return Settings()
    except ValidationError as exc:
        logger.warning("Invalid bookshelf settings, using defaults: %s", exc)
        return Settings.model_construct(path_to_file=DEFAULT_PATH_TO_FILE)
