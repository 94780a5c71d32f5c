"""Configuration schema and loading for inkwell."""

from __future__ import annotations

import os
from pathlib import Path

import pydantic
import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from inkwell.core.errors import ConfigurationError

DEFAULT_DATABASE_URL = "duckdb:///inkwell.duckdb"
DEFAULT_SLUG_MAX_ATTEMPTS = 1000
DATABASE_URL_ENV = "INKWELL_DATABASE_URL"


class BlogConfig(BaseModel):
    """Complete application configuration.

    Attributes:
        database_url: SQLAlchemy URL of the entity store.
        slug_max_attempts: Numeric suffixes tried before the resolver falls
            back to a timestamp suffix.
        slug_max_length: Optional cap on generated slug length, suffixes
            included. At least 16 so a timestamp suffix still fits.
        excerpt_length: Characters of plain text kept in generated excerpts.
        username_min_length: Shortest accepted explicit username.
        username_max_length: Longest accepted explicit username.
        bio_max_length: Longest accepted profile bio.
        list_page_size: Rows shown by listing commands.
    """

    database_url: str = DEFAULT_DATABASE_URL
    slug_max_attempts: int = Field(default=DEFAULT_SLUG_MAX_ATTEMPTS, ge=1, le=100_000)
    slug_max_length: int | None = Field(default=None, ge=16, le=200)
    excerpt_length: int = Field(default=180, ge=1)
    username_min_length: int = Field(default=3, ge=1)
    username_max_length: int = Field(default=30, ge=1, le=100)
    bio_max_length: int = Field(default=500, ge=1)
    list_page_size: int = Field(default=50, ge=1)

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure the database URL is a non-empty string."""
        if not v or not v.strip():
            msg = "database_url cannot be empty"
            raise ValueError(msg)
        return v.strip()

    @model_validator(mode="after")
    def validate_username_bounds(self) -> BlogConfig:
        if self.username_min_length > self.username_max_length:
            msg = "username_min_length must not exceed username_max_length"
            raise ValueError(msg)
        return self


def load_config(path: str | Path | None = None) -> BlogConfig:
    """Load and validate configuration from a YAML file and the environment.

    Values from ``.env`` are loaded first; ``INKWELL_DATABASE_URL`` overrides
    the database URL from the file.

    Args:
        path: Optional path to a YAML configuration file.

    Returns:
        Validated BlogConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If config values fail validation.
    """
    load_dotenv()

    data: dict = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        with config_path.open() as f:
            data = yaml.safe_load(f) or {}

    env_url = os.environ.get(DATABASE_URL_ENV)
    if env_url:
        data["database_url"] = env_url

    try:
        return BlogConfig.model_validate(data)
    except pydantic.ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigurationError(msg, "Check the YAML file and INKWELL_DATABASE_URL.") from e
