"""Configuration management for the tree store server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .storage.paths import is_valid_name


class Settings(BaseSettings):
    """Centralised runtime configuration for the server."""

    model_config = SettingsConfigDict(
        env_prefix="TREE_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )

    # General
    project_root: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parents[2],
        description="Root directory of the project repository.",
    )
    data_dir: Path = Field(
        default=Path("tree-data"),
        description="Storage root holding one directory per group (relative to project_root unless absolute).",
    )

    # Seed layout
    default_group: str = Field(default="Default_Group")
    default_file: str = Field(default="Default_File.json")
    secondary_group: str = Field(default="Second_Group")
    seed_file: Optional[Path] = Field(
        default=None,
        description="YAML or JSON file replacing the built-in sample tree on first run.",
    )

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=54321)
    log_level: str = Field(default="info")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    static_dir: Optional[Path] = Field(
        default=None,
        description="Directory of static client files served at '/'.",
    )

    @field_validator("default_group", "default_file", "secondary_group")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not is_valid_name(value):
            raise ValueError(f"{value!r} is not a valid group or file name")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return value.lower()

    @property
    def storage_root(self) -> Path:
        if self.data_dir.is_absolute():
            return self.data_dir
        return self.project_root / self.data_dir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
