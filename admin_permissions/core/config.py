"""Application configuration using Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "permissions.json"
DEFAULT_NAVIGATION_PATH = DATA_DIR / "sidebar.json"


class AppSettings(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ADMIN_PERMS_",
        extra="ignore",
    )

    environment: Literal["local", "test", "staging", "production"] = Field(
        default="local",
        validation_alias="env",
    )
    service_name: str = Field(default="admin-permissions")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)
    catalog_path: str | None = Field(default=None)
    navigation_path: str | None = Field(default=None)
    initial_permissions: List[int] | str = Field(default_factory=list)
    selection_idle_ttl_seconds: float = Field(default=1800.0, gt=0)
    max_selection_sessions: int = Field(default=1000, gt=0)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("initial_permissions", mode="before")
    @classmethod
    def parse_initial_permissions(cls, value: int | str | List[int] | None) -> List[int] | str:
        if value is None or value == "":
            return []
        if isinstance(value, int):
            return [value]
        if isinstance(value, str):
            return [int(code.strip()) for code in value.split(",") if code.strip()]
        return value

    @field_validator("catalog_path", "navigation_path", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return value

    def resolved_catalog_path(self) -> Path:
        return Path(self.catalog_path) if self.catalog_path else DEFAULT_CATALOG_PATH

    def resolved_navigation_path(self) -> Path:
        return Path(self.navigation_path) if self.navigation_path else DEFAULT_NAVIGATION_PATH


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings instance."""

    return AppSettings()
