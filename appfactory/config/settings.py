from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Main, User, Project, Help, Category
_DEFAULT_SEMANTIC_NAMESPACES: dict[int, bool] = {0: True, 2: True, 4: True, 12: True, 14: True}


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APPFACTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    cache_type: str = Field(default="hash", min_length=1)
    namespaces_with_semantic_links: dict[int, bool] = Field(
        default_factory=lambda: dict(_DEFAULT_SEMANTIC_NAMESPACES)
    )
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return AppSettings()
