"""
tagalog_app.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the persistence layer.
- Offer a cached settings instance for the CLI, migrations and services.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (`TAGALOG_*` variables).

    The table namespace prefix is deliberately absent: it is fixed when the
    schema is defined (`tagalog_app.db.base.TABLE_PREFIX`).
    """

    model_config = SettingsConfigDict(env_prefix="TAGALOG_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "tagalog-app"
    log_level: str = "INFO"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./tagalog.db"
    sqlite_foreign_keys: bool = True
    echo_sql: bool = False

    # Learning progress
    page_size: int = Field(default=20, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# SQLite does not enforce foreign keys unless asked per connection; leave
# `sqlite_foreign_keys` on outside of ad-hoc debugging.
