"""Settings from the environment via pydantic-settings.

Variables use the ``COMMITORACLE_`` prefix, e.g. ``COMMITORACLE_OWNER``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the command line front end."""

    model_config = SettingsConfigDict(
        env_prefix="COMMITORACLE_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Persistence
    storage_dir: str = ".commitoracle"

    # Authorization: when set, only this account may deploy or set_commitment
    owner: Optional[str] = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
