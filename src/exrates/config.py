"""
Exchange Rates Configuration Management

Settings are read from environment variables prefixed with ``EXRATES_``
or from a local ``.env`` file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # === Rates Service ===
    api_base_url: str = Field(
        default="https://api.ratesapi.io",
        description="Root URL of the exchange rates service"
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout in seconds for the default transport"
    )

    model_config = {
        "env_prefix": "EXRATES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
