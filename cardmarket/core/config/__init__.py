"""Configuration module for the Cardmarket client.

Usage:
    from cardmarket.core.config import get_settings, PayloadFormat

    settings = get_settings()
    if settings.PAYLOAD_FORMAT == PayloadFormat.XML:
        ...
"""

from functools import lru_cache

from cardmarket.core.config.enums import PayloadFormat, TimestampUnit
from cardmarket.core.config.settings import Settings

__all__ = [
    "PayloadFormat",
    "Settings",
    "TimestampUnit",
    "get_settings",
]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance, loaded on first use."""
    return Settings()
