"""Configuration management module."""

from .settings import (
    AppSettings,
    CacheConfig,
    SearchSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "CacheConfig",
    "SearchSettings",
    "get_settings",
]
