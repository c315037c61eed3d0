"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    APP_VERSION,
    BaseSettings,
    Environment,
    get_base_settings,
)

__all__ = [
    "APP_VERSION",
    "BaseSettings",
    "Environment",
    "get_base_settings",
]
