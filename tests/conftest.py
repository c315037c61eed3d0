"""Configuração do pytest para o serviço de intake."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_cached_settings():
    """Settings e singletons são cacheados por processo; isola cada teste."""
    from app import bootstrap
    from config.settings import (
        get_base_settings,
        get_email_settings,
        get_rate_limit_settings,
        get_slack_settings,
    )

    cached = (
        get_base_settings,
        get_email_settings,
        get_rate_limit_settings,
        get_slack_settings,
        bootstrap.get_rate_limiter,
        bootstrap.get_messaging_provider,
        bootstrap.get_notification_provider,
        bootstrap.get_submission_use_case,
    )
    for getter in cached:
        getter.cache_clear()
    yield
    for getter in cached:
        getter.cache_clear()
