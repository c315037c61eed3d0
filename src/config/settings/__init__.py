"""Agregador de settings do serviço de intake.

Re-exporta todas as settings e funções de cada módulo.
Organização por colaborador para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    APP_VERSION,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Email (Postmark)
from config.settings.email import (
    POSTMARK_API_URL,
    EmailSettings,
    get_email_settings,
)

# Admissão
from config.settings.rate_limit import (
    RateLimitSettings,
    get_rate_limit_settings,
)

# Slack
from config.settings.slack import (
    DEFAULT_CHANNEL_PREFIX,
    SLACK_API_BASE_URL,
    SlackSettings,
    get_slack_settings,
)

__all__ = [
    # Constants
    "APP_VERSION",
    "DEFAULT_CHANNEL_PREFIX",
    "POSTMARK_API_URL",
    "SLACK_API_BASE_URL",
    # Base
    "BaseSettings",
    # Collaborators
    "EmailSettings",
    "Environment",
    "RateLimitSettings",
    "SlackSettings",
    "get_base_settings",
    "get_email_settings",
    "get_rate_limit_settings",
    "get_slack_settings",
]
