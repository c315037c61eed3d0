"""Factories: criação de implementações concretas a partir das settings.

Centraliza o wiring dos colaboradores (Slack, Postmark), do limitador
de admissão e do use case de submissão.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.postmark import create_postmark_client
from api.connectors.slack import create_slack_client
from app.infra.stores.rate_limiter import AdmissionControl, FixedWindowRateLimiter
from app.services.operations_log import OperationsLog
from app.use_cases.submission import ProcessSubmissionUseCase, SubmissionConfig
from config.settings import (
    get_email_settings,
    get_rate_limit_settings,
    get_slack_settings,
)

if TYPE_CHECKING:
    from api.connectors.postmark import PostmarkEmailClient
    from api.connectors.slack import SlackWebClient
    from app.protocols.messaging import MessagingProviderProtocol
    from app.protocols.notification import NotificationProviderProtocol
    from app.protocols.rate_limiter import RateLimiterProtocol

logger = logging.getLogger(__name__)


def create_rate_limiter() -> FixedWindowRateLimiter:
    """Limitador em memória (um por processo)."""
    limiter = FixedWindowRateLimiter()
    logger.info("rate_limiter_created", extra={"component": "bootstrap", "backend": "memory"})
    return limiter


def create_admission_control(limiter: RateLimiterProtocol) -> AdmissionControl:
    settings = get_rate_limit_settings()
    return AdmissionControl(limiter, settings.limit, settings.window_seconds)


def create_messaging_provider() -> SlackWebClient:
    client = create_slack_client()
    logger.info("messaging_provider_created", extra={"component": "bootstrap", "provider": "slack"})
    return client


def create_notification_provider() -> PostmarkEmailClient:
    settings = get_email_settings()
    if not settings.is_configured:
        logger.warning(
            "notification_provider_not_configured",
            extra={"component": "bootstrap", "provider": "postmark"},
        )
    return create_postmark_client(settings)


def create_operations_log(messaging: MessagingProviderProtocol) -> OperationsLog:
    return OperationsLog(messaging, get_slack_settings().log_channel_id)


def create_submission_config() -> SubmissionConfig:
    slack = get_slack_settings()
    return SubmissionConfig(
        workspace_id=slack.workspace_id,
        guild_group_id=slack.guild_group_id,
        channel_prefix=slack.channel_prefix,
        reject_free_email_domains=get_rate_limit_settings().reject_free_email_domains,
    )


def create_submission_use_case(
    *,
    messaging: MessagingProviderProtocol,
    notification: NotificationProviderProtocol,
    limiter: RateLimiterProtocol,
) -> ProcessSubmissionUseCase:
    """Monta o use case com colaboradores explícitos."""
    return ProcessSubmissionUseCase(
        messaging=messaging,
        notification=notification,
        admission=create_admission_control(limiter),
        ops_log=create_operations_log(messaging),
        config=create_submission_config(),
    )
