"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging, valida settings e mantém os
singletons por processo (clientes HTTP, limitador, use case).

Uso:
    from app.bootstrap import initialize_app, get_submission_use_case

    initialize_app()
    use_case = get_submission_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_email_settings,
    get_rate_limit_settings,
    get_slack_settings,
)
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from api.connectors.postmark import PostmarkEmailClient
    from api.connectors.slack import SlackWebClient
    from app.infra.stores.rate_limiter import FixedWindowRateLimiter
    from app.use_cases.submission import ProcessSubmissionUseCase

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id. Chamar uma vez no boot."""
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        ConfigurationError: settings inválidas em ambiente estrito.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"slack: {error}" for error in get_slack_settings().validate())
    errors.extend(f"email: {error}" for error in get_email_settings().validate())
    errors.extend(f"rate_limit: {error}" for error in get_rate_limit_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise ConfigurationError(f"Configuração inválida para {base.environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Singletons (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_rate_limiter() -> FixedWindowRateLimiter:
    """Limitador compartilhado por todas as requisições do processo."""
    from app.bootstrap.dependencies import create_rate_limiter

    return create_rate_limiter()


@lru_cache(maxsize=1)
def get_messaging_provider() -> SlackWebClient:
    from app.bootstrap.dependencies import create_messaging_provider

    return create_messaging_provider()


@lru_cache(maxsize=1)
def get_notification_provider() -> PostmarkEmailClient:
    from app.bootstrap.dependencies import create_notification_provider

    return create_notification_provider()


@lru_cache(maxsize=1)
def get_submission_use_case() -> ProcessSubmissionUseCase:
    """Use case de submissão (singleton), usado como dependência FastAPI."""
    from app.bootstrap.dependencies import create_submission_use_case

    return create_submission_use_case(
        messaging=get_messaging_provider(),
        notification=get_notification_provider(),
        limiter=get_rate_limiter(),
    )


async def close_providers() -> None:
    """Fecha clientes HTTP criados (shutdown)."""
    if get_messaging_provider.cache_info().currsize:
        await get_messaging_provider().aclose()
    if get_notification_provider.cache_info().currsize:
        await get_notification_provider().aclose()
