"""Setup do logging JSON do serviço de intake.

Um único StreamHandler no root logger, com:
- service e correlation_id em todo registro (CorrelationIdFilter)
- emails mascarados na mensagem (EmailMaskingFilter)
- loggers de transporte (httpx/httpcore) limitados a WARNING
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, EmailMaskingFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "conference-intake"

# httpx loga cada request em INFO (URL da Slack API, Postmark)
TRANSPORT_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> logging.Handler:
    """Instala o handler JSON no root logger, substituindo os existentes.

    Chamada uma vez pelo bootstrap (``app.bootstrap.initialize_app``).

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (case-insensitive).
        service_name: Valor do campo ``service``.
        correlation_id_getter: Fonte do ``correlation_id`` (ContextVar).

    Returns:
        O handler instalado.

    Raises:
        ValueError: nível desconhecido.
    """
    normalized = level.upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(normalized)
    handler.setFormatter(create_json_formatter())
    for log_filter in (
        CorrelationIdFilter(service_name, correlation_id_getter),
        EmailMaskingFilter(),
    ):
        handler.addFilter(log_filter)

    root = logging.getLogger()
    root.setLevel(normalized)
    root.handlers = [handler]

    if normalized != "DEBUG":
        for name in TRANSPORT_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger do módulo; service/correlation_id vêm dos filters do handler."""
    return logging.getLogger(name)
