"""Logging estruturado (JSON) do serviço de intake.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="conference-intake")
    logger = get_logger(__name__)
    logger.info("channel_created", extra={"submission_id": "..."})

Todo registro sai com asctime, level, logger, message, correlation_id e
service; emails na mensagem saem mascarados.
"""

from config.logging.config import TRANSPORT_LOGGERS, configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter, EmailMaskingFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "TRANSPORT_LOGGERS",
    "CorrelationIdFilter",
    "EmailMaskingFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
