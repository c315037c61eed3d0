"""Filters de logging para injeção de contexto e proteção de PII.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: conference-intake)

O EmailMaskingFilter reescreve emails na mensagem final
(ex.: ``te***@example.com``).
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

_EMAIL_PATTERN = re.compile(r"([^\s@<>\"',;:()]+)@([^\s@<>\"',;:()]+\.[^\s@<>\"',;:()]+)")

# Campos de `extra` que podem carregar email cru
MASKED_EXTRA_FIELDS: tuple[str, ...] = ("email", "recipient")


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


def _mask_match(match: re.Match[str]) -> str:
    local, domain = match.group(1), match.group(2)
    return f"{local[:2]}***@{domain}"


class EmailMaskingFilter(logging.Filter):
    """Mascara endereços de email na mensagem e nos campos extra conhecidos.

    A mensagem é renderizada (msg % args) antes da máscara, então
    emails passados como argumento também são cobertos.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for attr in MASKED_EXTRA_FIELDS:
            value = getattr(record, attr, None)
            if isinstance(value, str):
                setattr(record, attr, _EMAIL_PATTERN.sub(_mask_match, value))

        message = record.getMessage()
        masked = _EMAIL_PATTERN.sub(_mask_match, message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True
