"""Resultado explícito das chamadas a colaboradores externos.

Falhas de colaboradores são valores (``Err``), nunca exceções, na fronteira
dos protocolos. O chamador decide o que é fatal.

Uso:
    result = await messaging.create_channel(name)
    if isinstance(result, Err):
        if result.error.is_name_taken:
            ...
    else:
        channel = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# Códigos de erro conhecidos (o provedor pode devolver outros)
NAME_TAKEN = "name_taken"
RATE_LIMITED = "rate_limited"
HTTP_ERROR = "http_error"
NETWORK_ERROR = "network_error"
INVALID_RESPONSE = "invalid_response"
MISSING_MESSAGE_ID = "missing_message_id"
NOT_CONFIGURED = "not_configured"
UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class CollaboratorError:
    """Erro de colaborador.

    Attributes:
        code: Código estável (ex.: "name_taken") ou string do provedor
        detail: Texto descritivo (nunca exposto ao usuário final)
        retry_after_seconds: Dica de Retry-After quando houver rate limit
    """

    code: str
    detail: str = ""
    retry_after_seconds: int | None = None

    @property
    def is_name_taken(self) -> bool:
        return self.code == NAME_TAKEN

    @property
    def is_rate_limited(self) -> bool:
        return self.code == RATE_LIMITED

    def describe(self) -> str:
        """Forma curta ``code: detail`` para logs."""
        return f"{self.code}: {self.detail}" if self.detail else self.code


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: CollaboratorError

    @classmethod
    def of(
        cls,
        code: str,
        detail: str = "",
        retry_after_seconds: int | None = None,
    ) -> Err:
        return cls(CollaboratorError(code, detail, retry_after_seconds))


Result = Ok[T] | Err


@dataclass(frozen=True)
class ChannelRef:
    """Canal criado no provedor de mensagens."""

    id: str
    name: str


@dataclass(frozen=True)
class Ack:
    """Confirmação de sucesso (id opcional do provedor, ex.: MessageID)."""

    reference: str | None = None
