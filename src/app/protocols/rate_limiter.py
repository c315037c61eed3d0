"""Contrato do limitador de admissão."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RateLimitDecision:
    """Resultado de check_and_increment.

    Attributes:
        allowed: Requisição admitida
        remaining: Cota restante na janela (>= 0)
        reset_at_ms: Fim da janela (epoch ms)
    """

    allowed: bool
    remaining: int
    reset_at_ms: int


@dataclass(frozen=True)
class RateLimitStatus:
    """Leitura sem efeito colateral; reset_at_ms None se não há janela ativa."""

    count: int
    remaining: int
    reset_at_ms: int | None


class RateLimiterProtocol(Protocol):
    """Contador por chave em janela fixa."""

    def check_and_increment(
        self,
        key: str,
        limit: int,
        window_seconds: int,
    ) -> RateLimitDecision: ...

    def get_status(self, key: str, limit: int) -> RateLimitStatus: ...
