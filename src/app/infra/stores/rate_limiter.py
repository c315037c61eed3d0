"""Rate limiter em memória com janela fixa.

Uma instância por processo; o estado se perde em restart e não é
compartilhado entre réplicas.

Janela fixa: cada chave tem (count, window_end). Quando a janela expira,
a próxima requisição abre uma nova com count=1. Na virada da janela um
cliente pode somar até 2x o limite em intervalo curto; é aceito.

Entradas expiradas só são removidas via ``sweep_expired()`` (chamada
operacional explícita) ou sobrescritas no próximo acesso da mesma chave.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.protocols.rate_limiter import RateLimitDecision, RateLimitStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.rate_limiter import RateLimiterProtocol

logger = logging.getLogger(__name__)

ORIGIN_KEY_PREFIX = "ip:"
IDENTITY_KEY_PREFIX = "email:"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class _WindowEntry:
    count: int
    window_end_ms: int


class FixedWindowRateLimiter:
    """Contador por chave em janela fixa.

    Args:
        clock: Função que retorna o instante atual em epoch ms
            (injetável para testes).
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or _now_ms
        self._store: dict[str, _WindowEntry] = {}
        self._lock = threading.Lock()

    def check_and_increment(
        self,
        key: str,
        limit: int,
        window_seconds: int,
    ) -> RateLimitDecision:
        """Verifica a cota e, se admitida, incrementa o contador.

        Verificação e incremento são atômicos (lock interno).

        Args:
            key: Chave com namespace (ex.: "ip:1.2.3.4")
            limit: Máximo de admissões por janela
            window_seconds: Duração da janela

        Returns:
            RateLimitDecision(allowed, remaining, reset_at_ms)
        """
        window_ms = window_seconds * 1000
        with self._lock:
            now = self._clock()

            if limit <= 0:
                return RateLimitDecision(
                    allowed=False, remaining=0, reset_at_ms=now + window_ms
                )

            entry = self._store.get(key)
            if entry is None or entry.window_end_ms <= now:
                entry = _WindowEntry(count=1, window_end_ms=now + window_ms)
                self._store[key] = entry
                return RateLimitDecision(
                    allowed=True,
                    remaining=max(0, limit - 1),
                    reset_at_ms=entry.window_end_ms,
                )

            if entry.count >= limit:
                return RateLimitDecision(
                    allowed=False, remaining=0, reset_at_ms=entry.window_end_ms
                )

            entry.count += 1
            return RateLimitDecision(
                allowed=True,
                remaining=max(0, limit - entry.count),
                reset_at_ms=entry.window_end_ms,
            )

    def get_status(self, key: str, limit: int) -> RateLimitStatus:
        """Leitura sem efeito colateral do estado de uma chave."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None or entry.window_end_ms <= self._clock():
                return RateLimitStatus(count=0, remaining=limit, reset_at_ms=None)
            return RateLimitStatus(
                count=entry.count,
                remaining=max(0, limit - entry.count),
                reset_at_ms=entry.window_end_ms,
            )

    def sweep_expired(self) -> int:
        """Remove entradas com janela expirada.

        Returns:
            Quantidade de chaves removidas.
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._store.items() if e.window_end_ms <= now]
            for key in expired:
                del self._store[key]
        if expired:
            logger.debug(
                "rate_limiter_swept",
                extra={"component": "rate_limiter", "removed": len(expired)},
            )
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._store)


class AdmissionControl:
    """Admissão em dois namespaces: origem (IP) e identidade (email).

    Os namespaces são independentes: esgotar um não consome o outro.
    """

    def __init__(
        self,
        limiter: RateLimiterProtocol,
        limit: int,
        window_seconds: int,
    ) -> None:
        self._limiter = limiter
        self.limit = limit
        self.window_seconds = window_seconds

    @staticmethod
    def origin_key(source_address: str) -> str:
        return f"{ORIGIN_KEY_PREFIX}{source_address}"

    @staticmethod
    def identity_key(email: str) -> str:
        """Chave de identidade; email normalizado (lower + strip)."""
        return f"{IDENTITY_KEY_PREFIX}{email.strip().lower()}"

    def check_origin(self, source_address: str) -> RateLimitDecision:
        return self._limiter.check_and_increment(
            self.origin_key(source_address), self.limit, self.window_seconds
        )

    def check_identity(self, email: str) -> RateLimitDecision:
        return self._limiter.check_and_increment(
            self.identity_key(email), self.limit, self.window_seconds
        )
