"""Settings de admissão (rate limit por IP e por email).

Proteção contra abuso do endpoint de submissão.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class RateLimitSettings:
    """Configurações de rate limit.

    Attributes:
        limit: Submissões permitidas por chave dentro da janela
        window_seconds: Duração da janela fixa
        reject_free_email_domains: Recusa gmail/yahoo/etc. na validação
    """

    limit: int = 10
    window_seconds: int = 3600
    reject_free_email_domains: bool = False

    def validate(self) -> list[str]:
        """Valida configurações de rate limit.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.limit < 1:
            errors.append("RATE_LIMIT deve ser >= 1")

        if self.window_seconds < 1:
            errors.append("RATE_LIMIT_WINDOW_SEC deve ser >= 1")

        return errors


def _load_rate_limit_from_env() -> RateLimitSettings:
    """Carrega RateLimitSettings de variáveis de ambiente."""
    return RateLimitSettings(
        limit=int(os.getenv("RATE_LIMIT", "10")),
        window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SEC", "3600")),
        reject_free_email_domains=os.getenv(
            "REJECT_FREE_EMAIL_DOMAINS", "false"
        ).lower()
        in ("true", "1"),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """Retorna instância cacheada de RateLimitSettings."""
    return _load_rate_limit_from_env()
