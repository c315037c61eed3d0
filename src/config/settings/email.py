"""Settings de Email (Postmark).

Configurações do envio do email de boas-vindas.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

POSTMARK_API_URL: str = "https://api.postmarkapp.com/email"


@dataclass(frozen=True)
class EmailSettings:
    """Configurações do provedor de email.

    Attributes:
        postmark_api_key: Server token do Postmark
        api_url: Endpoint de envio
        from_email: Remetente
        message_stream: Stream do Postmark
        tag: Tag aplicada às mensagens
        request_timeout_seconds: Timeout por chamada
    """

    postmark_api_key: str = ""
    api_url: str = POSTMARK_API_URL
    from_email: str = "noreply@theguild.dev"
    message_stream: str = "outbound"
    tag: str = "conference-welcome"
    request_timeout_seconds: float = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(self.postmark_api_key)

    def validate(self) -> list[str]:
        """Valida configurações de email."""
        errors: list[str] = []

        if not self.postmark_api_key:
            errors.append("POSTMARK_API_KEY não configurado")

        if "@" not in self.from_email:
            errors.append("EMAIL_FROM inválido")

        if self.request_timeout_seconds <= 0:
            errors.append("EMAIL_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> EmailSettings:
    """Carrega EmailSettings de variáveis de ambiente."""
    return EmailSettings(
        postmark_api_key=os.getenv("POSTMARK_API_KEY", ""),
        api_url=os.getenv("POSTMARK_API_URL", POSTMARK_API_URL),
        from_email=os.getenv("EMAIL_FROM", "noreply@theguild.dev"),
        message_stream=os.getenv("EMAIL_MESSAGE_STREAM", "outbound"),
        tag=os.getenv("EMAIL_TAG", "conference-welcome"),
        request_timeout_seconds=float(
            os.getenv("EMAIL_REQUEST_TIMEOUT_SECONDS", "10")
        ),
    )


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Retorna instância cacheada de EmailSettings."""
    return _load_from_env()
