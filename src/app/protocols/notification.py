"""Contrato do provedor de email transacional."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .results import Ack, Result


@dataclass(frozen=True)
class WelcomeEmailParams:
    """Parâmetros do email de boas-vindas.

    Attributes:
        company_name: Nome da empresa como digitado (não o slug)
        email: Destinatário
        channel_name: Nome final do canal (com sufixo de colisão, se houve)
        channel_url: Link direto para o canal
    """

    company_name: str
    email: str
    channel_name: str
    channel_url: str


class NotificationProviderProtocol(Protocol):
    """Envio do email de boas-vindas.

    2xx sem MessageID conta como erro (``missing_message_id``).
    """

    async def send_templated_email(
        self,
        recipient: str,
        params: WelcomeEmailParams,
    ) -> Result[Ack]: ...
