"""Contrato do provedor de mensagens (workspace de chat)."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .results import Ack, ChannelRef, Result


class Severity(StrEnum):
    """Severidade das mensagens do canal de operações."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class MessagingProviderProtocol(Protocol):
    """Operações usadas pelo orquestrador e pelo ops log.

    Todas devolvem ``Ok``/``Err``; nenhuma levanta por falha do provedor.
    """

    async def create_channel(self, name: str) -> Result[ChannelRef]:
        """Cria canal; ``Err(name_taken)`` se o nome já existe."""
        ...

    async def list_group_members(self, group_id: str) -> Result[list[str]]: ...

    async def invite_users(self, channel_id: str, user_ids: list[str]) -> Result[Ack]: ...

    async def invite_external_guest(self, email: str, channel_id: str) -> Result[Ack]:
        """Convida guest externo restrito a um único canal."""
        ...

    async def post_message(
        self,
        destination: str,
        text: str,
        severity: Severity,
    ) -> Result[Ack]: ...
