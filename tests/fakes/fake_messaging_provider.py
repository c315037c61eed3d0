"""Fake in-memory do provedor de mensagens para testes deterministas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.protocols.results import NAME_TAKEN, Ack, ChannelRef, Err, Ok


@dataclass
class FakeMessagingProvider:
    """Implementa MessagingProviderProtocol registrando cada chamada.

    Falhas são configuradas por operação via ``failures``
    (ex.: ``{"invite_users": Err.of("http_error")}``) e nomes ocupados
    via ``taken_names``.
    """

    group_members: list[str] = field(default_factory=lambda: ["U1", "U2"])
    taken_names: set[str] = field(default_factory=set)
    failures: dict[str, Any] = field(default_factory=dict)
    raises: dict[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    posted: list[tuple[str, str, str]] = field(default_factory=list)
    _next_id: int = 1

    def _record(self, operation: str, *args: Any) -> Any | None:
        self.calls.append((operation, args))
        if operation in self.raises:
            raise self.raises[operation]
        return self.failures.get(operation)

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls if name != "post_message"]

    def attempted_channel_names(self) -> list[str]:
        return [args[0] for name, args in self.calls if name == "create_channel"]

    async def create_channel(self, name: str) -> Any:
        forced = self._record("create_channel", name)
        if forced is not None:
            return forced
        if name in self.taken_names:
            return Err.of(NAME_TAKEN)
        channel = ChannelRef(id=f"C{self._next_id:04d}", name=name)
        self._next_id += 1
        self.taken_names.add(name)
        return Ok(channel)

    async def list_group_members(self, group_id: str) -> Any:
        forced = self._record("list_group_members", group_id)
        if forced is not None:
            return forced
        return Ok(list(self.group_members))

    async def invite_users(self, channel_id: str, user_ids: list[str]) -> Any:
        forced = self._record("invite_users", channel_id, tuple(user_ids))
        return forced if forced is not None else Ok(Ack())

    async def invite_external_guest(self, email: str, channel_id: str) -> Any:
        forced = self._record("invite_external_guest", email, channel_id)
        return forced if forced is not None else Ok(Ack())

    async def post_message(self, destination: str, text: str, severity: Any) -> Any:
        forced = self._record("post_message", destination, text, severity)
        if forced is not None:
            return forced
        self.posted.append((destination, text, str(severity)))
        return Ok(Ack(reference=f"{len(self.posted)}.0001"))
