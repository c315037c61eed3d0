"""Cliente da Slack Web API.

Implementa MessagingProviderProtocol: criação de canal, listagem de
membros de user group, convites e postagem no canal de operações.
Uma chamada HTTP por operação; sem retry.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.slack.errors import log_slack_error, parse_slack_response
from app.protocols.messaging import Severity
from app.protocols.results import (
    INVALID_RESPONSE,
    NETWORK_ERROR,
    NOT_CONFIGURED,
    Ack,
    ChannelRef,
    CollaboratorError,
    Err,
    Ok,
)
from config.settings.slack import SLACK_API_BASE_URL

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from app.protocols.results import Result
    from config.settings import SlackSettings

logger: logging.Logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

SEVERITY_EMOJI: dict[Severity, str] = {
    Severity.INFO: ":information_source:",
    Severity.WARN: ":warning:",
    Severity.ERROR: ":exclamation:",
}


def format_ops_message(text: str, severity: Severity) -> str:
    """Formata mensagem do canal de operações.

    Ex.: ``:warning: *[WARN]* Group invite failed``
    """
    return f"{SEVERITY_EMOJI[severity]} *[{severity.value.upper()}]* {text}"


class SlackWebClient(HttpClient):
    """Cliente Slack Web API (Bearer token).

    Args:
        token: Bot token.
        api_base_url: URL base (``https://slack.com/api/``).
        guest_expiration_days: Validade do convite de guest.
        config: Configuração HTTP (timeout).
        client: AsyncClient injetável (testes).
        clock: Relógio em epoch segundos (testes).
    """

    def __init__(
        self,
        token: str,
        *,
        api_base_url: str = SLACK_API_BASE_URL,
        guest_expiration_days: int = 30,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__(config, client)
        self._token = token
        self._base_url = api_base_url.rstrip("/")
        self._guest_expiration_days = guest_expiration_days
        self._clock = clock or time.time

    async def _call(
        self,
        method: str,
        payload: dict[str, Any],
        *,
        form: bool = False,
    ) -> Result[dict[str, Any]]:
        """Chama um método da Web API e devolve Ok(corpo) ou Err."""
        if not self._token:
            return Err.of(NOT_CONFIGURED, "SLACK_BOT_TOKEN missing")

        url = f"{self._base_url}/{method}"
        headers = {"Authorization": f"Bearer {self._token}"}
        try:
            if form:
                response = await self.request(
                    "POST",
                    url,
                    data={k: str(v) for k, v in payload.items()},
                    headers=headers,
                )
            else:
                headers["Content-Type"] = "application/json; charset=utf-8"
                response = await self.request("POST", url, json=payload, headers=headers)
        except HttpError as exc:
            error = CollaboratorError(code=NETWORK_ERROR, detail=str(exc))
            log_slack_error(method, error)
            return Err(error)

        parsed = parse_slack_response(response)
        if isinstance(parsed, CollaboratorError):
            log_slack_error(method, parsed)
            return Err(parsed)

        logger.debug(
            "slack_api_ok",
            extra={"component": "slack", "method": method, "status_code": response.status_code},
        )
        return Ok(parsed)

    async def create_channel(self, name: str) -> Result[ChannelRef]:
        """Cria canal público (``conversations.create``).

        ``Err(name_taken)`` quando o nome já existe; o retry com sufixo
        é responsabilidade do orquestrador.
        """
        result = await self._call("conversations.create", {"name": name, "is_private": False})
        if isinstance(result, Err):
            return result

        channel = result.value.get("channel")
        if not isinstance(channel, dict) or not channel.get("id"):
            return Err.of(
                INVALID_RESPONSE,
                "Channel creation succeeded but response format was unexpected",
            )
        return Ok(ChannelRef(id=str(channel["id"]), name=str(channel.get("name") or name)))

    async def list_group_members(self, group_id: str) -> Result[list[str]]:
        """Lista user ids do user group (``usergroups.users.list``)."""
        result = await self._call("usergroups.users.list", {"usergroup": group_id}, form=True)
        if isinstance(result, Err):
            return result

        users = result.value.get("users")
        if not isinstance(users, list):
            return Err.of(INVALID_RESPONSE, "usergroups.users.list response missing users")
        return Ok([str(user) for user in users])

    async def invite_users(self, channel_id: str, user_ids: list[str]) -> Result[Ack]:
        result = await self._call(
            "conversations.invite",
            {"channel": channel_id, "users": ",".join(user_ids)},
        )
        if isinstance(result, Err):
            return result
        return Ok(Ack())

    async def invite_external_guest(self, email: str, channel_id: str) -> Result[Ack]:
        """Convida guest de canal único (``admin.users.invite``)."""
        expiration = int(self._clock()) + self._guest_expiration_days * SECONDS_PER_DAY
        result = await self._call(
            "admin.users.invite",
            {
                "email": email,
                "channel_ids": [channel_id],
                "guest_expiration_ts": expiration,
                "is_restricted": True,
                "is_ultra_restricted": False,
            },
        )
        if isinstance(result, Err):
            return result
        return Ok(Ack())

    async def post_message(
        self,
        destination: str,
        text: str,
        severity: Severity,
    ) -> Result[Ack]:
        result = await self._call(
            "chat.postMessage",
            {
                "channel": destination,
                "text": format_ops_message(text, severity),
                "unfurl_links": False,
                "unfurl_media": False,
            },
        )
        if isinstance(result, Err):
            return result
        ts = result.value.get("ts")
        return Ok(Ack(reference=str(ts) if ts else None))


def create_slack_client(
    settings: SlackSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> SlackWebClient:
    """Factory para criar cliente Slack a partir das settings."""
    from config.settings import get_slack_settings

    slack = settings or get_slack_settings()
    return SlackWebClient(
        slack.bot_token,
        api_base_url=slack.api_base_url,
        guest_expiration_days=slack.guest_expiration_days,
        config=HttpClientConfig(timeout_seconds=slack.request_timeout_seconds),
        client=client,
    )
