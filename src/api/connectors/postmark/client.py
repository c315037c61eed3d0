"""Cliente Postmark para o email de boas-vindas.

Implementa NotificationProviderProtocol. Uma tentativa por envio.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.postmark.templates import (
    render_welcome_html,
    render_welcome_text,
    welcome_subject,
)
from app.domain.submission import mask_email
from app.protocols.results import (
    HTTP_ERROR,
    MISSING_MESSAGE_ID,
    NETWORK_ERROR,
    NOT_CONFIGURED,
    Ack,
    Err,
    Ok,
)
from config.settings.email import POSTMARK_API_URL

if TYPE_CHECKING:
    import httpx

    from app.protocols.notification import WelcomeEmailParams
    from app.protocols.results import Result
    from config.settings import EmailSettings

logger: logging.Logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """``Postmark API error: HTTP 422: Unprocessable Entity - <Message>``."""
    message = f"HTTP {response.status_code}: {response.reason_phrase}"
    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        if text:
            message = f"{message} - {text}"
    else:
        if isinstance(data, dict) and data.get("Message"):
            message = f"{message} - {data['Message']}"
    return f"Postmark API error: {message}"


class PostmarkEmailClient(HttpClient):
    """Envio transacional via Postmark.

    Args:
        api_key: Server token (``X-Postmark-Server-Token``).
        api_url: Endpoint de envio.
        from_email / message_stream / tag: campos fixos da mensagem.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = POSTMARK_API_URL,
        from_email: str = "noreply@theguild.dev",
        message_stream: str = "outbound",
        tag: str = "conference-welcome",
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config, client)
        self._api_key = api_key
        self._api_url = api_url
        self._from_email = from_email
        self._message_stream = message_stream
        self._tag = tag

    def build_payload(self, recipient: str, params: WelcomeEmailParams) -> dict[str, Any]:
        return {
            "From": self._from_email,
            "To": recipient,
            "Subject": welcome_subject(params.channel_name),
            "HtmlBody": render_welcome_html(params),
            "TextBody": render_welcome_text(params),
            "MessageStream": self._message_stream,
            "Tag": self._tag,
            "Metadata": {
                "companyName": params.company_name,
                "channelName": params.channel_name,
            },
        }

    async def send_templated_email(
        self,
        recipient: str,
        params: WelcomeEmailParams,
    ) -> Result[Ack]:
        """Envia o email de boas-vindas.

        Returns:
            Ok(Ack(MessageID)) ou Err (not_configured, http_error,
            missing_message_id, network_error).
        """
        if not self._api_key:
            return Err.of(NOT_CONFIGURED, "Missing POSTMARK_API_KEY")

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Postmark-Server-Token": self._api_key,
        }
        try:
            response = await self.post(
                self._api_url, json=self.build_payload(recipient, params), headers=headers
            )
        except HttpError as exc:
            logger.warning(
                "postmark_send_failed",
                extra={"component": "postmark", "error_code": NETWORK_ERROR},
            )
            return Err.of(NETWORK_ERROR, f"Email sending failed: {exc}")

        if not response.is_success:
            logger.warning(
                "postmark_send_failed",
                extra={
                    "component": "postmark",
                    "error_code": HTTP_ERROR,
                    "status_code": response.status_code,
                },
            )
            return Err.of(HTTP_ERROR, _error_message(response))

        try:
            data = response.json()
        except ValueError:
            data = None
        message_id = data.get("MessageID") if isinstance(data, dict) else None
        if not message_id:
            return Err.of(MISSING_MESSAGE_ID, "Postmark API response missing MessageID")

        logger.info(
            "welcome_email_sent",
            extra={
                "component": "postmark",
                "recipient": mask_email(recipient),
                "channel_name": params.channel_name,
            },
        )
        return Ok(Ack(reference=str(message_id)))


def create_postmark_client(
    settings: EmailSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> PostmarkEmailClient:
    """Factory para criar cliente Postmark a partir das settings."""
    from config.settings import get_email_settings

    email = settings or get_email_settings()
    return PostmarkEmailClient(
        email.postmark_api_key,
        api_url=email.api_url,
        from_email=email.from_email,
        message_stream=email.message_stream,
        tag=email.tag,
        config=HttpClientConfig(timeout_seconds=email.request_timeout_seconds),
        client=client,
    )
