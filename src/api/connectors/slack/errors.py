"""Erros e helpers de parsing para a Slack Web API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.protocols.results import (
    HTTP_ERROR,
    INVALID_RESPONSE,
    RATE_LIMITED,
    CollaboratorError,
)

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


def _retry_after(response: httpx.Response) -> int:
    raw = response.headers.get("Retry-After", "")
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS


def parse_slack_response(response: httpx.Response) -> dict[str, Any] | CollaboratorError:
    """Classifica a resposta da Slack Web API.

    - HTTP 429 → ``rate_limited`` (Retry-After, padrão 60s)
    - outro não-2xx → ``http_error``
    - corpo não-JSON → ``invalid_response``
    - ``ok: false`` → o código do próprio Slack (ex.: ``name_taken``)

    Returns:
        Corpo JSON em caso de sucesso, CollaboratorError caso contrário.
    """
    if response.status_code == 429:
        return CollaboratorError(
            code=RATE_LIMITED,
            detail="Slack API rate limit exceeded",
            retry_after_seconds=_retry_after(response),
        )

    if not response.is_success:
        return CollaboratorError(
            code=HTTP_ERROR,
            detail=f"HTTP {response.status_code}: {response.reason_phrase}",
        )

    try:
        data = response.json()
    except ValueError:
        return CollaboratorError(code=INVALID_RESPONSE, detail="Response body is not JSON")

    if not isinstance(data, dict):
        return CollaboratorError(code=INVALID_RESPONSE, detail="Response body is not an object")

    if not data.get("ok"):
        return CollaboratorError(
            code=str(data.get("error") or "unknown_error"),
            detail="Slack API returned an error",
        )

    return data


def log_slack_error(method: str, error: CollaboratorError) -> None:
    """Loga erro do Slack sem token nem payload."""
    logger.warning(
        "slack_api_error",
        extra={
            "component": "slack",
            "method": method,
            "error_code": error.code,
            "retry_after_seconds": error.retry_after_seconds,
        },
    )
