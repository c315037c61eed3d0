"""Mapeamento de outcomes do orquestrador para respostas HTTP.

Formato comum: ``{"ok": bool, ...}``. Falhas carregam ``errorCode`` e
``message``; detalhes de upstream nunca chegam ao cliente.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.responses import JSONResponse

from app.domain.outcome import SubmissionStatus

if TYPE_CHECKING:
    from app.domain.outcome import PreviewOutcome, RateLimitRejection, SubmissionOutcome

ERROR_RATE_LIMIT = "rate_limit"
ERROR_INVALID_JSON = "INVALID_JSON"
ERROR_VALIDATION = "VALIDATION_ERROR"
ERROR_SLACK = "SLACK_ERROR"
ERROR_NOT_FOUND = "NOT_FOUND"
ERROR_INTERNAL = "INTERNAL_ERROR"

# Nome do status 422 mudou entre versões do Starlette
HTTP_422_UNPROCESSABLE = 422


def error_response(
    error_code: str,
    message: str,
    status_code: int,
    *,
    headers: dict[str, str] | None = None,
    **fields: Any,
) -> JSONResponse:
    content: dict[str, Any] = {"ok": False, "errorCode": error_code, "message": message}
    content.update(fields)
    return JSONResponse(content=content, status_code=status_code, headers=headers)


def epoch_seconds(reset_at_ms: int) -> str:
    return str(math.ceil(reset_at_ms / 1000))


def rate_limit_response(rejection: RateLimitRejection) -> JSONResponse:
    return error_response(
        ERROR_RATE_LIMIT,
        "Rate limit exceeded",
        status.HTTP_429_TOO_MANY_REQUESTS,
        headers={
            "X-RateLimit-Limit": str(rejection.limit),
            "X-RateLimit-Remaining": str(rejection.remaining),
            "X-RateLimit-Reset": epoch_seconds(rejection.reset_at_ms),
        },
        metadata={"type": rejection.limit_type.value, "remaining": rejection.remaining},
    )


def invalid_json_response() -> JSONResponse:
    return error_response(
        ERROR_INVALID_JSON, "Invalid JSON in request body", status.HTTP_400_BAD_REQUEST
    )


def validation_response(errors: list[str] | tuple[str, ...]) -> JSONResponse:
    return error_response(
        ERROR_VALIDATION,
        "Validation failed",
        HTTP_422_UNPROCESSABLE,
        errors=list(errors),
    )


def not_found_response() -> JSONResponse:
    return error_response(ERROR_NOT_FOUND, "API endpoint not found", status.HTTP_404_NOT_FOUND)


def internal_error_response() -> JSONResponse:
    return error_response(
        ERROR_INTERNAL, "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def submission_response(outcome: SubmissionOutcome, *, limit: int) -> JSONResponse:
    """Converte um SubmissionOutcome no status/corpo/headers HTTP."""
    if outcome.status is SubmissionStatus.REJECTED_VALIDATION:
        return validation_response(outcome.validation_errors)

    if outcome.status is SubmissionStatus.REJECTED_RATE_LIMIT and outcome.rate_limit:
        return rate_limit_response(outcome.rate_limit)

    if outcome.status is not SubmissionStatus.SUCCEEDED:
        return error_response(
            ERROR_SLACK, "Failed to create Slack channel", status.HTTP_502_BAD_GATEWAY
        )

    headers = {"X-RateLimit-Limit": str(limit)}
    if outcome.remaining_origin is not None:
        headers["X-RateLimit-Remaining-IP"] = str(outcome.remaining_origin)
    if outcome.remaining_identity is not None:
        headers["X-RateLimit-Remaining-Email"] = str(outcome.remaining_identity)
    if outcome.reset_at_ms is not None:
        headers["X-RateLimit-Reset"] = epoch_seconds(outcome.reset_at_ms)

    return JSONResponse(
        content={
            "ok": True,
            "id": outcome.submission_id,
            "sanitizedCompanyName": outcome.sanitized_company_name,
            "slackChannelId": outcome.channel_id,
            "channelName": outcome.channel_name,
            "emailSent": outcome.email_sent,
            "partialFailures": [step.value for step in outcome.partial_failures],
        },
        headers=headers,
    )


def preview_response(outcome: PreviewOutcome) -> JSONResponse:
    if not outcome.ok:
        return validation_response(outcome.validation_errors)
    return JSONResponse(
        content={"ok": True, "sanitizedCompanyName": outcome.sanitized_company_name}
    )
