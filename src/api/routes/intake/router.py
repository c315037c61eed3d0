"""Endpoints de intake de empresas.

Endpoints:
- POST /api/submit: cria o canal Slack da empresa
- POST /api/sanitize-preview: preview do identificador (sem admissão)

Ordem em /api/submit:
1. Admissão por origem (antes de ler o corpo) → 429
2. JSON inválido → 400
3. Orquestrador → 200 / 422 / 429 / 502
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.routes.intake.request import InvalidJsonError, client_address, parse_json_body
from api.routes.intake.responses import (
    invalid_json_response,
    preview_response,
    rate_limit_response,
    submission_response,
)
from app.bootstrap import get_submission_use_case
from app.domain.outcome import RateLimitRejection, RateLimitType
from app.use_cases.submission import ProcessSubmissionUseCase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/submit", response_model=None)
async def submit(
    request: Request,
    use_case: ProcessSubmissionUseCase = Depends(get_submission_use_case),
) -> JSONResponse:
    source_address = client_address(request)

    origin_decision = use_case.admit_origin(source_address)
    if not origin_decision.allowed:
        logger.info("submit_rejected_origin", extra={"component": "intake", "result": "429"})
        return rate_limit_response(
            RateLimitRejection(
                limit_type=RateLimitType.IP,
                limit=use_case.admission_limit,
                remaining=origin_decision.remaining,
                reset_at_ms=origin_decision.reset_at_ms,
            )
        )

    try:
        payload = parse_json_body(await request.body())
    except InvalidJsonError:
        logger.info("submit_invalid_json", extra={"component": "intake", "result": "400"})
        return invalid_json_response()

    outcome = await use_case.submit_payload(
        payload, source_address, origin_decision=origin_decision
    )
    logger.info(
        "submit_completed",
        extra={
            "component": "intake",
            "submission_id": outcome.submission_id,
            "result": outcome.status.value,
        },
    )
    return submission_response(outcome, limit=use_case.admission_limit)


@router.post("/sanitize-preview", response_model=None)
async def sanitize_preview(
    request: Request,
    use_case: ProcessSubmissionUseCase = Depends(get_submission_use_case),
) -> JSONResponse:
    try:
        payload = parse_json_body(await request.body())
    except InvalidJsonError:
        return invalid_json_response()
    return preview_response(use_case.preview_payload(payload))
