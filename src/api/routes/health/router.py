"""Endpoints de health check e ping."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel

from config.settings import APP_VERSION, get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = APP_VERSION


class PingResponse(BaseModel):
    """Resposta do ping usado pelo cliente web."""

    ok: bool = True
    version: str = APP_VERSION


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    settings = get_base_settings()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        timestamp=datetime.now(UTC).isoformat(),
        version=settings.app_version,
    )


@router.get("/api/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse(version=get_base_settings().app_version)
