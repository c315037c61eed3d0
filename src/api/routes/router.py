"""Agregador de rotas: registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from api.routes.health.router import router as health_router
from api.routes.intake.responses import not_found_response
from api.routes.intake.router import router as intake_router

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


async def api_options(path: str) -> Response:
    """OPTIONS sem cabeçalhos de preflight (o CORSMiddleware trata os demais)."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def api_not_found(path: str) -> JSONResponse:
    """Qualquer rota /api/* não registrada."""
    return not_found_response()


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health e ping
    api_router.include_router(health_router, tags=["health"])

    # Intake
    api_router.include_router(intake_router, prefix="/api", tags=["intake"])

    # Catch-all registrado por último
    api_router.add_api_route(
        "/api/{path:path}",
        api_options,
        methods=["OPTIONS"],
        include_in_schema=False,
        response_model=None,
    )
    api_router.add_api_route(
        "/api/{path:path}",
        api_not_found,
        methods=_ALL_METHODS,
        include_in_schema=False,
        response_model=None,
    )

    return api_router
