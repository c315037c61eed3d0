"""Entrypoint do serviço de intake de empresas.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from api.routes.intake.responses import internal_error_response
from app.bootstrap import close_providers, initialize_app, validate_runtime_settings
from app.observability import CORRELATION_HEADER, correlation_scope
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi.responses import Response

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (falha em staging/production)

    Shutdown:
    - Fecha clientes HTTP dos colaboradores
    """
    service = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": service})
    await close_providers()


async def correlation_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Propaga x-correlation-id (ou gera um novo) para os logs do request."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception(
        "unhandled_exception",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return internal_error_response()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    settings = get_base_settings()
    fastapi_app = FastAPI(
        title="Conference Intake",
        description="Intake de empresas em conferências: canal Slack compartilhado",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    fastapi_app.middleware("http")(correlation_middleware)
    fastapi_app.add_exception_handler(Exception, unhandled_exception_handler)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": settings.service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting conference intake in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
