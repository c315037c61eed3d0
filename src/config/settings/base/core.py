"""Settings base do serviço de intake.

Ambiente, identificação do serviço e política de CORS do formulário.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

APP_VERSION: str = "0.1.0"
DEFAULT_SERVICE_NAME: str = "conference-intake"

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do serviço.

    Attributes:
        environment: development | staging | production
        service_name: Campo ``service`` dos logs e de /health
        debug: Habilita /docs e /openapi.json
        cors_allowed_origin: Origin(s) do formulário, separadas por vírgula
            ("*" libera todas)
        app_version: Versão exposta em /api/ping
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    debug: bool = False
    cors_allowed_origin: str = "*"
    app_version: str = APP_VERSION

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Lista de origins para o CORSMiddleware."""
        origins = [o.strip() for o in self.cors_allowed_origin.split(",") if o.strip()]
        return origins or ["*"]

    @property
    def docs_enabled(self) -> bool:
        return self.debug and not self.is_production

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.is_production and "*" in self.cors_origins:
            errors.append("CORS_ALLOWED_ORIGIN=* não é permitido em production")

        for origin in self.cors_origins:
            if origin != "*" and not origin.startswith(("http://", "https://")):
                errors.append(f"CORS_ALLOWED_ORIGIN inválida: {origin}")

        return errors


def _parse_environment(raw: str) -> Environment:
    """Normaliza ENVIRONMENT; valores desconhecidos viram development."""
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


def _load_base_from_env() -> BaseSettings:
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        cors_allowed_origin=os.getenv("CORS_ALLOWED_ORIGIN", "*"),
        app_version=os.getenv("APP_VERSION", APP_VERSION),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
