"""Cliente HTTP base para conectores da camada API.

Uma tentativa por chamada: retries de chamadas externas não fazem parte
deste serviço. Falhas de transporte viram ``HttpError`` para que cada
conector traduza em ``Err`` no seu contrato.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de transporte HTTP (timeout ou conexão), sem dados sensíveis."""


class HttpClient:
    """Cliente HTTP simples para chamadas externas.

    Args:
        config: Timeout e headers padrão.
        client: ``httpx.AsyncClient`` compartilhado (injetável em testes,
            ex.: com ``httpx.MockTransport``). Se omitido, é criado sob
            demanda e fechado em ``aclose()``.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(verify=self._config.verify_ssl)
        return self._client

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa uma requisição (uma tentativa).

        Raises:
            HttpError: timeout ou erro de conexão/transporte.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            return await self._get_client().request(
                method,
                url,
                json=json,
                data=data,
                headers=merged_headers,
                timeout=self._config.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            logger.warning("http_timeout", extra={"method": method, "url": url})
            raise HttpError("http_timeout") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "http_transport_error",
                extra={"method": method, "url": url, "error_type": type(exc).__name__},
            )
            raise HttpError(f"http_transport_error: {exc}") from exc

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.request("POST", url, json=json, headers=headers)

    async def aclose(self) -> None:
        """Fecha o AsyncClient quando foi criado por este objeto."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
