"""Canal de operações: log best-effort para humanos acompanharem submissões.

Uma tentativa por mensagem. Falha (``Err`` ou exceção do adapter) é
registrada localmente e descartada; nunca interrompe a submissão.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.messaging import Severity
from app.protocols.results import Err

if TYPE_CHECKING:
    from app.protocols.messaging import MessagingProviderProtocol

logger = logging.getLogger(__name__)


class OperationsLog:
    """Publica mensagens no canal de operações.

    Args:
        messaging: Provedor de mensagens (post_message).
        destination: Canal de destino; vazio desliga o envio.
    """

    def __init__(
        self,
        messaging: MessagingProviderProtocol,
        destination: str | None,
    ) -> None:
        self._messaging = messaging
        self._destination = destination or ""

    @property
    def enabled(self) -> bool:
        return bool(self._destination)

    async def emit(self, text: str, severity: Severity = Severity.INFO) -> bool:
        """Envia uma mensagem. Nunca levanta.

        Returns:
            True se o provedor aceitou a mensagem.
        """
        if not self._destination:
            logger.debug("ops_log_disabled", extra={"component": "ops_log"})
            return False

        try:
            result = await self._messaging.post_message(self._destination, text, severity)
        except Exception as exc:
            logger.warning(
                "ops_log_emit_failed",
                extra={
                    "component": "ops_log",
                    "severity": severity.value,
                    "error_type": type(exc).__name__,
                },
            )
            return False

        if isinstance(result, Err):
            logger.warning(
                "ops_log_emit_failed",
                extra={
                    "component": "ops_log",
                    "severity": severity.value,
                    "error_code": result.error.code,
                },
            )
            return False

        return True

    async def info(self, text: str) -> bool:
        return await self.emit(text, Severity.INFO)

    async def warn(self, text: str) -> bool:
        return await self.emit(text, Severity.WARN)

    async def error(self, text: str) -> bool:
        return await self.emit(text, Severity.ERROR)
