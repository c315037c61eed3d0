"""Use case de submissão: nome da empresa + email → canal Slack.

Ponto de entrada do orquestrador para a camada HTTP (ou qualquer outro
chamador). Cada chamada produz exatamente um SubmissionOutcome.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.outcome import PreviewOutcome, RateLimitType
from app.domain.submission import ValidationFailure, validate_preview
from app.observability.metrics import record_admission_rejection
from app.use_cases.submission.context import SubmissionConfig, SubmissionContext
from app.use_cases.submission.pipeline import SubmissionPipeline
from app.use_cases.submission.stages import SubmissionStages

if TYPE_CHECKING:
    from app.domain.outcome import SubmissionOutcome
    from app.infra.stores.rate_limiter import AdmissionControl
    from app.protocols.messaging import MessagingProviderProtocol
    from app.protocols.notification import NotificationProviderProtocol
    from app.protocols.rate_limiter import RateLimitDecision
    from app.services.operations_log import OperationsLog

logger = logging.getLogger(__name__)


class ProcessSubmissionUseCase:
    """Orquestra validação, admissão e o fluxo de colaboradores externos."""

    def __init__(
        self,
        *,
        messaging: MessagingProviderProtocol,
        notification: NotificationProviderProtocol,
        admission: AdmissionControl,
        ops_log: OperationsLog,
        config: SubmissionConfig | None = None,
    ) -> None:
        self._admission = admission
        self._stages = SubmissionStages(
            messaging=messaging,
            notification=notification,
            admission=admission,
            ops_log=ops_log,
            config=config or SubmissionConfig(),
        )
        self._pipeline = SubmissionPipeline.from_stages(self._stages)

    @property
    def pipeline(self) -> SubmissionPipeline:
        return self._pipeline

    @property
    def admission_limit(self) -> int:
        return self._admission.limit

    def admit_origin(self, source_address: str) -> RateLimitDecision:
        """Consome cota de origem antes do parsing do corpo."""
        decision = self._admission.check_origin(source_address)
        if not decision.allowed:
            record_admission_rejection(
                RateLimitType.IP.value, decision.remaining, decision.reset_at_ms
            )
        return decision

    async def submit(
        self,
        raw_company_name: Any,
        raw_email: Any,
        source_address: str,
    ) -> SubmissionOutcome:
        """Processa uma submissão a partir dos campos brutos."""
        payload = {"companyName": raw_company_name, "email": raw_email}
        return await self.submit_payload(payload, source_address)

    async def submit_payload(
        self,
        payload: Any,
        source_address: str,
        *,
        origin_decision: RateLimitDecision | None = None,
    ) -> SubmissionOutcome:
        """Processa uma submissão a partir do corpo JSON decodificado.

        Args:
            payload: Corpo decodificado (qualquer tipo; validado aqui).
            source_address: IP de origem.
            origin_decision: Decisão de admissão de origem já tomada pela
                camada HTTP; quando presente não é consumida nova cota.
        """
        ctx = SubmissionContext(
            payload=payload,
            source_address=source_address,
            origin_decision=origin_decision,
        )
        return await self._pipeline.run(ctx)

    def preview_sanitize(self, raw_company_name: Any) -> PreviewOutcome:
        """Preview do slug; não consulta nem consome admissão."""
        return self.preview_payload({"companyName": raw_company_name})

    def preview_payload(self, payload: Any) -> PreviewOutcome:
        result = validate_preview(payload)
        if isinstance(result, ValidationFailure):
            return PreviewOutcome(validation_errors=list(result.errors))
        return PreviewOutcome(sanitized_company_name=result.sanitized_company_name)
