"""Estágios do pipeline de submissão.

Cada estágio recebe o SubmissionContext e devolve StageResult:
- proceed: segue para o próximo
- partial: registra falha não fatal e segue
- abort: encerra com um SubmissionOutcome terminal

Fatais: criação do canal e leitura dos membros do grupo.
Best-effort: convite do grupo, convite do guest, email de boas-vindas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from app.domain.outcome import (
    FailureReason,
    PartialFailure,
    RateLimitRejection,
    RateLimitType,
    SubmissionOutcome,
    SubmissionStatus,
)
from app.domain.submission import ValidationFailure, mask_email, validate_submission
from app.observability.metrics import record_admission_rejection
from app.protocols.notification import WelcomeEmailParams
from app.protocols.results import UNEXPECTED_ERROR, Err, Ok
from app.use_cases.submission.context import StageResult
from utils.errors import CollaboratorContractError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.infra.stores.rate_limiter import AdmissionControl
    from app.protocols.messaging import MessagingProviderProtocol
    from app.protocols.notification import NotificationProviderProtocol
    from app.protocols.rate_limiter import RateLimitDecision
    from app.protocols.results import CollaboratorError, Result
    from app.services.operations_log import OperationsLog
    from app.use_cases.submission.context import SubmissionConfig, SubmissionContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

PARTIAL_FAILURE_LABELS: dict[PartialFailure, str] = {
    PartialFailure.GROUP_INVITE: "group invite",
    PartialFailure.GUEST_INVITE: "guest invite",
    PartialFailure.NOTIFICATION_EMAIL: "notification email",
}


async def call_collaborator(
    operation: str, call: Callable[[], Awaitable[Result[T]]]
) -> Result[T]:
    """Invoca e aguarda a chamada, garantindo um ``Ok``/``Err``.

    Exceção levantada pelo adapter, ao chamar ou ao aguardar, vira
    ``Err(unexpected_error)``.

    Raises:
        CollaboratorContractError: adapter devolveu algo fora do contrato.
    """
    try:
        result = await call()
    except Exception as exc:
        logger.warning(
            "collaborator_raised",
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        return Err.of(UNEXPECTED_ERROR, f"{type(exc).__name__}: {exc}")

    if not isinstance(result, (Ok, Err)):
        raise CollaboratorContractError(
            f"{operation} returned {type(result).__name__}, expected Ok or Err"
        )
    return result


class SubmissionStages:
    """Implementação dos estágios, com os colaboradores injetados."""

    def __init__(
        self,
        *,
        messaging: MessagingProviderProtocol,
        notification: NotificationProviderProtocol,
        admission: AdmissionControl,
        ops_log: OperationsLog,
        config: SubmissionConfig,
    ) -> None:
        self._messaging = messaging
        self._notification = notification
        self._admission = admission
        self._ops_log = ops_log
        self._config = config

    # -- entrada ---------------------------------------------------------

    async def validate(self, ctx: SubmissionContext) -> StageResult:
        result = validate_submission(
            ctx.payload,
            reject_free_email_domains=self._config.reject_free_email_domains,
        )
        if isinstance(result, ValidationFailure):
            logger.info(
                "submission_rejected_validation",
                extra={"submission_id": ctx.submission_id, "error_count": len(result.errors)},
            )
            return StageResult.abort(
                SubmissionOutcome(
                    status=SubmissionStatus.REJECTED_VALIDATION,
                    submission_id=ctx.submission_id,
                    validation_errors=tuple(result.errors),
                )
            )
        ctx.submission = result
        return StageResult.proceed()

    async def origin_admission(self, ctx: SubmissionContext) -> StageResult:
        if ctx.origin_decision is None:
            ctx.origin_decision = self._admission.check_origin(ctx.source_address)
        return self._admission_result(ctx, ctx.origin_decision, RateLimitType.IP)

    async def identity_admission(self, ctx: SubmissionContext) -> StageResult:
        ctx.identity_decision = self._admission.check_identity(ctx.email)
        return self._admission_result(ctx, ctx.identity_decision, RateLimitType.EMAIL)

    def _admission_result(
        self,
        ctx: SubmissionContext,
        decision: RateLimitDecision,
        limit_type: RateLimitType,
    ) -> StageResult:
        if decision.allowed:
            return StageResult.proceed()

        record_admission_rejection(limit_type.value, decision.remaining, decision.reset_at_ms)
        return StageResult.abort(
            SubmissionOutcome(
                status=SubmissionStatus.REJECTED_RATE_LIMIT,
                submission_id=ctx.submission_id,
                sanitized_company_name=ctx.slug,
                rate_limit=RateLimitRejection(
                    limit_type=limit_type,
                    limit=self._admission.limit,
                    remaining=decision.remaining,
                    reset_at_ms=decision.reset_at_ms,
                ),
            )
        )

    # -- trabalho externo ------------------------------------------------

    async def announce_start(self, ctx: SubmissionContext) -> StageResult:
        submission = ctx.require_submission()
        logger.info(
            "submission_started",
            extra={
                "submission_id": ctx.submission_id,
                "email": mask_email(submission.email),
                "sanitized_company_name": submission.sanitized_company_name,
            },
        )
        await self._ops_log.info(
            f"New submission {ctx.submission_id} from {submission.email} "
            f'for "{submission.company_name}" (identifier: {submission.sanitized_company_name})'
        )
        return StageResult.proceed()

    async def create_channel(self, ctx: SubmissionContext) -> StageResult:
        """Cria o canal, tentando sufixos -2..-N em caso de name_taken."""
        slug = ctx.slug
        last_error: CollaboratorError | None = None

        for attempt in range(1, self._config.max_channel_attempts + 1):
            name = self._config.channel_name_for_attempt(slug, attempt)
            result = await call_collaborator(
                "create_channel", lambda: self._messaging.create_channel(name)
            )
            if isinstance(result, Ok):
                ctx.channel = result.value
                logger.info(
                    "channel_created",
                    extra={
                        "submission_id": ctx.submission_id,
                        "channel_id": result.value.id,
                        "channel_name": result.value.name,
                        "attempt": attempt,
                    },
                )
                return StageResult.proceed()

            last_error = result.error
            if not result.error.is_name_taken:
                await self._ops_log.error(
                    f"Channel creation failed for {slug}: {result.error.describe()}"
                )
                return self._abort_upstream(
                    ctx, FailureReason.CHANNEL_CREATION_FAILED, result.error
                )

            logger.info(
                "channel_name_taken",
                extra={"submission_id": ctx.submission_id, "channel_name": name, "attempt": attempt},
            )

        await self._ops_log.error(
            f"Channel creation failed for {slug}: exhausted collision retries "
            f"after {self._config.max_channel_attempts} attempts"
        )
        return self._abort_upstream(
            ctx, FailureReason.EXHAUSTED_COLLISION_RETRIES, last_error
        )

    async def fetch_group_members(self, ctx: SubmissionContext) -> StageResult:
        result = await call_collaborator(
            "list_group_members",
            lambda: self._messaging.list_group_members(self._config.guild_group_id),
        )
        if isinstance(result, Err):
            await self._ops_log.error(
                f"Group membership fetch failed for #{self._channel_name(ctx)}: "
                f"{result.error.describe()}"
            )
            return self._abort_upstream(
                ctx, FailureReason.GROUP_MEMBERSHIP_FAILED, result.error
            )
        ctx.group_members = list(result.value)
        return StageResult.proceed()

    async def invite_group(self, ctx: SubmissionContext) -> StageResult:
        if not ctx.group_members:
            logger.info(
                "group_invite_skipped",
                extra={"submission_id": ctx.submission_id, "reason": "empty_group"},
            )
            return StageResult.proceed()

        channel = ctx.require_channel()
        result = await call_collaborator(
            "invite_users",
            lambda: self._messaging.invite_users(channel.id, ctx.group_members),
        )
        if isinstance(result, Err):
            await self._ops_log.warn(
                f"Group invite failed for #{channel.name}: {result.error.describe()}"
            )
            return StageResult.partial(PartialFailure.GROUP_INVITE)
        return StageResult.proceed()

    async def invite_guest(self, ctx: SubmissionContext) -> StageResult:
        channel = ctx.require_channel()
        result = await call_collaborator(
            "invite_external_guest",
            lambda: self._messaging.invite_external_guest(ctx.email, channel.id),
        )
        if isinstance(result, Err):
            await self._ops_log.warn(
                f"Guest invite failed for {ctx.email} on #{channel.name}: "
                f"{result.error.describe()}"
            )
            return StageResult.partial(PartialFailure.GUEST_INVITE)
        return StageResult.proceed()

    async def send_notification_email(self, ctx: SubmissionContext) -> StageResult:
        submission = ctx.require_submission()
        channel = ctx.require_channel()
        params = WelcomeEmailParams(
            company_name=submission.company_name,
            email=submission.email,
            channel_name=channel.name,
            channel_url=self._config.channel_url(channel.id),
        )
        result = await call_collaborator(
            "send_templated_email",
            lambda: self._notification.send_templated_email(submission.email, params),
        )
        if isinstance(result, Err):
            await self._ops_log.warn(
                f"Notification email failed for {submission.email}: {result.error.describe()}"
            )
            return StageResult.partial(PartialFailure.NOTIFICATION_EMAIL)
        ctx.email_sent = True
        return StageResult.proceed()

    async def log_outcome(self, ctx: SubmissionContext) -> StageResult:
        channel_ref = f"#{self._channel_name(ctx)}"
        if ctx.partial_failures:
            labels = ", ".join(PARTIAL_FAILURE_LABELS[p] for p in ctx.partial_failures)
            await self._ops_log.warn(
                f"Submission processed for {ctx.email} with {channel_ref}. "
                f"Partial failures: {labels}"
            )
        else:
            await self._ops_log.info(
                f"Submission successfully processed for {ctx.email}: {channel_ref}"
            )

        logger.info(
            "submission_succeeded",
            extra={
                "submission_id": ctx.submission_id,
                "channel_id": ctx.channel.id if ctx.channel else None,
                "partial_failures": [p.value for p in ctx.partial_failures],
                "email_sent": ctx.email_sent,
            },
        )
        return StageResult.proceed()

    # -- helpers ---------------------------------------------------------

    @staticmethod
    def _channel_name(ctx: SubmissionContext) -> str:
        return ctx.channel.name if ctx.channel else ""

    @staticmethod
    def _abort_upstream(
        ctx: SubmissionContext,
        reason: FailureReason,
        error: CollaboratorError | None,
    ) -> StageResult:
        extra: dict[str, Any] = {
            "submission_id": ctx.submission_id,
            "reason": reason.value,
            "upstream_code": error.code if error else None,
        }
        if error is not None and error.is_rate_limited:
            extra["retry_after_seconds"] = error.retry_after_seconds
        logger.error("submission_failed_upstream", extra=extra)
        return StageResult.abort(
            SubmissionOutcome(
                status=SubmissionStatus.FAILED_UPSTREAM,
                submission_id=ctx.submission_id,
                sanitized_company_name=ctx.slug,
                channel_id=ctx.channel.id if ctx.channel else None,
                channel_name=ctx.channel.name if ctx.channel else None,
                failure_reason=reason,
                upstream_code=error.code if error else None,
                upstream_detail=error.detail if error else None,
            )
        )
