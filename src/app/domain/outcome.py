"""Resultados terminais de uma submissão e do preview.

Cada chamada ao orquestrador termina em exatamente um SubmissionStatus.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class SubmissionStatus(StrEnum):
    """Estado terminal de uma submissão."""

    SUCCEEDED = "succeeded"
    REJECTED_VALIDATION = "rejected_validation"
    REJECTED_RATE_LIMIT = "rejected_rate_limit"
    FAILED_UPSTREAM = "failed_upstream"


class PartialFailure(StrEnum):
    """Passos não fatais que podem falhar sem abortar a submissão."""

    GROUP_INVITE = "group-invite"
    GUEST_INVITE = "guest-invite"
    NOTIFICATION_EMAIL = "notification-email"


class RateLimitType(StrEnum):
    """Namespace de admissão que rejeitou a submissão."""

    IP = "ip"
    EMAIL = "email"


class FailureReason(StrEnum):
    """Motivo de failed_upstream."""

    EXHAUSTED_COLLISION_RETRIES = "exhausted_collision_retries"
    CHANNEL_CREATION_FAILED = "channel_creation_failed"
    GROUP_MEMBERSHIP_FAILED = "group_membership_failed"


@dataclass(frozen=True)
class RateLimitRejection:
    """Detalhes da rejeição por cota (para headers X-RateLimit-*)."""

    limit_type: RateLimitType
    limit: int
    remaining: int
    reset_at_ms: int


@dataclass(frozen=True)
class SubmissionOutcome:
    """Resultado de uma submissão.

    Attributes:
        status: Estado terminal
        submission_id: UUID v4 da submissão
        sanitized_company_name: Slug derivado (quando validado)
        channel_id / channel_name: Canal criado (succeeded)
        email_sent: Email de boas-vindas aceito pelo provedor
        partial_failures: Passos não fatais que falharam, em ordem
        validation_errors: Mensagens de validação (rejected_validation)
        rate_limit: Detalhes da cota (rejected_rate_limit)
        failure_reason / upstream_code / upstream_detail: failed_upstream
        remaining_origin / remaining_identity: Cota restante após admissão
        reset_at_ms: Fim da janela mais distante entre as duas chaves
    """

    status: SubmissionStatus
    submission_id: str = ""
    sanitized_company_name: str = ""
    channel_id: str | None = None
    channel_name: str | None = None
    email_sent: bool = False
    partial_failures: tuple[PartialFailure, ...] = ()
    validation_errors: tuple[str, ...] = ()
    rate_limit: RateLimitRejection | None = None
    failure_reason: FailureReason | None = None
    upstream_code: str | None = None
    upstream_detail: str | None = None
    remaining_origin: int | None = None
    remaining_identity: int | None = None
    reset_at_ms: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is SubmissionStatus.SUCCEEDED


@dataclass(frozen=True)
class PreviewOutcome:
    """Resultado do preview de sanitização."""

    sanitized_company_name: str = ""
    validation_errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.validation_errors
