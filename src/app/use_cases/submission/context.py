"""Estado por submissão e resultado de cada estágio do pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from app.domain.outcome import SubmissionOutcome, SubmissionStatus
from config.settings.slack import DEFAULT_CHANNEL_PREFIX, SLACK_APP_BASE_URL
from utils.errors import IntakeError

if TYPE_CHECKING:
    from app.domain.outcome import PartialFailure
    from app.domain.submission import ValidatedSubmission
    from app.protocols.rate_limiter import RateLimitDecision
    from app.protocols.results import ChannelRef

MAX_CHANNEL_ATTEMPTS = 10


@dataclass(frozen=True)
class SubmissionConfig:
    """Parâmetros do fluxo vindos das settings.

    Attributes:
        workspace_id: Team id do Slack (URL do canal)
        guild_group_id: User group convidado para cada canal
        channel_prefix: Prefixo do nome do canal
        reject_free_email_domains: Recusa emails de provedores gratuitos
        max_channel_attempts: Tentativas de nome em caso de colisão
    """

    workspace_id: str = ""
    guild_group_id: str = ""
    channel_prefix: str = DEFAULT_CHANNEL_PREFIX
    reject_free_email_domains: bool = False
    max_channel_attempts: int = MAX_CHANNEL_ATTEMPTS

    def base_channel_name(self, slug: str) -> str:
        return f"{self.channel_prefix}{slug}"

    def channel_name_for_attempt(self, slug: str, attempt: int) -> str:
        """Nome do canal na tentativa N (1-based): base, base-2, base-3..."""
        base = self.base_channel_name(slug)
        return base if attempt <= 1 else f"{base}-{attempt}"

    def channel_url(self, channel_id: str) -> str:
        return f"{SLACK_APP_BASE_URL}/{self.workspace_id}/{channel_id}"


class StageAction(StrEnum):
    PROCEED = "proceed"
    PARTIAL = "partial"
    ABORT = "abort"


@dataclass(frozen=True)
class StageResult:
    """Retorno de um estágio: seguir, seguir com falha parcial, ou abortar."""

    action: StageAction
    partial_failure: PartialFailure | None = None
    outcome: SubmissionOutcome | None = None

    @classmethod
    def proceed(cls) -> StageResult:
        return cls(StageAction.PROCEED)

    @classmethod
    def partial(cls, step: PartialFailure) -> StageResult:
        return cls(StageAction.PARTIAL, partial_failure=step)

    @classmethod
    def abort(cls, outcome: SubmissionOutcome) -> StageResult:
        return cls(StageAction.ABORT, outcome=outcome)


@dataclass
class SubmissionContext:
    """Estado mutável de uma única submissão.

    Pertence a uma invocação; nunca é compartilhado entre submissões.
    """

    payload: Any
    source_address: str
    submission_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    origin_decision: RateLimitDecision | None = None
    identity_decision: RateLimitDecision | None = None
    submission: ValidatedSubmission | None = None
    channel: ChannelRef | None = None
    group_members: list[str] = field(default_factory=list)
    email_sent: bool = False
    partial_failures: list[PartialFailure] = field(default_factory=list)

    def require_submission(self) -> ValidatedSubmission:
        if self.submission is None:
            raise IntakeError("estágio executado antes da validação")
        return self.submission

    def require_channel(self) -> ChannelRef:
        if self.channel is None:
            raise IntakeError("estágio executado antes da criação do canal")
        return self.channel

    def record_partial(self, step: PartialFailure) -> None:
        if step not in self.partial_failures:
            self.partial_failures.append(step)

    @property
    def email(self) -> str:
        return self.submission.email if self.submission else ""

    @property
    def slug(self) -> str:
        return self.submission.sanitized_company_name if self.submission else ""

    def _latest_reset(self) -> int | None:
        resets = [
            d.reset_at_ms for d in (self.origin_decision, self.identity_decision) if d is not None
        ]
        return max(resets) if resets else None

    def success_outcome(self) -> SubmissionOutcome:
        return SubmissionOutcome(
            status=SubmissionStatus.SUCCEEDED,
            submission_id=self.submission_id,
            sanitized_company_name=self.slug,
            channel_id=self.channel.id if self.channel else None,
            channel_name=self.channel.name if self.channel else None,
            email_sent=self.email_sent,
            partial_failures=tuple(self.partial_failures),
            remaining_origin=self.origin_decision.remaining if self.origin_decision else None,
            remaining_identity=(
                self.identity_decision.remaining if self.identity_decision else None
            ),
            reset_at_ms=self._latest_reset(),
        )
