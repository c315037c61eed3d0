"""Pipeline linear de estágios nomeados.

A ordem dos estágios é a máquina de estados da submissão:

    validate → origin_admission → identity_admission → announce_start
    → create_channel → fetch_group_members → invite_group → invite_guest
    → send_notification_email → log_outcome

Nenhum estágio roda em paralelo com outro da mesma submissão.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.observability.metrics import record_stage_latency
from app.use_cases.submission.context import StageAction

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from app.domain.outcome import SubmissionOutcome
    from app.use_cases.submission.context import StageResult, SubmissionContext
    from app.use_cases.submission.stages import SubmissionStages

logger = logging.getLogger(__name__)

STAGE_ORDER: tuple[str, ...] = (
    "validate",
    "origin_admission",
    "identity_admission",
    "announce_start",
    "create_channel",
    "fetch_group_members",
    "invite_group",
    "invite_guest",
    "send_notification_email",
    "log_outcome",
)


@dataclass(frozen=True)
class Stage:
    name: str
    run: Callable[[SubmissionContext], Awaitable[StageResult]]


class SubmissionPipeline:
    """Executa os estágios em ordem até o fim ou até um abort."""

    def __init__(self, stages: Sequence[Stage]) -> None:
        self._stages = tuple(stages)

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(stage.name for stage in self._stages)

    @classmethod
    def from_stages(cls, stages: SubmissionStages) -> SubmissionPipeline:
        """Monta o pipeline padrão a partir dos métodos de SubmissionStages."""
        return cls([Stage(name, getattr(stages, name)) for name in STAGE_ORDER])

    async def run(self, ctx: SubmissionContext) -> SubmissionOutcome:
        for stage in self._stages:
            start = time.perf_counter()
            result = await stage.run(ctx)
            record_stage_latency(
                stage.name,
                (time.perf_counter() - start) * 1000,
                submission_id=ctx.submission_id,
                result=result.action.value,
            )

            if result.action is StageAction.ABORT and result.outcome is not None:
                logger.info(
                    "submission_aborted",
                    extra={
                        "submission_id": ctx.submission_id,
                        "stage": stage.name,
                        "status": result.outcome.status.value,
                    },
                )
                return result.outcome

            if result.action is StageAction.PARTIAL and result.partial_failure is not None:
                ctx.record_partial(result.partial_failure)

        return ctx.success_outcome()
