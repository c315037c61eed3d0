"""Use case de submissão (pipeline linear de estágios)."""

from .context import (
    MAX_CHANNEL_ATTEMPTS,
    StageAction,
    StageResult,
    SubmissionConfig,
    SubmissionContext,
)
from .pipeline import STAGE_ORDER, Stage, SubmissionPipeline
from .process_submission import ProcessSubmissionUseCase
from .stages import SubmissionStages, call_collaborator

__all__ = [
    "MAX_CHANNEL_ATTEMPTS",
    "STAGE_ORDER",
    "ProcessSubmissionUseCase",
    "Stage",
    "StageAction",
    "StageResult",
    "SubmissionConfig",
    "SubmissionContext",
    "SubmissionPipeline",
    "SubmissionStages",
    "call_collaborator",
]
