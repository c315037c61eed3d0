"""Observabilidade: correlation id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, correlation_scope
    from app.observability import record_stage_latency, record_admission_rejection
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_scope,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_admission_rejection,
    record_stage_latency,
)

__all__ = [
    "CORRELATION_HEADER",
    "correlation_scope",
    "get_correlation_id",
    "record_admission_rejection",
    "record_stage_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
