"""Registro de métricas via structured logging.

As métricas são logs estruturados, agregáveis depois pela plataforma
de logs (ex.: Cloud Logging, CloudWatch Insights).

Métricas suportadas:
- Latência por estágio do pipeline de submissão
- Rejeições de admissão (rate limit por IP/email), sem expor a chave

Uso:
    start = time.perf_counter()
    # ... estágio ...
    record_stage_latency("create_channel", (time.perf_counter() - start) * 1000)

    record_admission_rejection("ip", remaining=0)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_stage_latency(
    stage: str,
    latency_ms: float,
    *,
    submission_id: str | None = None,
    result: str = "proceed",
) -> None:
    """Registra latência de um estágio do pipeline.

    Args:
        stage: Nome do estágio (ex: "create_channel")
        latency_ms: Latência em milissegundos
        submission_id: ID da submissão, quando já atribuído
        result: Resultado do estágio (proceed|partial|abort)
    """
    logger.info(
        "metric_stage_latency",
        extra={
            "metric_type": "latency",
            "component": "submission_pipeline",
            "operation": stage,
            "result": result,
            "latency_ms": round(latency_ms, 2),
            "submission_id": submission_id,
            "correlation_id": get_correlation_id(),
        },
    )


def record_admission_rejection(
    limit_type: str,
    remaining: int = 0,
    reset_at_ms: int | None = None,
) -> None:
    """Registra rejeição de admissão (counter).

    A chave (IP ou email) nunca entra no log.

    Args:
        limit_type: "ip" ou "email"
        remaining: Cota restante no momento da rejeição
        reset_at_ms: Fim da janela atual (epoch ms)
    """
    logger.info(
        "metric_admission_rejected",
        extra={
            "metric_type": "counter",
            "component": "admission",
            "limit_type": limit_type,
            "remaining": remaining,
            "reset_at_ms": reset_at_ms,
            "correlation_id": get_correlation_id(),
        },
    )
