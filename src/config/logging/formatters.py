"""Formatter JSON (python-json-logger) com os campos fixos do serviço.

Saída típica:
    {"asctime": "2026-10-19 10:30:00,120", "level": "INFO",
     "logger": "app.use_cases.submission.pipeline",
     "message": "submission_succeeded", "correlation_id": "abc-123",
     "service": "conference-intake", "submission_id": "..."}

Campos passados em ``extra`` são anexados ao objeto.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de saída dos campos fixos
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Formatter JSON; não escapa Unicode (nomes de empresa acentuados)."""
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
