"""Stores: implementações concretas de estado.

Módulos disponíveis:
    - rate_limiter: limitador fixed-window em memória e AdmissionControl
"""

from __future__ import annotations

from app.infra.stores.rate_limiter import AdmissionControl, FixedWindowRateLimiter

__all__ = [
    "AdmissionControl",
    "FixedWindowRateLimiter",
]
