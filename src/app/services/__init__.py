"""Serviços de aplicação.

Unidades reutilizáveis usadas pelos casos de uso.
Implementações concretas de IO ficam em api/connectors/ e app/infra/.
"""

from app.services.operations_log import OperationsLog

__all__ = [
    "OperationsLog",
]
