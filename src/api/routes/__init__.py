"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (intake, health, ping)
- Leitura inicial do request (IP de origem, corpo JSON)
- Delegação para o use case de submissão
- Mapeamento de outcomes para respostas HTTP

Estrutura:
- routes/intake/: /api/submit e /api/sanitize-preview
- routes/health/: /health e /api/ping

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
