"""Connectors: adapters de borda para APIs externas.

Estrutura:
- http_base: cliente httpx compartilhado (uma tentativa por chamada)
- slack/: Slack Web API (canais, convites, canal de operações)
- postmark/: Postmark (email de boas-vindas)

Cada colaborador tem seu próprio connector; falhas viram ``Err``.
"""

__all__: list[str] = []
