"""API: camada de borda e adapters externos.

Responsabilidades:
- Receber requests HTTP do formulário
- Ler IP de origem e corpo JSON
- Falar com Slack e Postmark via HTTP
- Traduzir falhas de transporte em ``Err``

Subpastas:
- connectors/: clientes HTTP (Slack Web API, Postmark)
- routes/: endpoints HTTP (intake, health, ping)

NÃO PODE conter: regras de validação, admissão, orquestração de use cases.
"""
