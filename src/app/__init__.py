"""App: coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: slug, validação e outcomes (puro, sem IO)
- use_cases/: pipeline de submissão (sem IO direto)
- services/: serviços de aplicação (ops log)
- infra/: implementações concretas de estado (limitador)
- protocols/: contratos dos colaboradores externos
- observability/: correlation id e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
