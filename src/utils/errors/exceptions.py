"""Exceções compartilhadas do serviço de intake."""

from __future__ import annotations


class IntakeError(RuntimeError):
    """Base para falhas internas do serviço (não de input do usuário)."""


class ConfigurationError(IntakeError):
    """Configuração inválida detectada no boot (staging/production)."""


class CollaboratorContractError(IntakeError):
    """Colaborador externo respondeu fora do contrato esperado.

    Ex.: adapter que retorna algo diferente de ``Ok``/``Err``.
    """
