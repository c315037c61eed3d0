"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CollaboratorContractError,
    ConfigurationError,
    IntakeError,
)

__all__ = [
    "CollaboratorContractError",
    "ConfigurationError",
    "IntakeError",
]
