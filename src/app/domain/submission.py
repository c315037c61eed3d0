"""Validação do corpo de submissão (nome da empresa + email).

O formato do request é modelado com pydantic; os erros do pydantic são
traduzidos para mensagens estáveis por campo, expostas ao usuário:

- campo ausente → ``"<campo>: Required"``
- tipo errado → ``"<campo>: Expected string"``
- ``companyName`` vazio → ``"companyName: Company name is required"``
- email malformado → ``"email: Invalid email format"``

Depois da validação de forma, o nome é sanitizado; slug vazio é um erro
próprio (não de formato).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.domain.company_slug import sanitize_company_name

MAX_COMPANY_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 254
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

ERROR_NOT_AN_OBJECT = "Request body must be a JSON object"
ERROR_EMPTY_SLUG = "Company name contains no valid characters after sanitization"
ERROR_FREE_EMAIL = "email: Please use a company email address"

FREE_EMAIL_DOMAINS = frozenset(
    {
        "gmail.com",
        "googlemail.com",
        "yahoo.com",
        "hotmail.com",
        "outlook.com",
        "live.com",
        "aol.com",
        "icloud.com",
        "me.com",
        "protonmail.com",
        "proton.me",
        "gmx.com",
        "mail.com",
    }
)

# (campo, tipo de erro do pydantic) → mensagem
_FIELD_MESSAGES: dict[tuple[str, str], str] = {
    ("companyName", "string_too_short"): "Company name is required",
    ("companyName", "string_too_long"): "Company name is too long",
    ("email", "string_too_short"): "Invalid email format",
    ("email", "string_too_long"): "Invalid email format",
    ("email", "string_pattern_mismatch"): "Invalid email format",
}

_GENERIC_MESSAGES: dict[str, str] = {
    "missing": "Required",
    "string_type": "Expected string",
}


class PreviewPayload(BaseModel):
    """Corpo de ``/api/sanitize-preview``."""

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    company_name: str = Field(
        alias="companyName", min_length=1, max_length=MAX_COMPANY_NAME_LENGTH
    )


class SubmissionPayload(PreviewPayload):
    """Corpo de ``/api/submit``."""

    email: str = Field(
        min_length=1, max_length=MAX_EMAIL_LENGTH, pattern=EMAIL_PATTERN
    )


@dataclass(frozen=True)
class ValidatedSubmission:
    """Submissão válida.

    ``company_name`` preserva o texto original (sem trim);
    ``email`` é "" no preview.
    """

    company_name: str
    email: str
    sanitized_company_name: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ValidationFailure:
    """Lista de mensagens de erro, na ordem dos campos."""

    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False


def _translate_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field_name = str(loc[0]) if loc else ""
        error_type = error.get("type", "")
        text = _FIELD_MESSAGES.get((field_name, error_type)) or _GENERIC_MESSAGES.get(
            error_type, "Invalid value"
        )
        message = f"{field_name}: {text}" if field_name else text
        if message not in messages:
            messages.append(message)
    return messages


_PayloadT = TypeVar("_PayloadT", bound=PreviewPayload)


def _parse(model: type[_PayloadT], payload: object) -> _PayloadT | list[str]:
    if not isinstance(payload, dict):
        return [ERROR_NOT_AN_OBJECT]
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        return _translate_errors(exc)


def _with_slug(company_name: str, email: str) -> ValidatedSubmission | ValidationFailure:
    slug = sanitize_company_name(company_name)
    if not slug:
        return ValidationFailure(errors=[ERROR_EMPTY_SLUG])
    return ValidatedSubmission(
        company_name=company_name,
        email=email,
        sanitized_company_name=slug,
    )


def validate_submission(
    payload: Any,
    *,
    reject_free_email_domains: bool = False,
) -> ValidatedSubmission | ValidationFailure:
    """Valida e sanitiza o corpo de uma submissão completa.

    Args:
        payload: Corpo JSON já decodificado (qualquer tipo).
        reject_free_email_domains: Recusa provedores gratuitos (gmail etc.).

    Returns:
        ValidatedSubmission ou ValidationFailure com mensagens estáveis.
    """
    parsed = _parse(SubmissionPayload, payload)
    if isinstance(parsed, list):
        return ValidationFailure(errors=parsed)

    if reject_free_email_domains and is_free_email_domain(parsed.email):
        return ValidationFailure(errors=[ERROR_FREE_EMAIL])

    return _with_slug(parsed.company_name, parsed.email)


def validate_preview(payload: Any) -> ValidatedSubmission | ValidationFailure:
    """Valida apenas ``companyName`` (preview não exige email)."""
    parsed = _parse(PreviewPayload, payload)
    if isinstance(parsed, list):
        return ValidationFailure(errors=parsed)
    return _with_slug(parsed.company_name, "")


def is_free_email_domain(email: str) -> bool:
    """True se o domínio do email é de provedor gratuito.

    Case-insensitive; email sem local part ou sem domínio → False.
    """
    local, sep, domain = email.rpartition("@")
    if not sep or not local or not domain:
        return False
    return domain.lower() in FREE_EMAIL_DOMAINS


def mask_email(email: str) -> str:
    """Mascara email para logs locais: ``te***@example.com``."""
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain:
        return "[invalid-email]"
    return f"{local[:2]}***@{domain}"
