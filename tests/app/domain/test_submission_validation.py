"""Testes da validação do corpo de submissão."""

from __future__ import annotations

from app.domain.submission import (
    ERROR_EMPTY_SLUG,
    ERROR_FREE_EMAIL,
    ERROR_NOT_AN_OBJECT,
    ValidatedSubmission,
    ValidationFailure,
    is_free_email_domain,
    mask_email,
    validate_preview,
    validate_submission,
)


class TestValidateSubmission:
    """Testes de validate_submission."""

    def test_valid_payload(self) -> None:
        result = validate_submission({"companyName": "Acme Corp", "email": "ana@acme.io"})

        assert isinstance(result, ValidatedSubmission)
        assert result.ok is True
        assert result.company_name == "Acme Corp"
        assert result.email == "ana@acme.io"
        assert result.sanitized_company_name == "acme-corp"

    def test_missing_fields(self) -> None:
        result = validate_submission({})

        assert isinstance(result, ValidationFailure)
        assert result.ok is False
        assert result.errors == ["companyName: Required", "email: Required"]

    def test_wrong_types(self) -> None:
        result = validate_submission({"companyName": 42, "email": ["x"]})

        assert isinstance(result, ValidationFailure)
        assert result.errors == ["companyName: Expected string", "email: Expected string"]

    def test_empty_company_name(self) -> None:
        result = validate_submission({"companyName": "", "email": "ana@acme.io"})

        assert isinstance(result, ValidationFailure)
        assert result.errors == ["companyName: Company name is required"]

    def test_invalid_email(self) -> None:
        result = validate_submission({"companyName": "Acme", "email": "not-an-email"})

        assert isinstance(result, ValidationFailure)
        assert result.errors == ["email: Invalid email format"]

    def test_company_name_too_long(self) -> None:
        result = validate_submission({"companyName": "a" * 201, "email": "ana@acme.io"})

        assert isinstance(result, ValidationFailure)
        assert result.errors == ["companyName: Company name is too long"]

    def test_slug_empty_after_sanitization(self) -> None:
        result = validate_submission({"companyName": "🚀🚀", "email": "ana@acme.io"})

        assert isinstance(result, ValidationFailure)
        assert result.errors == [ERROR_EMPTY_SLUG]

    def test_non_object_body(self) -> None:
        for payload in (None, [], "text", 3):
            result = validate_submission(payload)
            assert isinstance(result, ValidationFailure)
            assert result.errors == [ERROR_NOT_AN_OBJECT]

    def test_extra_fields_ignored(self) -> None:
        result = validate_submission(
            {"companyName": "Acme", "email": "ana@acme.io", "phone": "123"}
        )
        assert isinstance(result, ValidatedSubmission)

    def test_free_email_rejected_when_enabled(self) -> None:
        payload = {"companyName": "Acme", "email": "ana@Gmail.com"}

        assert isinstance(validate_submission(payload), ValidatedSubmission)
        result = validate_submission(payload, reject_free_email_domains=True)
        assert isinstance(result, ValidationFailure)
        assert result.errors == [ERROR_FREE_EMAIL]


class TestValidatePreview:
    """Preview valida só companyName."""

    def test_preview_without_email(self) -> None:
        result = validate_preview({"companyName": "Café 🚀!"})

        assert isinstance(result, ValidatedSubmission)
        assert result.sanitized_company_name == "cafe"
        assert result.email == ""

    def test_preview_missing_company(self) -> None:
        result = validate_preview({"email": "ana@acme.io"})

        assert isinstance(result, ValidationFailure)
        assert result.errors == ["companyName: Required"]


class TestEmailHelpers:
    def test_is_free_email_domain(self) -> None:
        assert is_free_email_domain("x@yahoo.com") is True
        assert is_free_email_domain("x@acme.io") is False
        assert is_free_email_domain("nodomain") is False
        assert is_free_email_domain("@gmail.com") is False

    def test_mask_email(self) -> None:
        assert mask_email("ana.silva@acme.io") == "an***@acme.io"
        assert mask_email("broken") == "[invalid-email]"
