"""Testes do bootstrap (validação de settings e wiring)."""

from __future__ import annotations

import pytest

from app.bootstrap import (
    get_rate_limiter,
    get_submission_use_case,
    validate_runtime_settings,
)
from app.bootstrap.dependencies import create_submission_config
from utils.errors import ConfigurationError

_SLACK_ENV = {
    "SLACK_BOT_TOKEN": "xoxb-1",
    "SLACK_WORKSPACE_ID": "T1",
    "SLACK_GUILD_GROUP_ID": "S1",
    "POSTMARK_API_KEY": "pm-1",
}


def _set_env(monkeypatch: pytest.MonkeyPatch, **extra: str) -> None:
    for name, value in {**_SLACK_ENV, **extra}.items():
        monkeypatch.setenv(name, value)


class TestValidateRuntimeSettings:
    def test_production_with_missing_settings_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("CORS_ALLOWED_ORIGIN", "https://form.theguild.dev")
        monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)

        with pytest.raises(ConfigurationError, match="SLACK_BOT_TOKEN"):
            validate_runtime_settings()

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)

        validate_runtime_settings()

    def test_valid_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _set_env(
            monkeypatch,
            ENVIRONMENT="production",
            CORS_ALLOWED_ORIGIN="https://form.theguild.dev",
            RATE_LIMIT="10",
            RATE_LIMIT_WINDOW_SEC="3600",
        )

        validate_runtime_settings()


class TestWiring:
    def test_submission_config_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _set_env(monkeypatch, SLACK_CHANNEL_PREFIX="conf-", REJECT_FREE_EMAIL_DOMAINS="1")

        config = create_submission_config()

        assert config.workspace_id == "T1"
        assert config.guild_group_id == "S1"
        assert config.channel_prefix == "conf-"
        assert config.reject_free_email_domains is True

    def test_singletons(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _set_env(monkeypatch, RATE_LIMIT="7")

        use_case = get_submission_use_case()

        assert get_submission_use_case() is use_case
        assert get_rate_limiter() is get_rate_limiter()
        assert use_case.admission_limit == 7
