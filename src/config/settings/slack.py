"""Settings específicas de Slack.

Configurações do workspace usado para criar canais de empresas,
convidar o grupo interno e publicar no canal de operações.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

SLACK_API_BASE_URL: str = "https://slack.com/api/"
SLACK_APP_BASE_URL: str = "https://app.slack.com/client"
DEFAULT_CHANNEL_PREFIX: str = "ext-theguild-"


@dataclass(frozen=True)
class SlackSettings:
    """Configurações do Slack.

    Attributes:
        bot_token: Token do bot (xoxb-...)
        workspace_id: ID do workspace (team id) usado na URL do canal
        guild_group_id: ID do user group interno convidado para cada canal
        log_channel_id: Canal de operações (vazio = ops log desligado)
        channel_prefix: Prefixo aplicado ao nome do canal
        api_base_url: URL base da Web API
        request_timeout_seconds: Timeout por chamada
        guest_expiration_days: Validade do convite de guest externo
    """

    bot_token: str = ""
    workspace_id: str = ""
    guild_group_id: str = ""
    log_channel_id: str = ""
    channel_prefix: str = DEFAULT_CHANNEL_PREFIX
    api_base_url: str = SLACK_API_BASE_URL
    request_timeout_seconds: float = 10.0
    guest_expiration_days: int = 30

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Slack.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.bot_token:
            errors.append("SLACK_BOT_TOKEN não configurado")

        if not self.workspace_id:
            errors.append("SLACK_WORKSPACE_ID não configurado")

        if not self.guild_group_id:
            errors.append("SLACK_GUILD_GROUP_ID não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("SLACK_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.guest_expiration_days < 1:
            errors.append("SLACK_GUEST_EXPIRATION_DAYS deve ser >= 1")

        return errors


def _load_from_env() -> SlackSettings:
    """Carrega SlackSettings a partir de variáveis de ambiente."""
    return SlackSettings(
        bot_token=os.getenv("SLACK_BOT_TOKEN", ""),
        workspace_id=os.getenv("SLACK_WORKSPACE_ID", ""),
        guild_group_id=os.getenv("SLACK_GUILD_GROUP_ID", ""),
        log_channel_id=os.getenv("SLACK_LOG_CHANNEL_ID", ""),
        channel_prefix=os.getenv("SLACK_CHANNEL_PREFIX", DEFAULT_CHANNEL_PREFIX),
        api_base_url=os.getenv("SLACK_API_BASE_URL", SLACK_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("SLACK_REQUEST_TIMEOUT_SECONDS", "10")
        ),
        guest_expiration_days=int(os.getenv("SLACK_GUEST_EXPIRATION_DAYS", "30")),
    )


@lru_cache(maxsize=1)
def get_slack_settings() -> SlackSettings:
    """Retorna instância cacheada de SlackSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
