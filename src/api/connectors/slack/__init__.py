"""Conector Slack - adapter de borda para a Slack Web API.

Único ponto de IO com o Slack: canais, user groups, convites e
mensagens do canal de operações.
"""

from .client import SlackWebClient, create_slack_client, format_ops_message
from .errors import parse_slack_response

__all__ = [
    "SlackWebClient",
    "create_slack_client",
    "format_ops_message",
    "parse_slack_response",
]
