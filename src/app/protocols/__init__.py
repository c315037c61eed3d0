"""Protocolos e contratos do core da aplicação."""

from .messaging import MessagingProviderProtocol, Severity
from .notification import NotificationProviderProtocol, WelcomeEmailParams
from .rate_limiter import RateLimitDecision, RateLimiterProtocol, RateLimitStatus
from .results import Ack, ChannelRef, CollaboratorError, Err, Ok, Result

__all__ = [
    "Ack",
    "ChannelRef",
    "CollaboratorError",
    "Err",
    "MessagingProviderProtocol",
    "NotificationProviderProtocol",
    "Ok",
    "RateLimitDecision",
    "RateLimitStatus",
    "RateLimiterProtocol",
    "Result",
    "Severity",
    "WelcomeEmailParams",
]
