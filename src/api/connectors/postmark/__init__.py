"""Conector Postmark - envio do email de boas-vindas."""

from .client import PostmarkEmailClient, create_postmark_client
from .templates import render_welcome_html, render_welcome_text, welcome_subject

__all__ = [
    "PostmarkEmailClient",
    "create_postmark_client",
    "render_welcome_html",
    "render_welcome_text",
    "welcome_subject",
]
