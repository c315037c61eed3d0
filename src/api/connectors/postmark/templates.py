"""Templates do email de boas-vindas.

O corpo HTML escapa todos os valores interpolados; o texto puro não.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.notification import WelcomeEmailParams

_STYLE = """\
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333;
               max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background-color: #0052cc; color: white; padding: 20px;
                  text-align: center; border-radius: 8px 8px 0 0; }
        .content { background-color: #f9f9f9; padding: 30px; border-radius: 0 0 8px 8px; }
        .channel-link { display: inline-block; background-color: #0052cc; color: white;
                        padding: 12px 24px; text-decoration: none; border-radius: 4px;
                        margin: 20px 0; font-weight: bold; }
        .footer { margin-top: 30px; font-size: 14px; color: #666; text-align: center; }"""

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Welcome to The Guild Conference Channel</title>
    <style>
{style}
    </style>
</head>
<body>
    <div class="header">
        <h1>Welcome to The Guild Conference!</h1>
    </div>
    <div class="content">
        <h2>Hi {company_name}!</h2>
        <p>Welcome to The Guild Conference! We're excited to have you join us.</p>
        <p>We've created a dedicated Slack channel for your company where you can:</p>
        <ul>
            <li>Connect with our team</li>
            <li>Ask questions about the conference</li>
            <li>Get updates and announcements</li>
            <li>Network with other attendees</li>
        </ul>
        <p>Your dedicated channel: <strong>#{channel_name}</strong></p>
        <p style="text-align: center;">
            <a href="{channel_url}" class="channel-link">Join Your Channel</a>
        </p>
        <p>If you have any questions or need assistance, feel free to reach out to us in the channel.</p>
        <p>Looking forward to seeing you at the conference!</p>
        <p>Best regards,<br>
        The Guild Conference Team</p>
    </div>
    <div class="footer">
        <p>This email was sent to you because you registered for The Guild Conference.</p>
    </div>
</body>
</html>"""

_TEXT_TEMPLATE = """\
Welcome to The Guild Conference!

Hi {company_name}!

Welcome to The Guild Conference! We're excited to have you join us.

We've created a dedicated Slack channel for your company where you can:
- Connect with our team
- Ask questions about the conference
- Get updates and announcements
- Network with other attendees

Your dedicated channel: #{channel_name}

Join your channel: {channel_url}

If you have any questions or need assistance, feel free to reach out to us in the channel.

Looking forward to seeing you at the conference!

Best regards,
The Guild Conference Team

---
This email was sent to you because you registered for The Guild Conference."""


def welcome_subject(channel_name: str) -> str:
    return f"Welcome to The Guild Conference - Your channel #{channel_name} is ready!"


def render_welcome_html(params: WelcomeEmailParams) -> str:
    """Corpo HTML; valores escapados (inclusive aspas)."""
    return _HTML_TEMPLATE.format(
        style=_STYLE,
        company_name=html.escape(params.company_name, quote=True),
        channel_name=html.escape(params.channel_name, quote=True),
        channel_url=html.escape(params.channel_url, quote=True),
    )


def render_welcome_text(params: WelcomeEmailParams) -> str:
    return _TEXT_TEMPLATE.format(
        company_name=params.company_name,
        channel_name=params.channel_name,
        channel_url=params.channel_url,
    )
