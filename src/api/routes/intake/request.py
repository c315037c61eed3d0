"""Leitura do request de entrada (IP de origem e corpo JSON)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fastapi import Request

UNKNOWN_ADDRESS = "unknown"


class InvalidJsonError(ValueError):
    """Corpo do request não é JSON válido."""


def client_address(request: Request) -> str:
    """IP de origem: CF-Connecting-IP, primeiro hop de X-Forwarded-For, peer."""
    cf_ip = request.headers.get("cf-connecting-ip", "").strip()
    if cf_ip:
        return cf_ip

    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_ADDRESS


def parse_json_body(raw_body: bytes) -> Any:
    """Decodifica o corpo; qualquer valor JSON é aceito (validado adiante).

    Raises:
        InvalidJsonError: corpo vazio, não UTF-8 ou JSON malformado.
    """
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc
