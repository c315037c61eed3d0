"""Sanitização de nome de empresa para identificador canônico (slug).

O slug resultante é a base do nome do canal no Slack:
apenas ``[a-z0-9-]``, sem hífens duplicados ou nas pontas, até 67 chars.

Regras (nesta ordem):
1. lowercase (``str.lower``, independente de locale)
2. NFD + remoção de marcas combinantes (acentos)
3. sequências de espaço viram um ``-``
4. remove tudo fora de ``[a-z0-9-]``
5. colapsa ``--`` repetidos
6. remove ``-`` das pontas
7. trunca em MAX_SLUG_LENGTH (sem limpeza após o corte)

Note que o corte pode deixar um ``-`` final; é comportamento definido.
"""

from __future__ import annotations

import re
import unicodedata

MAX_SLUG_LENGTH = 67

_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN = re.compile(r"-+")


def _strip_marks(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sanitize_company_name(raw: str) -> str:
    """Deriva o slug canônico de um nome de empresa.

    Função pura e total: qualquer string produz um slug (possivelmente vazio).

    Exemplos:
        >>> sanitize_company_name("Café 🚀 & Associates Inc.")
        'cafe-associates-inc'
        >>> sanitize_company_name("Tech!!!---___Company")
        'tech-company'
    """
    slug = _strip_marks(raw.lower())
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    slug = slug.strip("-")
    return slug[:MAX_SLUG_LENGTH]
