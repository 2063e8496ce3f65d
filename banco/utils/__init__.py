"""Utilitarios compartilhados."""

from .text import debounce, escape_html, generate_uuid, normalize_text
from .validators import validate_pagina, validate_questao_id

__all__ = [
    "debounce",
    "escape_html",
    "generate_uuid",
    "normalize_text",
    "validate_pagina",
    "validate_questao_id",
]
