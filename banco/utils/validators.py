"""Input validators for ids recebidos pela API."""

import re

from ..exceptions import ValidationError

_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-_.]+$")


def validate_questao_id(questao_id: str) -> bool:
    """Validate question/document id before touching the KV store.

    Returns True if valid, raises ValidationError if invalid.
    """
    if not questao_id:
        raise ValidationError(message="ID da questão não pode ser vazio")
    if len(questao_id) > 128:
        raise ValidationError(
            message="ID da questão muito longo",
            details={"questao_id": questao_id[:20]},
        )
    # ':' separa segmentos das chaves no KV
    if not _ID_PATTERN.match(questao_id) or ".." in questao_id:
        raise ValidationError(
            message="Formato de ID de questão inválido",
            details={"questao_id": questao_id[:20]},
        )
    return True


def validate_pagina(pagina: int, itens_por_pagina: int) -> bool:
    """Validate pagination parameters."""
    if pagina < 1:
        raise ValidationError(
            message="Página deve ser maior ou igual a 1",
            details={"pagina": pagina},
        )
    if itens_por_pagina < 1 or itens_por_pagina > 100:
        raise ValidationError(
            message="Itens por página deve estar entre 1 e 100",
            details={"itens_por_pagina": itens_por_pagina},
        )
    return True
