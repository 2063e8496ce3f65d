"""Excecoes do Banco de Questoes.

Toda excecao carrega uma mensagem legivel e um dict de detalhes, para que
os routers possam devolver o erro ao cliente sem reformatar nada.
"""

from typing import Any


class BancoError(Exception):
    """Erro base do banco de questoes."""

    default_message = "Erro no banco de questões"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serializa o erro para resposta HTTP."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(BancoError):
    """Entrada invalida (id malformado, payload inconsistente)."""

    default_message = "Dados inválidos"


class NenhumaQuestaoEncontradaError(BancoError):
    """Nenhuma questao do pool corresponde aos filtros de selecao."""

    default_message = "Nenhuma questão encontrada com os filtros selecionados (Matéria/Ano)."


class QuestaoNaoEncontradaError(BancoError):
    """Questao inexistente no banco pessoal ou na comunidade."""

    default_message = "Questão não encontrada"


class QuestaoCompartilhadaError(BancoError):
    """Exclusao bloqueada: a questao ainda esta publicada na comunidade."""

    default_message = (
        "Esta questão está compartilhada na comunidade. "
        "Remova-a da comunidade antes de apagar do seu banco pessoal."
    )


class ComunidadeError(BancoError):
    """Falha ao falar com o acervo compartilhado da comunidade."""

    default_message = "Falha ao comunicar com a comunidade"
