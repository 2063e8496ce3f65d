"""Banco State - Estado em memoria do banco de questoes."""

from dataclasses import dataclass, field
from typing import Any

from .schemas import Questao


@dataclass
class BancoState:
    """Questoes carregadas para um professor.

    Attributes:
        questoes: Banco pessoal do professor
        questoes_sistema: Questoes pre-definidas do sistema
    """

    questoes: list[Questao] = field(default_factory=list)
    questoes_sistema: list[Questao] = field(default_factory=list)

    def todas(self) -> list[Questao]:
        """Pool completo: pessoais primeiro, depois as do sistema."""
        return [*self.questoes, *self.questoes_sistema]

    def encontrar(self, questao_id: str) -> Questao | None:
        """Busca questao pessoal pelo id (comparacao como string)."""
        alvo = str(questao_id)
        for questao in self.questoes:
            if questao.id == alvo:
                return questao
        return None

    def indice(self, questao_id: str) -> int:
        """Posicao da questao pessoal ou -1."""
        alvo = str(questao_id)
        for i, questao in enumerate(self.questoes):
            if questao.id == alvo:
                return i
        return -1

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario (para persistencia)."""
        return {
            "questoes": [q.model_dump() for q in self.questoes],
            "questoes_sistema": [q.model_dump() for q in self.questoes_sistema],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BancoState":
        """Cria instancia a partir de dicionario."""

        def _parse(items: list[Any]) -> list[Questao]:
            return [q if isinstance(q, Questao) else Questao(**q) for q in items or []]

        return cls(
            questoes=_parse(data.get("questoes", [])),
            questoes_sistema=_parse(data.get("questoes_sistema", [])),
        )
