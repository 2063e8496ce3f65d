"""Enums do Banco - Dificuldade, faixas e origem das questoes."""

from enum import Enum, IntEnum


class Dificuldade(IntEnum):
    """Nivel de dificuldade gravado na questao (0-3)."""

    NAO_DEFINIDA = 0
    FACIL = 1
    MEDIA = 2
    DIFICIL = 3

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Dificuldade.NAO_DEFINIDA: "Não definida",
    Dificuldade.FACIL: "Fácil",
    Dificuldade.MEDIA: "Média",
    Dificuldade.DIFICIL: "Difícil",
}


class FaixaDificuldade(str, Enum):
    """Faixas usadas na selecao automatica de provas."""

    FACIL = "facil"  # niveis 0 e 1
    MEDIO = "medio"  # nivel 2
    DIFICIL = "dificil"  # nivel 3

    @classmethod
    def from_nivel(cls, nivel: int) -> "FaixaDificuldade | None":
        """Mapeia o nivel gravado na questao para sua faixa.

        Niveis fora de 0-3 nao pertencem a nenhuma faixa.
        """
        if nivel in (Dificuldade.NAO_DEFINIDA, Dificuldade.FACIL):
            return cls.FACIL
        if nivel == Dificuldade.MEDIA:
            return cls.MEDIO
        if nivel == Dificuldade.DIFICIL:
            return cls.DIFICIL
        return None


class TipoQuestao(str, Enum):
    """Formato da questao."""

    ABERTA = "aberta"
    MULTIPLA_ESCOLHA = "multipla_escolha"
    MULTIPLA = "multipla"  # grafia antiga, ainda presente no acervo


class OrigemQuestao(str, Enum):
    """Lista consultada na busca."""

    MINHAS = "minhas"
    SISTEMA = "sistema"
