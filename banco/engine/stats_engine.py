"""Stats Engine - Estatisticas do acervo de questoes."""

from collections.abc import Iterable
from typing import Any

from ..models.enums import Dificuldade, TipoQuestao
from ..models.schemas import Questao


class EstatisticasEngine:
    """Agrupamentos usados no painel de analise do acervo.

    Example:
        >>> engine = EstatisticasEngine()
        >>> engine.agrupar_por(questoes, "materia", "Geral")
        {'Matemática': 12, 'Geral': 3}
    """

    TIPOS_MULTIPLA = (TipoQuestao.MULTIPLA_ESCOLHA.value, TipoQuestao.MULTIPLA.value)

    def agrupar_por(
        self, questoes: Iterable[Questao], campo: str, padrao: str
    ) -> dict[str, int]:
        """Conta questoes por valor de um campo.

        Args:
            questoes: Questoes a agrupar
            campo: Nome do atributo (materia, tipo, ano...)
            padrao: Chave usada quando o campo esta vazio

        Returns:
            Dict valor -> contagem, ordenado da maior para a menor contagem
        """
        contagem: dict[str, int] = {}
        for questao in questoes:
            chave = getattr(questao, campo, None) or padrao
            contagem[str(chave)] = contagem.get(str(chave), 0) + 1
        return dict(sorted(contagem.items(), key=lambda item: item[1], reverse=True))

    def por_dificuldade(self, questoes: Iterable[Questao]) -> dict[str, int]:
        """Contagem por nivel, com todos os niveis presentes."""
        contagem = {nivel.label: 0 for nivel in Dificuldade}
        for questao in questoes:
            try:
                label = Dificuldade(questao.dificuldade).label
            except ValueError:
                label = Dificuldade.NAO_DEFINIDA.label
            contagem[label] += 1
        return contagem

    def calcular(self, minhas: list[Questao], sistema: list[Questao]) -> dict[str, Any]:
        """Calcula o painel completo."""
        todas = [*minhas, *sistema]
        por_tipo = self.agrupar_por(todas, "tipo", "Não definido")

        return {
            "total_geral": len(todas),
            "minhas": len(minhas),
            "sistema": len(sistema),
            "multipla_escolha": sum(por_tipo.get(t, 0) for t in self.TIPOS_MULTIPLA),
            "abertas": por_tipo.get(TipoQuestao.ABERTA.value, 0),
            "por_materia": self.agrupar_por(todas, "materia", "Geral"),
            "por_tipo": por_tipo,
            "por_ano": self.agrupar_por(todas, "ano", "Outros"),
            "por_dificuldade": self.por_dificuldade(todas),
        }
