"""Selection Engine - Selecao estratificada de questoes para provas."""

import logging
import math
import random
from collections.abc import Iterable, Sequence

from ..exceptions import NenhumaQuestaoEncontradaError
from ..models.enums import FaixaDificuldade
from ..models.schemas import DistribuicaoDificuldade, FiltroSelecao, Questao

logger = logging.getLogger(__name__)


def arredondar(valor: float) -> int:
    """Arredonda meio para cima (2.5 -> 3), sem o arredondamento bancario do round()."""
    return math.floor(valor + 0.5)


class SelecaoEngine:
    """Motor de selecao automatica de questoes por dificuldade.

    Filtra o pool por materia/ano, separa as candidatas em faixas de
    dificuldade, sorteia cada faixa ate a sua cota e completa com o restante
    do pool quando alguma faixa nao tem questoes suficientes.

    Cotas para `quantidade` questoes:
        - facil: round(quantidade * facil / 100)
        - medio: round(quantidade * medio / 100)
        - dificil: quantidade - facil - medio (absorve o arredondamento)

    O pool recebido nunca e alterado; o sorteio embaralha copias locais.

    Example:
        >>> engine = SelecaoEngine(rng=random.Random(42))
        >>> ids = engine.selecionar(pool, FiltroSelecao(materia="Matemática"), 10,
        ...                         DistribuicaoDificuldade(facil=50, medio=30, dificil=20))
        >>> len(ids)
        10
    """

    def __init__(self, rng: random.Random | None = None):
        """Inicializa engine.

        Args:
            rng: Gerador aleatorio (injetavel para sorteios reproduziveis)
        """
        self._rng = rng or random.Random()

    def filtrar(self, pool: Iterable[Questao], filtro: FiltroSelecao) -> list[Questao]:
        """Mantem as questoes com materia e ano exatos (filtros vazios casam com tudo)."""
        return [
            q
            for q in pool
            if (not filtro.materia or q.materia == filtro.materia)
            and (not filtro.ano or q.ano == filtro.ano)
        ]

    def separar_por_faixa(
        self, candidatas: Iterable[Questao]
    ) -> dict[FaixaDificuldade, list[Questao]]:
        """Agrupa as candidatas por faixa de dificuldade."""
        faixas: dict[FaixaDificuldade, list[Questao]] = {f: [] for f in FaixaDificuldade}
        for questao in candidatas:
            faixa = FaixaDificuldade.from_nivel(questao.dificuldade)
            if faixa is not None:
                faixas[faixa].append(questao)
        return faixas

    def calcular_cotas(
        self, quantidade: int, distribuicao: DistribuicaoDificuldade
    ) -> dict[FaixaDificuldade, int]:
        """Calcula quantas questoes sortear de cada faixa.

        A soma dos percentuais nao precisa ser 100: a faixa dificil recebe o
        que sobrar. A soma das cotas nunca passa de `quantidade`.
        """
        cota_facil = min(arredondar(quantidade * distribuicao.facil / 100), quantidade)
        cota_medio = min(
            arredondar(quantidade * distribuicao.medio / 100), quantidade - cota_facil
        )
        return {
            FaixaDificuldade.FACIL: cota_facil,
            FaixaDificuldade.MEDIO: cota_medio,
            FaixaDificuldade.DIFICIL: quantidade - cota_facil - cota_medio,
        }

    def sortear(self, questoes: Sequence[Questao], n: int) -> list[Questao]:
        """Sorteia ate `n` questoes sem reposicao."""
        if n <= 0 or not questoes:
            return []
        copia = list(questoes)
        self._rng.shuffle(copia)
        return copia[:n]

    def selecionar(
        self,
        pool: Iterable[Questao],
        filtro: FiltroSelecao,
        quantidade: int,
        distribuicao: DistribuicaoDificuldade,
    ) -> set[str]:
        """Seleciona IDs de questoes seguindo a distribuicao de dificuldade.

        Args:
            pool: Questoes candidatas (pessoais + sistema)
            filtro: Materia/ano exigidos
            quantidade: Total de questoes desejadas
            distribuicao: Percentuais por faixa

        Returns:
            Conjunto de IDs, com no maximo `quantidade` elementos. Pode ser
            menor se o pool filtrado nao tiver questoes suficientes.

        Raises:
            NenhumaQuestaoEncontradaError: Se nenhuma questao casar com o filtro
        """
        candidatas = self.filtrar(pool, filtro)
        if not candidatas:
            raise NenhumaQuestaoEncontradaError(
                details={"materia": filtro.materia, "ano": filtro.ano}
            )

        quantidade = max(0, int(quantidade))
        faixas = self.separar_por_faixa(candidatas)
        cotas = self.calcular_cotas(quantidade, distribuicao)

        selecionadas: set[str] = set()
        for faixa, cota in cotas.items():
            for questao in self.sortear(faixas[faixa], cota):
                selecionadas.add(questao.id)

        if len(selecionadas) < quantidade:
            faltam = quantidade - len(selecionadas)
            resto = [q for q in candidatas if q.id not in selecionadas]
            for questao in self.sortear(resto, len(resto)):
                if faltam <= 0:
                    break
                if questao.id not in selecionadas:
                    selecionadas.add(questao.id)
                    faltam -= 1
            logger.debug(
                f"Complemento aplicado, vagas sem candidata: {quantidade - len(selecionadas)}"
            )

        logger.info(
            f"Seleção automática: {len(selecionadas)}/{quantidade} questões "
            f"de {len(candidatas)} candidatas"
        )
        return selecionadas

    def contar_por_faixa(self, questoes: Iterable[Questao]) -> dict[str, int]:
        """Contagem das questoes em cada faixa (para o breakdown da resposta)."""
        return {faixa.value: len(lista) for faixa, lista in self.separar_por_faixa(questoes).items()}
