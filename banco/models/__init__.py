"""Banco Models - Enums, Schemas e State."""

from .enums import Dificuldade, FaixaDificuldade, OrigemQuestao, TipoQuestao
from .schemas import (
    CarregarSistemaRequest,
    CarregarSistemaResponse,
    CompartilharRequest,
    CompartilharResponse,
    DistribuicaoDificuldade,
    EstatisticasResponse,
    ExcluirQuestaoResponse,
    FiltroBusca,
    FiltroSelecao,
    GerarSelecaoRequest,
    GerarSelecaoResponse,
    PaginaComunidadeResponse,
    Questao,
    QuestaoInput,
    QuestaoPublica,
    RemoverComunidadeResponse,
)
from .state import BancoState

__all__ = [
    # Enums
    "Dificuldade",
    "FaixaDificuldade",
    "OrigemQuestao",
    "TipoQuestao",
    # Schemas
    "Questao",
    "QuestaoInput",
    "QuestaoPublica",
    "FiltroSelecao",
    "FiltroBusca",
    "DistribuicaoDificuldade",
    "CarregarSistemaRequest",
    "CarregarSistemaResponse",
    "GerarSelecaoRequest",
    "GerarSelecaoResponse",
    "ExcluirQuestaoResponse",
    "CompartilharRequest",
    "CompartilharResponse",
    "RemoverComunidadeResponse",
    "PaginaComunidadeResponse",
    "EstatisticasResponse",
    # State
    "BancoState",
]
