"""Banco de Questões - Acervo de questões, comunidade e montagem de provas.

Arquitetura:
- models/: Enums, Schemas Pydantic, BancoState
- engine/: SelecaoEngine, EstatisticasEngine, BancoService
- storage/: BancoStore e ComunidadeStore (AgentFS integration)
- utils/: Helpers de texto e validadores
- router.py: FastAPI endpoints
"""

from .config import BancoConfig, get_config
from .engine import BancoService, EstatisticasEngine, SelecaoEngine
from .exceptions import (
    BancoError,
    ComunidadeError,
    NenhumaQuestaoEncontradaError,
    QuestaoCompartilhadaError,
    QuestaoNaoEncontradaError,
    ValidationError,
)
from .models import (
    BancoState,
    Dificuldade,
    DistribuicaoDificuldade,
    FaixaDificuldade,
    FiltroSelecao,
    Questao,
    QuestaoPublica,
)
from .storage import BancoStore, ComunidadeStore

__all__ = [
    # Config
    "BancoConfig",
    "get_config",
    # Models
    "Dificuldade",
    "FaixaDificuldade",
    "Questao",
    "QuestaoPublica",
    "FiltroSelecao",
    "DistribuicaoDificuldade",
    "BancoState",
    # Engines
    "SelecaoEngine",
    "EstatisticasEngine",
    "BancoService",
    # Storage
    "BancoStore",
    "ComunidadeStore",
    # Errors
    "BancoError",
    "ValidationError",
    "NenhumaQuestaoEncontradaError",
    "QuestaoNaoEncontradaError",
    "QuestaoCompartilhadaError",
    "ComunidadeError",
]
