"""Banco Engines - Logica de negocios."""

from .banco_engine import BancoService
from .selection_engine import SelecaoEngine
from .stats_engine import EstatisticasEngine

__all__ = ["BancoService", "SelecaoEngine", "EstatisticasEngine"]
