"""Banco Storage - Persistência via AgentFS."""

from .banco_store import BancoStore
from .comunidade_store import ComunidadeStore

__all__ = ["BancoStore", "ComunidadeStore"]
