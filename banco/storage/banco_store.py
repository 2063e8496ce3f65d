"""Banco Store - Abstração sobre AgentFS para persistência do banco pessoal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from ..models.schemas import Questao
from ..models.state import BancoState

logger = logging.getLogger(__name__)


class BancoStore:
    """Abstração sobre AgentFS para persistência do banco de questões.

    Guarda as questões pessoais e as do sistema no KV store do AgentFS,
    separadas por professor.

    Estrutura de chaves:
        - banco:{owner_id}:questoes -> Lista de questões pessoais
        - banco:{owner_id}:sistema -> Lista de questões do sistema

    Example:
        >>> store = BancoStore(agentfs, owner_id="prof-1")
        >>> state = await store.load_state()
        >>> await store.save_questoes(state)
    """

    KEY_PREFIX = "banco"

    def __init__(self, agentfs: AgentFS, owner_id: str = "default"):
        """Inicializa store com instância do AgentFS.

        Args:
            agentfs: Instância configurada do AgentFS
            owner_id: Professor dono do banco
        """
        self.agentfs = agentfs
        self.owner_id = owner_id

    def _questoes_key(self) -> str:
        """Gera chave das questões pessoais."""
        return f"{self.KEY_PREFIX}:{self.owner_id}:questoes"

    def _sistema_key(self) -> str:
        """Gera chave das questões do sistema."""
        return f"{self.KEY_PREFIX}:{self.owner_id}:sistema"

    async def _load_list(self, key: str) -> list[Questao]:
        data = await self.agentfs.kv.get(key)
        if not data:
            return []
        return [Questao(**item) for item in data]

    async def load_state(self) -> BancoState:
        """Carrega o banco do KV store.

        Returns:
            BancoState (vazio se nada foi salvo ainda)
        """
        state = BancoState(
            questoes=await self._load_list(self._questoes_key()),
            questoes_sistema=await self._load_list(self._sistema_key()),
        )
        logger.debug(
            f"Banco carregado ({self.owner_id}): {len(state.questoes)} pessoais, "
            f"{len(state.questoes_sistema)} do sistema"
        )
        return state

    async def save_questoes(self, state: BancoState) -> None:
        """Persiste as questões pessoais.

        Args:
            state: Estado com a lista atualizada
        """
        await self.agentfs.kv.set(
            self._questoes_key(), [q.model_dump() for q in state.questoes]
        )
        logger.debug(f"Questões pessoais salvas: {len(state.questoes)}")

    async def save_sistema(self, state: BancoState) -> None:
        """Persiste as questões do sistema.

        Args:
            state: Estado com a lista atualizada
        """
        await self.agentfs.kv.set(
            self._sistema_key(), [q.model_dump() for q in state.questoes_sistema]
        )
        logger.debug(f"Questões do sistema salvas: {len(state.questoes_sistema)}")

    async def save_state(self, state: BancoState) -> None:
        """Persiste o estado completo."""
        await self.save_questoes(state)
        await self.save_sistema(state)

    async def clear(self) -> None:
        """Remove o banco do professor do store."""
        await self.agentfs.kv.delete(self._questoes_key())
        await self.agentfs.kv.delete(self._sistema_key())
        logger.info(f"Banco removido: {self.owner_id}")
