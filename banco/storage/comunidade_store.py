"""Comunidade Store - Acervo compartilhado de questões sobre AgentFS."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from ..exceptions import ComunidadeError
from ..models.schemas import QuestaoPublica
from ..utils.text import generate_uuid

logger = logging.getLogger(__name__)


class ComunidadeStore:
    """Coleção de questões públicas da comunidade.

    Cada questão publicada é um documento no KV store do AgentFS,
    identificado por um UUID gerado na publicação.

    Estrutura de chaves:
        - comunidade:questoes:{doc_id} -> QuestaoPublica

    Example:
        >>> comunidade = ComunidadeStore(agentfs)
        >>> doc_id = await comunidade.publicar(questao_publica)
        >>> await comunidade.existe_enunciado(questao_publica.enunciado)
        True
    """

    KEY_PREFIX = "comunidade:questoes"

    def __init__(self, agentfs: AgentFS):
        """Inicializa store com instância do AgentFS.

        Args:
            agentfs: Instância configurada do AgentFS
        """
        self.agentfs = agentfs

    def _doc_key(self, doc_id: str) -> str:
        """Gera chave de um documento."""
        return f"{self.KEY_PREFIX}:{doc_id}"

    @staticmethod
    def _entry_key(entry: Any) -> str:
        return entry.get("key", "") if isinstance(entry, dict) else str(entry)

    async def _listar_documentos(self) -> list[QuestaoPublica]:
        """Carrega todos os documentos da coleção."""
        entries = await self.agentfs.kv.list(prefix=f"{self.KEY_PREFIX}:")
        documentos = []
        for entry in entries:
            key = self._entry_key(entry)
            data = await self.agentfs.kv.get(key)
            if not data:
                continue
            doc = QuestaoPublica(**data)
            if doc.id is None:
                doc.id = key.rsplit(":", 1)[-1]
            documentos.append(doc)
        return documentos

    async def publicar(self, questao: QuestaoPublica) -> str:
        """Publica uma nova questão na comunidade.

        Args:
            questao: Questão normalizada para publicação

        Returns:
            ID do documento criado

        Raises:
            ComunidadeError: Se o KV store recusar a escrita
        """
        doc_id = generate_uuid()
        data = questao.model_dump()
        data["id"] = doc_id
        try:
            await self.agentfs.kv.set(self._doc_key(doc_id), data)
        except Exception as e:
            logger.error(f"Erro ao publicar na comunidade: {e}")
            raise ComunidadeError(
                message="Falha ao enviar para a comunidade.",
                details={"id_local_origem": questao.id_local_origem},
            ) from e

        logger.info(f"Questão publicada na comunidade: {doc_id}")
        return doc_id

    async def existe_enunciado(self, enunciado: str) -> bool:
        """Verifica se já existe questão com o mesmo enunciado (evita spam).

        Falhas de leitura não bloqueiam a publicação: retorna False.
        """
        try:
            documentos = await self._listar_documentos()
        except Exception as e:
            logger.error(f"Erro ao verificar duplicata: {e}")
            return False
        return any(doc.enunciado == enunciado for doc in documentos)

    async def remover_por_origem(self, uid_autor: str | None, id_local_origem: str) -> int:
        """Remove as publicações de um autor para uma questão local.

        Args:
            uid_autor: UID do autor (só remove documentos dele)
            id_local_origem: ID da questão no banco do autor

        Returns:
            Quantidade de documentos removidos
        """
        try:
            documentos = await self._listar_documentos()
            alvos = [
                doc
                for doc in documentos
                if doc.uid_autor == uid_autor and doc.id_local_origem == str(id_local_origem)
            ]
            for doc in alvos:
                await self.agentfs.kv.delete(self._doc_key(doc.id))
        except Exception as e:
            logger.error(f"Erro ao remover da comunidade: {e}")
            raise ComunidadeError(
                message="Não foi possível remover agora.",
                details={"id_local_origem": str(id_local_origem)},
            ) from e

        logger.info(f"Removidas {len(alvos)} publicação(ões) de {id_local_origem}")
        return len(alvos)

    async def listar(self, materia: str = "") -> list[QuestaoPublica]:
        """Lista questões da comunidade, mais recentes primeiro.

        Args:
            materia: Filtro opcional por disciplina

        Raises:
            ComunidadeError: Se a leitura do KV store falhar
        """
        try:
            documentos = await self._listar_documentos()
        except Exception as e:
            logger.error(f"Erro na busca da comunidade: {e}")
            raise ComunidadeError(message="Erro ao buscar dados.") from e

        if materia:
            documentos = [doc for doc in documentos if doc.materia == materia]
        return sorted(documentos, key=lambda doc: doc.data_partilha, reverse=True)

    async def obter(self, doc_id: str) -> QuestaoPublica | None:
        """Busca um documento pelo ID.

        Returns:
            QuestaoPublica se encontrada, None caso contrário
        """
        data = await self.agentfs.kv.get(self._doc_key(doc_id))
        if not data:
            logger.debug(f"Documento não encontrado na comunidade: {doc_id}")
            return None
        doc = QuestaoPublica(**data)
        if doc.id is None:
            doc.id = doc_id
        return doc
