"""Banco Engine - Regras de negocio do banco de questoes e da comunidade."""

from __future__ import annotations

import logging
import random
import string
import time
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..config import BancoConfig
from ..exceptions import (
    ComunidadeError,
    QuestaoCompartilhadaError,
    QuestaoNaoEncontradaError,
    ValidationError,
)
from ..models.enums import OrigemQuestao
from ..models.schemas import (
    DistribuicaoDificuldade,
    FiltroBusca,
    FiltroSelecao,
    Questao,
    QuestaoInput,
    QuestaoPublica,
)
from ..models.state import BancoState
from ..storage.banco_store import BancoStore
from ..storage.comunidade_store import ComunidadeStore
from ..utils.text import normalize_text
from .selection_engine import SelecaoEngine
from .stats_engine import EstatisticasEngine

logger = logging.getLogger(__name__)

_BASE36 = string.ascii_lowercase + string.digits


def _agora_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BancoService:
    """Orquestra o banco pessoal, as questoes do sistema e a comunidade.

    O estado fica explicito em `self.state`; a persistencia e delegada ao
    `BancoStore` e a publicacao ao `ComunidadeStore`. Sem store, o banco
    funciona apenas em memoria.

    Example:
        >>> service = BancoService(BancoStore(agentfs), ComunidadeStore(agentfs))
        >>> await service.carregar()
        >>> questao = await service.salvar_questao({"enunciado": "2 + 2 = ?", "materia": "Matemática"})
        >>> await service.compartilhar_questao(questao.id, autor="Ana Souza", uid_autor="uid-1")
    """

    def __init__(
        self,
        store: BancoStore | None = None,
        comunidade: ComunidadeStore | None = None,
        selecao: SelecaoEngine | None = None,
        config: BancoConfig | None = None,
    ):
        self.store = store
        self.comunidade = comunidade
        self.selecao = selecao or SelecaoEngine()
        self.estatisticas_engine = EstatisticasEngine()
        self.config = config or BancoConfig()
        self.state = BancoState()

    # =========================================================================
    # PERSISTENCIA
    # =========================================================================

    async def carregar(self) -> BancoState:
        """Carrega o estado salvo (se houver store)."""
        if self.store is not None:
            self.state = await self.store.load_state()
        return self.state

    async def _persistir_questoes(self) -> None:
        if self.store is not None:
            await self.store.save_questoes(self.state)

    def _require_comunidade(self) -> ComunidadeStore:
        if self.comunidade is None:
            raise ComunidadeError(message="Serviço da comunidade não carregado")
        return self.comunidade

    # =========================================================================
    # BANCO DO SISTEMA
    # =========================================================================

    @staticmethod
    def _gerar_id_sistema() -> str:
        return "sys_" + "".join(random.choices(_BASE36, k=9))

    async def carregar_questoes_sistema(self, registros: Iterable[dict[str, Any]]) -> int:
        """Substitui as questoes do sistema pelo lote recebido.

        Registros sem id recebem um id temporario `sys_...`; a dificuldade e
        normalizada para inteiro.

        Returns:
            Total de questoes carregadas

        Raises:
            ValidationError: Se algum registro nao formar uma questao valida
        """
        questoes = []
        for indice, registro in enumerate(registros):
            dados = dict(registro)
            if not dados.get("id"):
                dados["id"] = self._gerar_id_sistema()
            dados["pre_definida"] = True
            try:
                questoes.append(Questao(**dados))
            except PydanticValidationError as e:
                logger.warning(f"Questão do sistema inválida na posição {indice}")
                raise ValidationError(
                    message="Questão do sistema inválida",
                    details={
                        "indice": indice,
                        "erros": [
                            {"campo": ".".join(str(p) for p in err["loc"]), "mensagem": err["msg"]}
                            for err in e.errors()
                        ],
                    },
                ) from e

        self.state.questoes_sistema = questoes
        if self.store is not None:
            await self.store.save_sistema(self.state)

        logger.info(f"Banco Global: {len(questoes)} questões carregadas.")
        return len(questoes)

    # =========================================================================
    # BANCO PESSOAL
    # =========================================================================

    async def salvar_questao(self, dados: QuestaoInput | dict[str, Any]) -> Questao:
        """Salva ou atualiza uma questao do banco pessoal.

        Sem id, gera `prof_<epoch-ms>_<hex>` e marca `created_at`. Com id
        existente, mescla os campos recebidos sobre os gravados.

        Args:
            dados: Campos da questao

        Returns:
            Questao como ficou gravada
        """
        if isinstance(dados, QuestaoInput):
            payload = dados.model_dump(exclude_unset=True)
        else:
            payload = QuestaoInput(**dados).model_dump(exclude_unset=True)

        # omitida vale 0, inclusive na edicao
        payload.setdefault("dificuldade", 0)
        payload["updated_at"] = _agora_iso()

        if not payload.get("id"):
            sufixo = uuid.uuid4().hex[:8]
            payload["id"] = f"prof_{int(time.time() * 1000)}_{sufixo}"
            payload["created_at"] = payload["updated_at"]

        indice = self.state.indice(payload["id"])
        if indice != -1:
            atual = self.state.questoes[indice].model_dump()
            questao = Questao(**{**atual, **payload})
            self.state.questoes[indice] = questao
        else:
            questao = Questao(**payload)
            self.state.questoes.append(questao)

        await self._persistir_questoes()
        logger.debug(f"Questão salva: {questao.id}")
        return questao

    async def excluir_questao(self, questao_id: str) -> bool:
        """Remove uma questao do banco pessoal.

        Returns:
            True se removida, False se o id nao existia

        Raises:
            QuestaoCompartilhadaError: Se a questao ainda estiver na comunidade
        """
        questao = self.state.encontrar(questao_id)
        if questao is None:
            logger.debug(f"Exclusão ignorada, questão inexistente: {questao_id}")
            return False

        if questao.compartilhada:
            logger.warning(f"Exclusão bloqueada, questão em uso na comunidade: {questao_id}")
            raise QuestaoCompartilhadaError(details={"questao_id": str(questao_id)})

        self.state.questoes = [q for q in self.state.questoes if q.id != str(questao_id)]
        await self._persistir_questoes()
        logger.info(f"Questão {questao_id} removida.")
        return True

    def buscar_questoes(
        self, filtros: FiltroBusca, origem: OrigemQuestao = OrigemQuestao.MINHAS
    ) -> list[Questao]:
        """Filtra a lista pessoal ou a do sistema.

        O termo e comparado sem acentos contra enunciado, codigo BNCC e tags.
        """
        lista = self.state.questoes if origem == OrigemQuestao.MINHAS else self.state.questoes_sistema
        termo = normalize_text(filtros.termo.strip())

        def _casa_termo(q: Questao) -> bool:
            if not termo:
                return True
            codigo = (q.bncc or {}).get("codigo") or ""
            return (
                termo in normalize_text(q.enunciado)
                or termo in normalize_text(str(codigo))
                or any(termo in normalize_text(tag) for tag in q.tags)
            )

        return [
            q
            for q in lista
            if _casa_termo(q)
            and (not filtros.materia or q.materia == filtros.materia)
            and (not filtros.ano or q.ano == filtros.ano)
            and (not filtros.tipo or q.tipo == filtros.tipo)
            and (not filtros.unidade or (q.bncc or {}).get("unidade_tematica") == filtros.unidade)
        ]

    # =========================================================================
    # COMUNIDADE
    # =========================================================================

    def _montar_publica(
        self, questao: Questao, enunciado: str, autor: str | None, uid_autor: str | None
    ) -> QuestaoPublica:
        return QuestaoPublica(
            enunciado=enunciado,
            alternativas=questao.alternativas or None,
            correta=questao.correta,
            gabarito=questao.gabarito or None,
            gabarito_comentado=questao.gabarito_comentado or None,
            materia=questao.materia or "Geral",
            ano=questao.ano or self.config.ano_padrao,
            tipo=questao.tipo or "aberta",
            dificuldade=questao.dificuldade,
            suporte=questao.suporte or None,
            bncc=questao.bncc or None,
            autor=autor or "Professor(a)",
            uid_autor=uid_autor,
            id_local_origem=questao.id,
            data_partilha=_agora_iso(),
            enunciado_search=normalize_text(enunciado),
        )

    async def _marcar_compartilhada(self, questao_id: str, valor: bool) -> None:
        indice = self.state.indice(questao_id)
        if indice == -1:
            return
        self.state.questoes[indice] = self.state.questoes[indice].model_copy(
            update={"compartilhada": valor}
        )
        await self._persistir_questoes()

    async def compartilhar_questao(
        self, questao_id: str, autor: str | None = None, uid_autor: str | None = None
    ) -> dict[str, Any]:
        """Publica uma questao pessoal na comunidade.

        Se o enunciado ja existir por la, apenas marca a questao local como
        compartilhada.

        Returns:
            Dict com questao_id, compartilhada, duplicada e doc_id

        Raises:
            QuestaoNaoEncontradaError: Se a questao nao existe no banco pessoal
            ComunidadeError: Se a publicacao falhar
        """
        questao = self.state.encontrar(questao_id)
        if questao is None:
            raise QuestaoNaoEncontradaError(details={"questao_id": str(questao_id)})

        comunidade = self._require_comunidade()
        enunciado = (questao.enunciado or "").strip()

        if await comunidade.existe_enunciado(enunciado):
            logger.info(f"Questão {questao.id} já existe na comunidade")
            await self._marcar_compartilhada(questao.id, True)
            return {
                "questao_id": questao.id,
                "compartilhada": True,
                "duplicada": True,
                "doc_id": None,
            }

        publica = self._montar_publica(questao, enunciado, autor, uid_autor)
        doc_id = await comunidade.publicar(publica)
        await self._marcar_compartilhada(questao.id, True)

        logger.info(f"Compartilhado com sucesso: {questao.id} -> {doc_id}")
        return {
            "questao_id": questao.id,
            "compartilhada": True,
            "duplicada": False,
            "doc_id": doc_id,
        }

    async def remover_da_comunidade(self, questao_id: str, uid_autor: str | None) -> int:
        """Retira da comunidade as publicacoes do autor para esta questao.

        Returns:
            Quantidade de documentos removidos
        """
        comunidade = self._require_comunidade()
        removidas = await comunidade.remover_por_origem(uid_autor, str(questao_id))
        await self._marcar_compartilhada(str(questao_id), False)
        logger.info(f"Retirada da comunidade: {questao_id}")
        return removidas

    async def listar_comunidade(
        self, materia: str = "", pagina: int = 1, itens_por_pagina: int | None = None
    ) -> dict[str, Any]:
        """Pagina o acervo da comunidade (mais recentes primeiro)."""
        comunidade = self._require_comunidade()
        por_pagina = itens_por_pagina or self.config.comunidade_page_size
        documentos = await comunidade.listar(materia)

        inicio = (pagina - 1) * por_pagina
        pagina_docs = documentos[inicio : inicio + por_pagina]
        return {
            "pagina": pagina,
            "itens_por_pagina": por_pagina,
            "total": len(documentos),
            "tem_proxima": inicio + por_pagina < len(documentos),
            "questoes": pagina_docs,
        }

    async def importar_da_comunidade(self, doc_id: str) -> Questao:
        """Copia uma questao da comunidade para o banco pessoal.

        Raises:
            QuestaoNaoEncontradaError: Se o documento nao existe
        """
        comunidade = self._require_comunidade()
        publica = await comunidade.obter(doc_id)
        if publica is None:
            raise QuestaoNaoEncontradaError(
                message="Questão não encontrada na comunidade",
                details={"doc_id": doc_id},
            )

        nova = {
            "enunciado": publica.enunciado,
            "alternativas": publica.alternativas or None,
            "correta": publica.correta,
            "gabarito": publica.gabarito or None,
            "gabarito_comentado": publica.gabarito_comentado or None,
            "materia": publica.materia or "Geral",
            "ano": publica.ano or "",
            "tipo": publica.tipo or "aberta",
            "dificuldade": publica.dificuldade,
            "suporte": publica.suporte or None,
            "bncc": publica.bncc or None,
            "origem": f"Comunidade ({publica.autor or 'Prof.'})",
        }
        questao = await self.salvar_questao(nova)
        logger.info(f"Questão importada da comunidade: {doc_id} -> {questao.id}")
        return questao

    # =========================================================================
    # PROVAS & ESTATISTICAS
    # =========================================================================

    def gerar_selecao_automatica(
        self,
        filtro: FiltroSelecao,
        quantidade: int,
        distribuicao: DistribuicaoDificuldade,
    ) -> set[str]:
        """Seleciona questoes do pool completo (pessoais + sistema).

        Raises:
            NenhumaQuestaoEncontradaError: Se nenhuma questao casar com o filtro
        """
        return self.selecao.selecionar(self.state.todas(), filtro, quantidade, distribuicao)

    def questoes_por_ids(self, ids: Iterable[str]) -> list[Questao]:
        """Resolve ids selecionados para as questoes do pool (primeira ocorrencia)."""
        alvo = set(ids)
        encontradas: dict[str, Questao] = {}
        for questao in self.state.todas():
            if questao.id in alvo and questao.id not in encontradas:
                encontradas[questao.id] = questao
        return list(encontradas.values())

    def estatisticas(self) -> dict[str, Any]:
        """Painel de distribuicao do acervo."""
        return self.estatisticas_engine.calcular(self.state.questoes, self.state.questoes_sistema)
