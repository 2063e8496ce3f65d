"""Banco Router - Endpoints FastAPI do banco de questoes."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query

import app_state

from .config import get_config
from .engine.banco_engine import BancoService
from .exceptions import (
    BancoError,
    ComunidadeError,
    NenhumaQuestaoEncontradaError,
    QuestaoCompartilhadaError,
    QuestaoNaoEncontradaError,
    ValidationError,
)
from .logger import get_logger
from .models.enums import OrigemQuestao
from .models.schemas import (
    CarregarSistemaRequest,
    CarregarSistemaResponse,
    CompartilharRequest,
    CompartilharResponse,
    EstatisticasResponse,
    ExcluirQuestaoResponse,
    FiltroBusca,
    GerarSelecaoRequest,
    GerarSelecaoResponse,
    PaginaComunidadeResponse,
    Questao,
    QuestaoInput,
    RemoverComunidadeResponse,
)
from .storage.banco_store import BancoStore
from .storage.comunidade_store import ComunidadeStore
from .utils.validators import validate_pagina, validate_questao_id

logger = get_logger("router")

router = APIRouter(prefix="/banco", tags=["Banco de Questões"])

# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================

# Servico unico por processo (estado do banco carregado uma vez)
_service_instance: BancoService | None = None
_service_lock = asyncio.Lock()

_STATUS_BY_ERROR: list[tuple[type[BancoError], int]] = [
    (NenhumaQuestaoEncontradaError, 404),
    (QuestaoNaoEncontradaError, 404),
    (QuestaoCompartilhadaError, 409),
    (ValidationError, 400),
    (ComunidadeError, 502),
]


async def get_banco_service() -> BancoService:
    """Dependency para obter BancoService configurado."""
    global _service_instance

    async with _service_lock:
        if _service_instance is None:
            config = get_config()
            agentfs = await app_state.get_agentfs()
            service = BancoService(
                store=BancoStore(agentfs, owner_id=config.owner_id),
                comunidade=ComunidadeStore(agentfs),
                config=config,
            )
            await service.carregar()
            _service_instance = service
            logger.info(f"Banco de questões pronto para {config.owner_id}")

    return _service_instance


def reset_banco_service() -> None:
    """Descarta o servico em cache (usado ao trocar de sessao)."""
    global _service_instance
    _service_instance = None


def to_http_exception(error: BancoError) -> HTTPException:
    """Converte erro de dominio para HTTPException."""
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return HTTPException(status_code=status_code, detail=error.to_dict())
    return HTTPException(status_code=500, detail=error.to_dict())


def _validar_id(questao_id: str) -> None:
    try:
        validate_questao_id(questao_id)
    except ValidationError as e:
        raise to_http_exception(e) from e


# =============================================================================
# BANCO DO SISTEMA
# =============================================================================


@router.post("/sistema", response_model=CarregarSistemaResponse)
async def carregar_sistema(
    request: CarregarSistemaRequest,
    service: BancoService = Depends(get_banco_service),
):
    """Carrega (substitui) as questoes pre-definidas do sistema.

    Um registro invalido rejeita o lote inteiro (HTTP 400).
    """
    try:
        total = await service.carregar_questoes_sistema(request.questoes)
    except ValidationError as e:
        raise to_http_exception(e) from e
    return CarregarSistemaResponse(total=total)


# =============================================================================
# BANCO PESSOAL
# =============================================================================


@router.get("/questoes", response_model=list[Questao])
async def listar_questoes(
    origem: OrigemQuestao = Query(default=OrigemQuestao.MINHAS),
    termo: str = "",
    materia: str | None = None,
    ano: str | None = None,
    tipo: str | None = None,
    unidade: str | None = None,
    service: BancoService = Depends(get_banco_service),
):
    """Lista questoes pessoais ou do sistema com filtros.

    - `termo` busca sem acentos no enunciado, codigo BNCC e tags
    - demais filtros exigem valor exato
    """
    filtros = FiltroBusca(termo=termo, materia=materia, ano=ano, tipo=tipo, unidade=unidade)
    return service.buscar_questoes(filtros, origem)


@router.post("/questoes", response_model=Questao)
async def salvar_questao(
    request: QuestaoInput,
    service: BancoService = Depends(get_banco_service),
):
    """Cria (sem id) ou atualiza (com id) uma questao do banco pessoal."""
    if request.id:
        _validar_id(request.id)
    return await service.salvar_questao(request)


@router.delete("/questoes/{questao_id}", response_model=ExcluirQuestaoResponse)
async def excluir_questao(
    questao_id: str,
    service: BancoService = Depends(get_banco_service),
):
    """Remove uma questao do banco pessoal.

    Questoes compartilhadas precisam sair da comunidade antes (HTTP 409).
    """
    _validar_id(questao_id)
    try:
        removida = await service.excluir_questao(questao_id)
    except QuestaoCompartilhadaError as e:
        raise to_http_exception(e) from e
    return ExcluirQuestaoResponse(questao_id=questao_id, removida=removida)


# =============================================================================
# COMUNIDADE
# =============================================================================


@router.post("/questoes/{questao_id}/compartilhar", response_model=CompartilharResponse)
async def compartilhar_questao(
    questao_id: str,
    request: CompartilharRequest,
    service: BancoService = Depends(get_banco_service),
):
    """Publica uma questao pessoal na comunidade.

    Enunciados ja publicados nao sao duplicados: a questao so e marcada
    como compartilhada.
    """
    _validar_id(questao_id)
    try:
        result = await service.compartilhar_questao(
            questao_id, autor=request.autor, uid_autor=request.uid_autor
        )
    except (QuestaoNaoEncontradaError, ComunidadeError) as e:
        logger.error(f"Erro ao compartilhar {questao_id}: {e.message}")
        raise to_http_exception(e) from e
    return CompartilharResponse(**result)


@router.delete("/questoes/{questao_id}/compartilhar", response_model=RemoverComunidadeResponse)
async def remover_da_comunidade(
    questao_id: str,
    uid_autor: str | None = None,
    service: BancoService = Depends(get_banco_service),
):
    """Retira da comunidade as publicacoes do autor para esta questao."""
    _validar_id(questao_id)
    try:
        removidas = await service.remover_da_comunidade(questao_id, uid_autor)
    except ComunidadeError as e:
        logger.error(f"Erro ao remover da comunidade {questao_id}: {e.message}")
        raise to_http_exception(e) from e
    return RemoverComunidadeResponse(questao_id=questao_id, removidas=removidas)


@router.get("/comunidade", response_model=PaginaComunidadeResponse)
async def listar_comunidade(
    materia: str = "",
    pagina: int = 1,
    itens_por_pagina: int | None = None,
    service: BancoService = Depends(get_banco_service),
):
    """Busca paginada no acervo da comunidade (mais recentes primeiro)."""
    por_pagina = itens_por_pagina or service.config.comunidade_page_size
    try:
        validate_pagina(pagina, por_pagina)
        result = await service.listar_comunidade(materia, pagina, por_pagina)
    except (ValidationError, ComunidadeError) as e:
        raise to_http_exception(e) from e
    return PaginaComunidadeResponse(**result)


@router.post("/comunidade/{doc_id}/importar", response_model=Questao)
async def importar_da_comunidade(
    doc_id: str,
    service: BancoService = Depends(get_banco_service),
):
    """Copia uma questao da comunidade para o banco pessoal."""
    _validar_id(doc_id)
    try:
        return await service.importar_da_comunidade(doc_id)
    except (QuestaoNaoEncontradaError, ComunidadeError) as e:
        raise to_http_exception(e) from e


# =============================================================================
# PROVAS & ESTATISTICAS
# =============================================================================


@router.post("/selecao", response_model=GerarSelecaoResponse)
async def gerar_selecao(
    request: GerarSelecaoRequest,
    service: BancoService = Depends(get_banco_service),
):
    """Monta uma prova sorteando questoes por faixa de dificuldade.

    - Filtra por materia/ano
    - Sorteia cada faixa ate sua cota
    - Completa com o restante do pool se alguma faixa faltar

    O resultado pode ter menos questoes que o pedido quando o pool e pequeno.
    """
    try:
        ids = service.gerar_selecao_automatica(
            request.filtro, request.quantidade, request.distribuicao
        )
    except NenhumaQuestaoEncontradaError as e:
        raise to_http_exception(e) from e

    selecionadas = service.questoes_por_ids(ids)
    return GerarSelecaoResponse(
        ids=sorted(ids),
        total=len(ids),
        solicitadas=request.quantidade,
        completa=len(ids) >= request.quantidade,
        breakdown=service.selecao.contar_por_faixa(selecionadas),
    )


@router.get("/estatisticas", response_model=EstatisticasResponse)
async def estatisticas(service: BancoService = Depends(get_banco_service)):
    """Distribuicao do acervo por materia, tipo, ano e dificuldade."""
    return EstatisticasResponse(**service.estatisticas())
