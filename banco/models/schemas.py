"""Banco Schemas - Modelos Pydantic para questoes e request/response."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_dificuldade(value: Any) -> int:
    """Converte o nivel de dificuldade recebido para inteiro.

    Valores ausentes, nao numericos ou fracionarios viram 0 (nao definida).
    """
    if value is None or isinstance(value, bool):
        return int(bool(value))
    try:
        numero = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(numero) or math.isinf(numero) or not numero.is_integer():
        return 0
    return int(numero)


def coerce_percentual(value: Any) -> float:
    """Percentual da distribuicao entre 0 e 100.

    Negativos, nao numericos e nao finitos viram 0; acima de 100 vira 100.
    """
    try:
        numero = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(numero) or numero < 0:
        return 0.0
    return min(numero, 100.0)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class _QuestaoBase(BaseModel):
    """Campos comuns a toda questao do banco."""

    model_config = ConfigDict(extra="allow")

    enunciado: str = Field(default="", description="Texto da questao")
    alternativas: list[str] | None = Field(default=None, description="Opcoes (multipla escolha)")
    correta: int | None = Field(default=None, description="Indice da alternativa correta")
    gabarito: str | None = Field(default=None, description="Resposta esperada")
    gabarito_comentado: str | None = Field(default=None, description="Resolucao comentada")
    materia: str | None = Field(default=None, description="Disciplina")
    ano: str | None = Field(default=None, description="Ano escolar alvo")
    tipo: str = Field(default="aberta", description="'aberta' ou 'multipla_escolha'")
    dificuldade: int = Field(default=0, description="0 (nao definida) a 3 (dificil)")
    suporte: Any = Field(default=None, description="Texto ou imagem de apoio")
    bncc: dict[str, Any] | None = Field(default=None, description="Habilidade BNCC associada")
    tags: list[str] = Field(default_factory=list)
    origem: str | None = Field(default=None, description="Procedencia (ex: Comunidade)")
    compartilhada: bool = Field(default=False, description="Publicada na comunidade")
    pre_definida: bool = Field(default=False, description="Questao do banco do sistema")
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("dificuldade", mode="before")
    @classmethod
    def _validate_dificuldade(cls, v: Any) -> int:
        return coerce_dificuldade(v)

    @field_validator("materia", "ano", mode="before")
    @classmethod
    def _validate_texto_opcional(cls, v: Any) -> str | None:
        return _optional_str(v)

    @field_validator("correta", mode="before")
    @classmethod
    def _validate_correta(cls, v: Any) -> int | None:
        if v is None or v == "":
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @field_validator("tags", mode="before")
    @classmethod
    def _validate_tags(cls, v: Any) -> list[str]:
        return list(v) if v else []

    @field_validator("tipo", mode="before")
    @classmethod
    def _validate_tipo(cls, v: Any) -> str:
        return str(v) if v else "aberta"


class Questao(_QuestaoBase):
    """Questao armazenada no banco (pessoal ou do sistema)."""

    id: str = Field(..., description="ID unico dentro do pool")

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, v: Any) -> str:
        return str(v)


class QuestaoInput(_QuestaoBase):
    """Payload de criacao/edicao: sem id cria uma questao nova."""

    id: str | None = Field(default=None, description="ID existente para edicao")

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return str(v)


class QuestaoPublica(BaseModel):
    """Questao publicada no acervo da comunidade."""

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, description="ID do documento na comunidade")
    enunciado: str
    alternativas: list[str] | None = None
    correta: int | None = None
    gabarito: str | None = None
    gabarito_comentado: str | None = None
    materia: str = "Geral"
    ano: str = "2026"
    tipo: str = "aberta"
    dificuldade: int = 0
    suporte: Any = None
    bncc: dict[str, Any] | None = None
    autor: str = Field(default="Professor(a)", description="Nome do professor autor")
    uid_autor: str | None = Field(default=None, description="UID do autor")
    id_local_origem: str = Field(..., description="ID da questao no banco do autor")
    data_partilha: str = Field(..., description="Data ISO da publicacao")
    enunciado_search: str = Field(default="", description="Enunciado normalizado para busca")

    @field_validator("dificuldade", mode="before")
    @classmethod
    def _validate_dificuldade(cls, v: Any) -> int:
        return coerce_dificuldade(v)


class FiltroSelecao(BaseModel):
    """Filtro da selecao automatica. Campos vazios casam com tudo."""

    materia: str | None = None
    ano: str | None = None

    @field_validator("materia", "ano", mode="before")
    @classmethod
    def _vazio_para_none(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return str(v)


class DistribuicaoDificuldade(BaseModel):
    """Percentuais por faixa (nominalmente somam 100)."""

    facil: float = Field(default=30.0, description="% de questoes faceis")
    medio: float = Field(default=50.0, description="% de questoes medias")
    dificil: float = Field(default=20.0, description="% de questoes dificeis")

    @field_validator("facil", "medio", "dificil", mode="before")
    @classmethod
    def _validate_percentual(cls, v: Any) -> float:
        return coerce_percentual(v)


class FiltroBusca(BaseModel):
    """Filtros da listagem de questoes."""

    termo: str = ""
    materia: str | None = None
    ano: str | None = None
    tipo: str | None = None
    unidade: str | None = Field(default=None, description="Unidade tematica BNCC")


# =============================================================================
# REQUEST / RESPONSE
# =============================================================================


class CarregarSistemaRequest(BaseModel):
    """Lote de questoes do sistema a carregar."""

    questoes: list[dict[str, Any]] = Field(default_factory=list)


class CarregarSistemaResponse(BaseModel):
    total: int


class GerarSelecaoRequest(BaseModel):
    """Request para montar uma prova automaticamente."""

    filtro: FiltroSelecao = Field(default_factory=FiltroSelecao)
    quantidade: int = Field(..., ge=0, description="Total de questoes desejadas")
    distribuicao: DistribuicaoDificuldade = Field(default_factory=DistribuicaoDificuldade)


class GerarSelecaoResponse(BaseModel):
    """IDs selecionados e contagem por faixa."""

    ids: list[str]
    total: int
    solicitadas: int
    completa: bool = Field(..., description="Se a quantidade pedida foi atingida")
    breakdown: dict[str, int] = Field(..., description="Contagem por faixa (facil/medio/dificil)")


class ExcluirQuestaoResponse(BaseModel):
    questao_id: str
    removida: bool


class CompartilharRequest(BaseModel):
    """Dados do autor que publica a questao."""

    autor: str | None = None
    uid_autor: str | None = None


class CompartilharResponse(BaseModel):
    questao_id: str
    compartilhada: bool
    duplicada: bool = Field(..., description="Enunciado ja existia na comunidade")
    doc_id: str | None = None


class RemoverComunidadeResponse(BaseModel):
    questao_id: str
    removidas: int


class PaginaComunidadeResponse(BaseModel):
    """Uma pagina do acervo da comunidade."""

    pagina: int
    itens_por_pagina: int
    total: int
    tem_proxima: bool
    questoes: list[QuestaoPublica]


class EstatisticasResponse(BaseModel):
    """Distribuicao do acervo."""

    total_geral: int
    minhas: int
    sistema: int
    multipla_escolha: int
    abertas: int
    por_materia: dict[str, int]
    por_tipo: dict[str, int]
    por_ano: dict[str, int]
    por_dificuldade: dict[str, int]
