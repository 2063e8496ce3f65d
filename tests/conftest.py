# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks, fixtures e configurações comuns
# =============================================================================

import os
import random
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "BANCO_OWNER_ID": "prof-teste",
        "AGENTFS_ID": "banco-teste",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def clean_env():
    """Limpa variáveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


# =============================================================================
# FIXTURES DO AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock completo do AgentFS."""
    mock = MagicMock()

    # KV Store
    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    # Lifecycle
    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """Mock do AgentFS com KV em dicionário."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = value

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix)]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


# =============================================================================
# FIXTURES DE QUESTOES
# =============================================================================


@pytest.fixture
def make_questao():
    """Factory de questões com defaults válidos."""
    from banco.models.schemas import Questao

    def _make(qid: str, dificuldade: int = 1, materia: str = "Matemática", ano: str = "6º Ano", **extra):
        return Questao(
            id=qid,
            enunciado=extra.pop("enunciado", f"Enunciado da questão {qid}"),
            materia=materia,
            ano=ano,
            dificuldade=dificuldade,
            **extra,
        )

    return _make


@pytest.fixture
def sample_questao(make_questao):
    """Questão de múltipla escolha de exemplo."""
    return make_questao(
        "prof_1",
        dificuldade=2,
        enunciado="Quanto é 7 x 8?",
        tipo="multipla_escolha",
        alternativas=["54", "56", "58", "64"],
        correta=1,
        tags=["tabuada"],
        bncc={"codigo": "EF06MA03", "unidade_tematica": "Números"},
    )


@pytest.fixture
def pool_estratificado(make_questao):
    """10 fáceis, 5 médias e 2 difíceis de Matemática/6º Ano + ruído de outras matérias."""
    pool = []
    for i in range(10):
        pool.append(make_questao(f"f{i}", dificuldade=i % 2))  # niveis 0 e 1
    for i in range(5):
        pool.append(make_questao(f"m{i}", dificuldade=2))
    for i in range(2):
        pool.append(make_questao(f"d{i}", dificuldade=3))
    for i in range(4):
        pool.append(make_questao(f"h{i}", dificuldade=2, materia="História"))
    pool.append(make_questao("mat7", dificuldade=3, ano="7º Ano"))
    return pool


@pytest.fixture
def rng():
    """Gerador aleatório determinístico."""
    return random.Random(1234)


# =============================================================================
# FIXTURES DO SERVICO
# =============================================================================


@pytest.fixture
def banco_service(mock_agentfs_with_data, rng):
    """BancoService com stores sobre o KV em memória."""
    from banco.config import BancoConfig
    from banco.engine.banco_engine import BancoService
    from banco.engine.selection_engine import SelecaoEngine
    from banco.storage.banco_store import BancoStore
    from banco.storage.comunidade_store import ComunidadeStore

    return BancoService(
        store=BancoStore(mock_agentfs_with_data, owner_id="prof-teste"),
        comunidade=ComunidadeStore(mock_agentfs_with_data),
        selecao=SelecaoEngine(rng=rng),
        config=BancoConfig(owner_id="prof-teste", comunidade_page_size=2),
    )


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client(banco_service):
    """Cliente de teste FastAPI com o serviço injetado."""
    from fastapi.testclient import TestClient

    from banco.router import get_banco_service
    from server import app

    app.dependency_overrides[get_banco_service] = lambda: banco_service
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para verificação em testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
