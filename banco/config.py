# =============================================================================
# CONFIGURACAO DO BANCO DE QUESTOES
# =============================================================================
# Valores lidos do ambiente, com defaults seguros para desenvolvimento local
# =============================================================================

import os
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8001",
]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class BancoConfig:
    """Configuracao centralizada do servico.

    Attributes:
        owner_id: Identificador do professor dono do banco pessoal
        agentfs_id: ID do banco AgentFS usado como KV store
        comunidade_page_size: Itens por pagina na listagem da comunidade
        ano_padrao: Ano escolar usado ao publicar questoes sem ano
        log_level: Nivel de log (DEBUG, INFO, WARNING, ERROR)
        cors_origins: Origens liberadas no CORS
    """

    owner_id: str = "default"
    agentfs_id: str = "banco-questoes"
    comunidade_page_size: int = 20
    ano_padrao: str = "2026"
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> "BancoConfig":
        """Cria configuracao a partir das variaveis de ambiente."""
        origins = os.getenv("CORS_ORIGINS", "")
        return cls(
            owner_id=os.getenv("BANCO_OWNER_ID", "default"),
            agentfs_id=os.getenv("AGENTFS_ID", "banco-questoes"),
            comunidade_page_size=max(1, _env_int("COMUNIDADE_PAGE_SIZE", 20)),
            ano_padrao=os.getenv("ANO_PADRAO", "2026"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=(
                [o.strip() for o in origins.split(",") if o.strip()]
                if origins
                else list(DEFAULT_CORS_ORIGINS)
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> BancoConfig:
    """Retorna a configuracao do processo (lida uma unica vez)."""
    return BancoConfig.from_env()
