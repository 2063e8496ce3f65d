"""
Banco de Questões Server

FastAPI server with:
- Banco pessoal de questões (CRUD)
- Comunidade de questões compartilhadas via AgentFS
- Montagem automática de provas por dificuldade
- Estatísticas do acervo
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app_state
from banco.config import get_config
from banco.logger import get_logger, setup_logging
from banco.router import router as banco_router

config = get_config()
setup_logging(config.log_level)
logger = get_logger("server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Banco de Questões...")
    yield
    await app_state.cleanup()


app = FastAPI(
    title="Banco de Questões",
    description="Banco de questões, comunidade e montagem de provas",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(banco_router)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/")
async def root():
    """Status do serviço."""
    return {"status": "ok", "service": "banco-questoes", "owner_id": config.owner_id}


@app.get("/health")
async def health():
    """Health check."""
    return {
        "status": "healthy",
        "agentfs": app_state.agentfs is not None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
