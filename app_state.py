"""Core module - shared state and helper functions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from banco.config import get_config

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)

# =============================================================================
# GLOBAL STATE
# =============================================================================

agentfs: Optional[AgentFS] = None


async def get_agentfs() -> AgentFS:
    """Get AgentFS instance (opened lazily on first use)."""
    global agentfs

    if agentfs is None:
        from agentfs_sdk import AgentFS, AgentFSOptions

        config = get_config()
        agentfs = await AgentFS.open(AgentFSOptions(id=config.agentfs_id))
        logger.info(f"AgentFS aberto: {config.agentfs_id}")

    return agentfs


async def cleanup():
    """Cleanup resources on shutdown."""
    global agentfs

    if agentfs is not None:
        try:
            await agentfs.close()
            logger.info("AgentFS closed!")
        except Exception as e:
            logger.warning(f"Error closing agentfs: {e}")
        agentfs = None
