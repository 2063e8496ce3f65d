"""Configuracao de logging do servico."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configura o handler raiz uma unica vez.

    Args:
        level: Nome do nivel (DEBUG, INFO, WARNING, ERROR)
    """
    root = logging.getLogger()
    if not any(getattr(h, "_banco_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._banco_handler = True
        root.addHandler(handler)

    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Retorna logger nomeado dentro do namespace do banco."""
    return logging.getLogger(f"banco.{name}")
