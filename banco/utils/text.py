"""Helpers de texto e identificadores de uso geral."""

import functools
import threading
import unicodedata
import uuid
from collections.abc import Callable
from typing import Any

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def debounce(wait: float) -> Callable[[Callable[..., Any]], Callable[..., None]]:
    """Adia a execucao ate `wait` segundos apos a ultima chamada.

    Chamadas em sequencia reiniciam o timer; so a ultima executa, com os
    argumentos dela. A funcao decorada ganha `cancel()` (descarta a chamada
    pendente) e `flush()` (executa a pendente imediatamente).

    Example:
        >>> @debounce(2.0)
        ... def auto_salvar(texto):
        ...     store.save(texto)
        >>> auto_salvar("a"); auto_salvar("ab")  # so "ab" e salvo
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., None]:
        lock = threading.Lock()
        timer: threading.Timer | None = None
        pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None

        def _run() -> None:
            nonlocal timer, pending
            with lock:
                call = pending
                pending = None
                timer = None
            if call is not None:
                func(*call[0], **call[1])

        @functools.wraps(func)
        def debounced(*args: Any, **kwargs: Any) -> None:
            nonlocal timer, pending
            with lock:
                if timer is not None:
                    timer.cancel()
                pending = (args, kwargs)
                timer = threading.Timer(wait, _run)
                timer.daemon = True
                timer.start()

        def cancel() -> None:
            nonlocal timer, pending
            with lock:
                if timer is not None:
                    timer.cancel()
                timer = None
                pending = None

        def flush() -> None:
            with lock:
                if timer is not None:
                    timer.cancel()
            _run()

        debounced.cancel = cancel
        debounced.flush = flush
        return debounced

    return decorator


def normalize_text(text: str | None) -> str:
    """Remove acentos e converte para minusculas.

    Example:
        >>> normalize_text("Ação Pedagógica")
        'acao pedagogica'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


def escape_html(text: Any) -> str:
    """Converte caracteres especiais em entidades HTML (None vira "")."""
    if text is None:
        return ""
    return "".join(_HTML_ESCAPES.get(c, c) for c in str(text))


def generate_uuid() -> str:
    """Gera um UUID v4."""
    return str(uuid.uuid4())
