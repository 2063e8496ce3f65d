# =============================================================================
# TESTES - Text Utils
# =============================================================================
# Testes unitarios para helpers de texto, ids e debounce
# =============================================================================

import threading
import uuid

import pytest


class TestNormalizeText:
    """Testes para normalize_text."""

    def test_remove_acentos(self):
        """Verifica exemplo classico."""
        from banco.utils.text import normalize_text

        assert normalize_text("Ação Pedagógica") == "acao pedagogica"

    def test_cedilha_e_til(self):
        """Verifica caracteres compostos."""
        from banco.utils.text import normalize_text

        assert normalize_text("Educação Física São") == "educacao fisica sao"

    @pytest.mark.parametrize("valor", ["", None])
    def test_vazio(self, valor):
        """Verifica entrada vazia."""
        from banco.utils.text import normalize_text

        assert normalize_text(valor) == ""


class TestEscapeHtml:
    """Testes para escape_html."""

    def test_escapa_caracteres_especiais(self):
        """Verifica todas as entidades."""
        from banco.utils.text import escape_html

        result = escape_html("<script>alert(\"x\" & 'y')</script>")

        assert result == "&lt;script&gt;alert(&quot;x&quot; &amp; &#39;y&#39;)&lt;/script&gt;"

    def test_texto_seguro_inalterado(self):
        """Verifica texto sem caracteres especiais."""
        from banco.utils.text import escape_html

        assert escape_html("Matemática 6º Ano") == "Matemática 6º Ano"

    def test_nao_string(self):
        """Verifica conversao de numeros."""
        from banco.utils.text import escape_html

        assert escape_html(42) == "42"

    @pytest.mark.parametrize("valor", ["", None])
    def test_vazio(self, valor):
        """Verifica None e string vazia."""
        from banco.utils.text import escape_html

        assert escape_html(valor) == ""

    @pytest.mark.parametrize("valor, esperado", [(0, "0"), (False, "False")])
    def test_falsy_nao_nulo_preservado(self, valor, esperado):
        """Verifica que 0 e False nao somem."""
        from banco.utils.text import escape_html

        assert escape_html(valor) == esperado


class TestGenerateUuid:
    """Testes para generate_uuid."""

    def test_uuid_v4(self):
        """Verifica formato UUID v4."""
        from banco.utils.text import generate_uuid

        value = generate_uuid()

        assert uuid.UUID(value).version == 4

    def test_unicos(self):
        """Verifica unicidade."""
        from banco.utils.text import generate_uuid

        assert len({generate_uuid() for _ in range(100)}) == 100


class TestDebounce:
    """Testes para debounce."""

    def test_flush_executa_ultima_chamada(self):
        """Verifica que so a ultima chamada executa."""
        from banco.utils.text import debounce

        chamadas = []

        @debounce(10.0)
        def salvar(valor):
            chamadas.append(valor)

        salvar("a")
        salvar("ab")
        salvar("abc")
        salvar.flush()

        assert chamadas == ["abc"]

    def test_cancel_descarta(self):
        """Verifica cancelamento."""
        from banco.utils.text import debounce

        chamadas = []

        @debounce(10.0)
        def salvar(valor):
            chamadas.append(valor)

        salvar("a")
        salvar.cancel()
        salvar.flush()

        assert chamadas == []

    def test_executa_apos_espera(self):
        """Verifica execucao apos o intervalo."""
        from banco.utils.text import debounce

        executou = threading.Event()
        chamadas = []

        @debounce(0.05)
        def salvar(valor, sufixo=""):
            chamadas.append(valor + sufixo)
            executou.set()

        salvar("x")
        salvar("y", sufixo="!")

        assert executou.wait(2.0)
        assert chamadas == ["y!"]

    def test_preserva_metadata(self):
        """Verifica functools.wraps."""
        from banco.utils.text import debounce

        @debounce(1.0)
        def auto_salvar():
            """Salva o rascunho."""

        assert auto_salvar.__name__ == "auto_salvar"
        assert auto_salvar.__doc__ == "Salva o rascunho."
        auto_salvar.cancel()
