# =============================================================================
# CONFTEST - Raiz do projeto
# =============================================================================
# Garante que `banco`, `app_state` e `server` sejam importaveis nos testes
# =============================================================================

import sys
from pathlib import Path

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))
