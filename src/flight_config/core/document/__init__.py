# src/flight_config/core/document/__init__.py
"""
Camada de documento do Flight Config.

Este pacote contém o modelo de valores (`Table`, `Function`), o dono do
namespace global (`Document`) e os avaliadores plugáveis que transformam
texto-fonte em mutações sobre esse namespace:
    - script  → subconjunto declarativo de Lua (arquivo base e settings)
    - structured → YAML / JSON (apenas arquivo base)

Limites explícitos:
    - Não resolve paths (ver `core.path`)
    - Não persiste settings (ver `core.config.settings`)
"""

from .document import Document, render_value
from .script import evaluate_script, parse_script, to_literal
from .table import Function, Table

__all__ = [
    "Document",
    "Function",
    "Table",
    "evaluate_script",
    "parse_script",
    "render_value",
    "to_literal",
]
