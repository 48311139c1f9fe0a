# src/flight_config/core/document/document.py
"""
Documento de configuração: dono explícito do namespace global.

O `Document` substitui o estado global implícito de um interpretador
embarcado por uma árvore de valores explícita (`Table`), mutada apenas por:
    - avaliação de texto-fonte (script ou estruturado)
    - statements de binding emitidos pelos setters

Decisões arquiteturais:
    - O avaliador é escolhido pela extensão do arquivo (plugável)
    - `reset()` descarta e recria todos os globais e incrementa `generation`
    - Exceções de avaliação são propagadas; a fachada decide o tratamento

Invariantes:
    - `globals` é sempre uma `Table`
    - Toda `Resolution` carrega a geração em que foi obtida

Limites explícitos:
    - Não lê nem escreve arquivos (recebe texto)
    - Não é thread-safe
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional

from .prelude import DEFAULT_BOARD, install_prelude
from .script import evaluate_script
from .structured import STRUCTURED_SUFFIXES, evaluate_structured
from .table import Function, Table, format_number, is_number


class Document:
    """Árvore de valores com namespace global recarregável."""

    def __init__(self, *, board: str = DEFAULT_BOARD):
        self.board = board
        self.generation = 0
        self.globals = Table()
        self.reset()

    def reset(self) -> None:
        self.globals = Table()
        self.generation += 1
        install_prelude(self.globals, board=self.board)

    def evaluate(self, text: str, *, source: str = "<string>", suffix: Optional[str] = None) -> None:
        """
        Avalia `text` sobre o namespace global.

        Args:
            text: Texto-fonte do documento.
            source: Rótulo (normalmente o nome do arquivo) usado em erros.
            suffix: Extensão que seleciona o avaliador; quando omitida,
                é derivada de `source`.

        Raises:
            EvaluationError: Em falha de sintaxe, execução ou formato.
        """
        if suffix is None:
            suffix = Path(source).suffix
        if suffix.lower() in STRUCTURED_SUFFIXES:
            evaluate_structured(text, self.globals, suffix=suffix, source=source)
        else:
            evaluate_script(text, self.globals, source=source)

    def get_global(self, name: str) -> Any:
        return self.globals.get(name)


def render_value(
    value: Any,
    name: str = "",
    *,
    indent: int = 0,
    elide: Iterable[str] = (),
) -> str:
    """Renderiza um valor como texto indentado no estilo do script (debug)."""
    elide = frozenset(elide)
    lines: List[str] = []
    _render(value, name, indent, elide, lines, frozenset())
    return "".join(lines)


def _render(
    value: Any,
    name: str,
    indent: int,
    elide: frozenset,
    out: List[str],
    open_tables: frozenset,
) -> None:
    pad = "    " * indent
    out.append(pad)
    if name:
        out.append(f"{name} = ")

    if value is None:
        out.append("nil")
    elif isinstance(value, bool):
        out.append("true" if value else "false")
    elif is_number(value):
        out.append(format_number(value))
    elif isinstance(value, str):
        out.append(f'"{value}"')
    elif isinstance(value, Function):
        out.append("function()")
    elif isinstance(value, Table) and id(value) in open_tables:
        # ciclo: a tabela já está sendo renderizada acima
        out.append("{...}")
    elif isinstance(value, Table):
        open_tables = open_tables | {id(value)}
        out.append("{\n")
        array = value.array()
        if array:
            for item in array:
                _render(item, "", indent + 1, elide, out, open_tables)
                out.append(",\n")
        else:
            for key, item in value.items():
                label = f"[{format_number(key)}]" if is_number(key) else str(key)
                if label in elide:
                    out.append("    " * (indent + 1) + f"{label} = {{...}}")
                else:
                    _render(item, label, indent + 1, elide, out, open_tables)
                out.append(",\n")
        out.append(pad + "}")
    else:
        out.append("__unknown__")
