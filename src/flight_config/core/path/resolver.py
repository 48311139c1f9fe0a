# src/flight_config/core/path/resolver.py
"""
Resolver funcional de paths sobre o documento.

`locate(document, path)` percorre os segmentos produzidos por
`parse_path` a partir do namespace global e devolve uma `Resolution`
imutável.

Política de resolução:
    - O primeiro segmento é resolvido contra os globais
    - Cada segmento seguinte é resolvido contra o valor corrente
    - Valor corrente que não é `Table` → não encontrado
    - Resultado Nil em qualquer segmento → não encontrado, sem avaliar o resto

Decisões arquiteturais:
    - Nenhum estado de travessia é compartilhado entre chamadas
    - `locate` nunca muta o documento
    - "Não encontrado" é um resultado, não uma exceção

Invariantes:
    - `Resolution.value` é `None` sempre que `found` é falso
    - A referência em `value` pertence à geração registrada em `generation`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union

from ..document.document import Document
from ..document.table import Table
from .parser import Segment, format_path, parse_path

PathLike = Union[str, Sequence[Segment]]


@dataclass(frozen=True)
class Resolution:
    """Resultado da resolução de um path."""

    path: str
    found: bool
    value: Any = None
    generation: int = 0

    def is_stale(self, document: Document) -> bool:
        """Indica se o documento foi recarregado depois desta resolução."""
        return self.generation != document.generation


def locate(document: Document, path: PathLike) -> Resolution:
    """
    Resolve `path` contra o documento.

    Args:
        document: Documento carregado.
        path: String de path ou sequência de segmentos já analisada.
            Segmentos são usados como estão, sem passar pela gramática,
            o que permite endereçar chaves com aspas ou colchetes.

    Returns:
        Resolution: Resultado imutável; `found` falso quando o path não existe.
    """
    if isinstance(path, str):
        segments = tuple(parse_path(path))
    else:
        segments = tuple(path)
        path = format_path(segments)
    if not segments:
        return Resolution(path, False, None, document.generation)

    current: Any = document.globals
    for segment in segments:
        if not isinstance(current, Table):
            return Resolution(path, False, None, document.generation)
        current = current.get(segment.key)
        if current is None:
            return Resolution(path, False, None, document.generation)

    return Resolution(path, True, current, document.generation)
