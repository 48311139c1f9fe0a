# src/flight_config/core/path/parser.py
"""
Parser da gramática de paths do documento.

Um path é uma string que usa `.` para separar campos e `[...]` para
indexar por posição (1-based) ou por nome de campo:

    stabilizer.loop_time
    frame.motors[2].pin
    accelerometers["imu.0"].axis_swap.x

O resultado é uma tupla explícita de segmentos `Field(name)` / `Index(n)`,
consumida pelo resolver.

Regras (em ordem):
    - Path sem `.` e sem `[` → um único `Field` com o path inteiro
    - `.`, `[` e `]` delimitam tokens; tokens vazios são ignorados
      (`a..b`, `a[1].b` e `.a` são aceitos)
    - Token aberto por `[` e fechado por `]` só com dígitos ASCII → `Index`
    - Token entre colchetes com aspas (`'...'` ou `"..."`) → `Field` com o
      texto literal, inclusive pontos
    - Qualquer outro token → `Field`

Invariantes:
    - O parser nunca falha: toda string produz uma tupla (possivelmente vazia)
    - Não há limite de tamanho de segmento
    - Nenhum cache: cada chamada analisa o path novamente
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Field:
    name: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    position: int

    @property
    def key(self) -> int:
        return self.position


Segment = Union[Field, Index]


def parse_path(path: str) -> Tuple[Segment, ...]:
    """Converte `path` em segmentos, da esquerda para a direita."""
    if "." not in path and "[" not in path:
        return (Field(path),) if path else ()

    segments: List[Segment] = []
    token: List[str] = []
    opener: Optional[str] = None
    quoted = False
    i, n = 0, len(path)

    while i < n:
        ch = path[i]

        if ch in "'\"" and opener == "[" and not token and not quoted:
            end = path.find(ch, i + 1)
            if end >= 0:
                token.append(path[i + 1:end])
                quoted = True
                i = end + 1
                continue

        if ch in ".[]":
            text = "".join(token)
            if text or quoted:
                segments.append(_segment(text, bracketed=(opener == "[" and ch == "]"), quoted=quoted))
            token = []
            quoted = False
            opener = ch
        else:
            token.append(ch)
        i += 1

    text = "".join(token)
    if text or quoted:
        # token final sem `]` é sempre campo
        segments.append(Field(text))

    return tuple(segments)


def _segment(text: str, *, bracketed: bool, quoted: bool) -> Segment:
    if bracketed and not quoted and _DIGITS_RE.fullmatch(text):
        return Index(int(text))
    return Field(text)


def format_path(segments: Tuple[Segment, ...]) -> str:
    """Reconstrói um path canônico a partir de segmentos."""
    parts: List[str] = []
    for seg in segments:
        if isinstance(seg, Index):
            parts.append(f"[{seg.position}]")
        elif parts and not _is_identifier(seg.name):
            parts.append(f'["{seg.name}"]')
        elif parts:
            parts.append(f".{seg.name}")
        else:
            parts.append(seg.name)
    return "".join(parts)


def _is_identifier(name: str) -> bool:
    return name.isidentifier()
