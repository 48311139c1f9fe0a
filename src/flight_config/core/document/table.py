# src/flight_config/core/document/table.py
"""
Modelo de valores do documento de configuração.

Um valor de documento é um dos tipos:
    - Nil      → `None`
    - Boolean  → `bool`
    - Number   → `int` ou `float`
    - String   → `str`
    - Table    → `Table`
    - Function → `Function` (opaco; produzido apenas pelo prelúdio)

A `Table` é uma estrutura associativa ordenada cujas chaves podem ser
inteiras (formando um array denso 1-based quando contíguas a partir de 1)
ou strings (campos nomeados). As duas formas coexistem na mesma tabela.

Este módulo também concentra as regras nativas de coerção do documento,
usadas pelos acessores tipados e pelo avaliador de script.

Invariantes:
    - Atribuir Nil a uma chave remove a chave
    - Chaves float com valor integral são normalizadas para `int`
    - A iteração segue a ordem de inserção
    - `bool` nunca é tratado como número

Limites explícitos:
    - Não valida schema
    - Não realiza I/O
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

_NUMERIC_RE = re.compile(
    r"""
    \s*
    (?:
        [+-]?0[xX][0-9a-fA-F]+
      | [+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
    )
    \s*
    """,
    re.VERBOSE,
)

_INT_MODULUS = 1 << 64
_INT_OFFSET = 1 << 63
_INT_DIGITS = 19


@dataclass(frozen=True)
class Function:
    """Valor função opaco: um callable Python exposto ao documento."""

    name: str
    call: Callable[..., Any]

    def __repr__(self) -> str:
        return f"Function({self.name})"


class Table:
    """Tabela associativa ordenada com parte array 1-based."""

    __slots__ = ("_data",)

    def __init__(self, entries: Optional[Mapping[Any, Any]] = None):
        self._data: Dict[Any, Any] = {}
        if entries:
            for key, value in entries.items():
                self.set(key, value)

    @classmethod
    def from_sequence(cls, values: Sequence[Any]) -> "Table":
        table = cls()
        for i, value in enumerate(values, start=1):
            table.set(i, value)
        return table

    # -----------------------------
    # Acesso
    # -----------------------------
    def get(self, key: Any) -> Any:
        try:
            return self._data.get(normalize_key(key))
        except (TypeError, ValueError):
            return None

    def set(self, key: Any, value: Any) -> None:
        key = normalize_key(key)
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def border(self) -> int:
        """Quantidade de entradas contíguas a partir do índice 1."""
        n = 0
        while (n + 1) in self._data:
            n += 1
        return n

    def array(self) -> List[Any]:
        return [self._data[i] for i in range(1, self.border() + 1)]

    def keys(self) -> List[Any]:
        return list(self._data.keys())

    def items(self) -> List[Tuple[Any, Any]]:
        return list(self._data.items())

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Any) -> bool:
        try:
            return normalize_key(key) in self._data
        except (TypeError, ValueError):
            return False

    def __repr__(self) -> str:
        return f"Table({self._data!r})"


def normalize_key(key: Any) -> Any:
    if key is None:
        raise ValueError("table index is nil")
    if isinstance(key, float):
        if math.isnan(key):
            raise ValueError("table index is NaN")
        if key.is_integer():
            return int(key)
    return key


# -----------------------------
# Coerções nativas
# -----------------------------
def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Table):
        return "table"
    if isinstance(value, Function):
        return "function"
    return "userdata"


def truthy(value: Any) -> bool:
    return value is not None and value is not False


def wrap_integer(value: int) -> int:
    """Reduz um inteiro à faixa de 64 bits com sinal (aritmética modular)."""
    return (value + _INT_OFFSET) % _INT_MODULUS - _INT_OFFSET


def numeral_value(body: str) -> Any:
    """
    Valor de um numeral sem sinal, como escrito no texto-fonte.

    Regras:
        - hexadecimal → inteiro, com wrap-around em 64 bits
        - decimal sem ponto nem expoente → inteiro se couber em 64 bits,
          senão float
        - demais → float (estouro vira `inf`)
    """
    if body[:2].lower() == "0x":
        return wrap_integer(int(body, 16))
    if body.isdigit():
        if len(body) <= _INT_DIGITS:
            value = int(body)
            if value < _INT_OFFSET:
                return value
        return float(body)
    return float(body)


def parse_number(text: str) -> Optional[float]:
    """Converte uma string com sintaxe numérica do documento, ou `None`."""
    if not _NUMERIC_RE.fullmatch(text):
        return None
    s = text.strip()
    if s[:1] in "+-":
        value = numeral_value(s[1:])
        if s[0] == "-":
            return wrap_integer(-value) if isinstance(value, int) else -value
        return value
    return numeral_value(s)


def to_number(value: Any) -> Optional[float]:
    if is_number(value):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return None


def to_integer(value: Any) -> Optional[int]:
    number = to_number(value)
    if number is None:
        return None
    if isinstance(number, int):
        return number
    if math.isnan(number) or not -_INT_OFFSET <= number < _INT_OFFSET:
        return None
    return math.trunc(number)


def format_number(value: Any) -> str:
    """Representação textual de um número (formato `%.14g` para floats)."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return "%.14g" % value
