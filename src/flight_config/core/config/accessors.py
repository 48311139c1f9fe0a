# src/flight_config/core/config/accessors.py
"""
Acessores tipados sobre o documento.

Cada acessor resolve o path com `locate` e converte o valor encontrado
usando as regras nativas de coerção do documento. Toda falha (path
inexistente, tipo incompatível, número não finito) devolve o `default`
fornecido pelo chamador.

Política de coerção:
    - string  → apenas valores string; nenhum escalar é convertido
    - integer → números truncados em direção a zero; strings numéricas
    - number  → números e strings numéricas, como `float`
    - boolean → veracidade do documento (tudo exceto nil e false)

Invariantes:
    - Nenhum acessor levanta exceção
    - O `default` é devolvido sem alteração
"""

from __future__ import annotations

from typing import List

from ..document.document import Document
from ..document.table import Table, to_integer, to_number, truthy
from ..path.resolver import PathLike, locate


def get_string(document: Document, path: PathLike, default: str = "") -> str:
    """
    Lê uma string em `path`.

    Args:
        document: Documento carregado.
        path: Path a resolver.
        default: Valor devolvido quando o path não existe ou não é string.

    Returns:
        str: O valor encontrado ou `default`.
    """
    resolved = locate(document, path)
    if not resolved.found or not isinstance(resolved.value, str):
        return default
    return resolved.value


def get_integer(document: Document, path: PathLike, default: int = 0) -> int:
    """
    Lê um inteiro em `path`, truncando números em direção a zero.

    Args:
        document: Documento carregado.
        path: Path a resolver.
        default: Valor devolvido quando o path não existe ou o valor não
            tem representação inteira de 64 bits.

    Returns:
        int: O valor convertido ou `default`.
    """
    resolved = locate(document, path)
    if not resolved.found:
        return default
    value = to_integer(resolved.value)
    return default if value is None else value


def get_number(document: Document, path: PathLike, default: float = 0.0) -> float:
    """
    Lê um número em `path` (strings numéricas são aceitas).

    Returns:
        float: O valor como `float` ou `default`.
    """
    resolved = locate(document, path)
    if not resolved.found:
        return default
    value = to_number(resolved.value)
    return default if value is None else float(value)


def get_boolean(document: Document, path: PathLike, default: bool = False) -> bool:
    """Veracidade do valor em `path`; `default` apenas quando o path não existe."""
    resolved = locate(document, path)
    if not resolved.found:
        return default
    return truthy(resolved.value)


def integer_array(document: Document, path: PathLike) -> List[int]:
    """Parte array (1..border) do valor em `path`, convertida para inteiros."""
    resolved = locate(document, path)
    if not resolved.found or not isinstance(resolved.value, Table):
        return []
    out: List[int] = []
    for item in resolved.value.array():
        value = to_integer(item)
        out.append(0 if value is None else value)
    return out


def array_length(document: Document, path: PathLike) -> int:
    """
    Tamanho do valor em `path`.

    Returns:
        int: -1 se não encontrado; 0 se não for tabela; o tamanho da parte
        array quando existir; senão o número total de entradas.
    """
    resolved = locate(document, path)
    if not resolved.found:
        return -1
    value = resolved.value
    if not isinstance(value, Table):
        return 0
    border = value.border()
    if border > 0:
        return border
    return len(value)
