# src/flight_config/core/document/structured.py
"""
Avaliador de documentos estruturados (YAML / JSON).

Alternativa ao avaliador de script para o arquivo base: o conteúdo é
carregado como mapa e cada chave de topo é ligada como global do
documento, na ordem do arquivo (a última avaliação vence).

Formatos suportados:
    - YAML (.yaml, .yml) via PyYAML `safe_load`
    - JSON (.json)

Política de conversão:
    - mapa  → `Table` com chaves string
    - lista → `Table` com array 1-based
    - escalar → valor correspondente (null vira Nil)

Invariantes:
    - O conteúdo raiz deve ser um mapa
    - Arquivo vazio não liga nada

Limites explícitos:
    - Não oferece os construtores auxiliares do prelúdio
    - Não valida semântica de domínio
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict

import yaml  # PyYAML

from ..errors import (
    EvaluationError,
    InvalidDocumentRootTypeError,
    UnsupportedDocumentFormatError,
)
from .table import Table

STRUCTURED_SUFFIXES = frozenset({".yaml", ".yml", ".json"})

_TOO_DEEP = "document nesting is too deep"


def parse_structured(text: str, *, suffix: str, source: str = "<string>") -> Dict[str, Any]:
    """
    Carrega texto YAML/JSON e valida sua estrutura básica.

    Args:
        text: Conteúdo do documento.
        suffix: Extensão que determina o formato (`.yaml`, `.yml`, `.json`).
        source: Rótulo usado nas mensagens de erro.

    Returns:
        Dict[str, Any]: Conteúdo do documento como dicionário puro.

    Raises:
        UnsupportedDocumentFormatError: Se o formato não for suportado.
        EvaluationError: Se o conteúdo não puder ser analisado.
        InvalidDocumentRootTypeError: Se o conteúdo raiz não for um mapa.
    """
    suffix = suffix.lower()

    if suffix in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.MarkedYAMLError as e:
            mark = e.problem_mark or e.context_mark
            line = mark.line + 1 if mark is not None else None
            raise EvaluationError(str(e.problem or e), source=source, line=line) from e
        except yaml.YAMLError as e:
            raise EvaluationError(str(e), source=source) from e
        except RecursionError:
            raise EvaluationError(_TOO_DEEP, source=source) from None

    elif suffix == ".json":
        if not text.strip():
            data = None
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise EvaluationError(e.msg, source=source, line=e.lineno) from e
            except RecursionError:
                raise EvaluationError(_TOO_DEEP, source=source) from None

    else:
        raise UnsupportedDocumentFormatError(f"formato não suportado: {suffix}", source=source)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidDocumentRootTypeError(
            f"raiz do documento deve ser um mapa, recebido: {type(data).__name__}",
            source=source,
        )

    return data


def _is_valid_key(key: Any) -> bool:
    return key is not None and not (isinstance(key, float) and math.isnan(key))


def _to_value(obj: Any, path: str, source: str) -> Any:
    """Converte mapas e listas aninhados em tabelas, validando as chaves."""
    if isinstance(obj, dict):
        table = Table()
        for key, item in obj.items():
            if not _is_valid_key(key):
                raise EvaluationError(f"invalid key {key!r} in '{path}'", source=source)
            table.set(key, _to_value(item, f"{path}.{key}", source))
        return table
    if isinstance(obj, list):
        return Table.from_sequence([_to_value(v, f"{path}[{i}]", source) for i, v in enumerate(obj, start=1)])
    return obj


def evaluate_structured(text: str, globals_table: Table, *, suffix: str, source: str = "<string>") -> None:
    """
    Liga cada chave de topo do documento como global, na ordem do arquivo.

    Raises:
        EvaluationError: Em falha de parse, chave nil/NaN em qualquer nível
            ou aninhamento excessivo. Nenhum global é ligado nesses casos.
    """
    data = parse_structured(text, suffix=suffix, source=source)
    bindings = []
    try:
        for key, value in data.items():
            if not _is_valid_key(key):
                raise EvaluationError(f"invalid top-level key {key!r}", source=source)
            bindings.append((str(key), _to_value(value, str(key), source)))
    except RecursionError:
        raise EvaluationError(_TOO_DEEP, source=source) from None

    for name, value in bindings:
        globals_table.set(name, value)
