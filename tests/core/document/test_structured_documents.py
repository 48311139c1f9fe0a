# tests/core/document/test_structured_documents.py
"""
Testes do avaliador de documentos estruturados (YAML / JSON).

Os testes asseguram que:
- chaves de topo viram globais, substituindo tabelas do prelúdio
- listas viram arrays 1-based e mapas viram tabelas
- arquivo vazio não liga nada
- raiz que não é mapa e formatos desconhecidos são rejeitados
- erros de parse informam a linha
"""

import pytest

from flight_config.core.document import Document
from flight_config.core.document.structured import parse_structured
from flight_config.core.errors import (
    EvaluationError,
    InvalidDocumentRootTypeError,
    UnsupportedDocumentFormatError,
)
from flight_config.core.path.resolver import locate


def test_yaml_document_binds_globals():
    doc = Document()
    doc.evaluate(
        "stabilizer:\n  loop_time: 2500\nframe:\n  motors:\n    - pin: 4\n    - pin: 17\n",
        source="base.yaml",
    )
    assert locate(doc, "stabilizer.loop_time").value == 2500
    assert locate(doc, "frame.motors[2].pin").value == 17


def test_json_document_binds_globals():
    doc = Document()
    doc.evaluate('{"gyroscopes": {"L3GD20": {"axis_swap": {"x": 1}}}}', source="base.json")
    assert locate(doc, "gyroscopes.L3GD20.axis_swap.x").value == 1


def test_empty_yaml_keeps_prelude():
    doc = Document()
    doc.evaluate("", source="base.yml")
    assert locate(doc, "stabilizer.loop_time").value == 2000


def test_non_mapping_root_is_rejected():
    with pytest.raises(InvalidDocumentRootTypeError):
        parse_structured("- 1\n- 2\n", suffix=".yaml")


def test_unsupported_format():
    with pytest.raises(UnsupportedDocumentFormatError):
        parse_structured("a = 1", suffix=".ini")


def test_yaml_error_reports_line():
    with pytest.raises(EvaluationError) as exc:
        parse_structured("a: 1\nb: [1, 2\n", suffix=".yaml", source="base.yaml")
    assert exc.value.source == "base.yaml"
    assert exc.value.line is not None


def test_json_error_reports_line():
    with pytest.raises(EvaluationError) as exc:
        parse_structured('{\n"a": 1,\n}', suffix=".json")
    assert exc.value.line == 3
