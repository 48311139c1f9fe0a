# tests/core/config/test_accessors.py
"""
Testes dos acessores tipados.

Os testes asseguram que:
- path inexistente devolve o default em todos os tipos
- inteiros são truncados e strings numéricas convertidas
- strings nunca são produzidas a partir de outros tipos
- booleanos seguem a veracidade do documento
- `integer_array` e `array_length` tratam arrays, mapas e escalares

Invariantes:
    - Nenhum acessor levanta exceção
"""

import pytest

from flight_config.core.config import accessors
from flight_config.core.document import Document


@pytest.fixture
def doc() -> Document:
    d = Document()
    d.evaluate(
        """\
a = { b = { c = 5 } }
arr = { 10, 20, 30 }
mixed = { 1, "2", 3.7, "x", true }
sparse = { [1] = 1, [3] = 3 }
named = { x = 1, y = 2, z = 3 }
holes = { [2] = "b", [3] = "c" }
pi = 3.99
neg = -3.99
txt = "hello"
numtxt = "42.9"
zero = 0
off = false
huge = 1/0
"""
    )
    return d


@pytest.mark.parametrize("path", ["missing", "a.missing", "a.b.c.d", "arr[9]", "txt.len"])
def test_missing_paths_return_default(doc, path):
    assert accessors.get_string(doc, path, "dflt") == "dflt"
    assert accessors.get_integer(doc, path, -7) == -7
    assert accessors.get_number(doc, path, 1.25) == 1.25
    assert accessors.get_boolean(doc, path, True) is True
    assert accessors.integer_array(doc, path) == []
    assert accessors.array_length(doc, path) == -1


def test_nested_integer(doc):
    assert accessors.get_integer(doc, "a.b.c", 0) == 5


def test_integer_truncates(doc):
    assert accessors.get_integer(doc, "pi", 0) == 3
    assert accessors.get_integer(doc, "neg", 0) == -3
    assert accessors.get_integer(doc, "numtxt", 0) == 42


def test_integer_falls_back_on_wrong_type(doc):
    assert accessors.get_integer(doc, "txt", 9) == 9
    assert accessors.get_integer(doc, "off", 9) == 9
    assert accessors.get_integer(doc, "a", 9) == 9
    assert accessors.get_integer(doc, "huge", 9) == 9


def test_number(doc):
    assert accessors.get_number(doc, "pi", 0.0) == pytest.approx(3.99)
    assert accessors.get_number(doc, "a.b.c", 0.0) == 5.0
    assert isinstance(accessors.get_number(doc, "a.b.c", 0.0), float)
    assert accessors.get_number(doc, "numtxt", 0.0) == pytest.approx(42.9)
    assert accessors.get_number(doc, "txt", 0.5) == 0.5


def test_string_is_never_stringified(doc):
    assert accessors.get_string(doc, "txt", "") == "hello"
    assert accessors.get_string(doc, "numtxt", "") == "42.9"
    assert accessors.get_string(doc, "a.b.c", "dflt") == "dflt"
    assert accessors.get_string(doc, "off", "dflt") == "dflt"
    assert accessors.get_string(doc, "a", "dflt") == "dflt"


def test_boolean_truthiness(doc):
    assert accessors.get_boolean(doc, "zero", False) is True
    assert accessors.get_boolean(doc, "txt", False) is True
    assert accessors.get_boolean(doc, "a", False) is True
    assert accessors.get_boolean(doc, "off", True) is False


def test_integer_array(doc):
    assert accessors.integer_array(doc, "arr") == [10, 20, 30]
    assert accessors.integer_array(doc, "mixed") == [1, 2, 3, 0, 0]
    assert accessors.integer_array(doc, "sparse") == [1]
    assert accessors.integer_array(doc, "named") == []
    assert accessors.integer_array(doc, "pi") == []


def test_array_length(doc):
    assert accessors.array_length(doc, "arr") == 3
    assert accessors.array_length(doc, "sparse") == 1
    assert accessors.array_length(doc, "named") == 3
    assert accessors.array_length(doc, "holes") == 2
    assert accessors.array_length(doc, "pi") == 0
    assert accessors.array_length(doc, "frame.motors") == 0


def test_array_of_tables(doc):
    doc.evaluate("a = { { b = 1 }, { b = 2 } }")
    assert accessors.get_integer(doc, "a[2].b", 0) == 2
