# tests/core/path/test_path_resolver.py
"""
Testes do resolver funcional de paths.

Os testes asseguram que:
- o primeiro segmento é resolvido contra os globais
- arrays são indexados de forma 1-based
- nil em qualquer segmento interrompe a resolução
- indexar um escalar é "não encontrado", nunca um crash
- resoluções são independentes e não mutam o documento
- reset do documento torna resoluções anteriores obsoletas
"""

from flight_config.core.document import Document
from flight_config.core.path.parser import Field, Index
from flight_config.core.path.resolver import locate


def _doc(source: str) -> Document:
    doc = Document()
    doc.evaluate(source)
    return doc


def test_nested_field_lookup():
    doc = _doc("a = { b = { c = 5 } }")
    res = locate(doc, "a.b.c")
    assert res.found
    assert res.value == 5


def test_array_of_tables_by_index():
    doc = _doc("a = { { b = 1 }, { b = 2 } }")
    assert locate(doc, "a[2].b").value == 2
    assert locate(doc, "a[1].b").value == 1


def test_missing_segment_short_circuits():
    doc = _doc("a = { b = 1 }")
    res = locate(doc, "a.x.y.z")
    assert not res.found
    assert res.value is None


def test_index_through_scalar_is_not_found():
    doc = _doc("a = { b = 1, s = 'text' }")
    assert not locate(doc, "a.b.c").found
    assert not locate(doc, "a.s[1]").found
    assert not locate(doc, "a.b[1]").found


def test_dotted_digit_is_string_field_not_array_index():
    doc = _doc("a = { 10, 20 }")
    assert not locate(doc, "a.1").found
    assert locate(doc, "a[1]").value == 10


def test_false_value_is_found():
    doc = _doc("flag = false")
    res = locate(doc, "flag")
    assert res.found
    assert res.value is False


def test_empty_path_is_not_found():
    assert not locate(Document(), "").found


def test_unknown_global_is_not_found():
    assert not locate(Document(), "nothing_here").found


def test_quoted_key_with_dot():
    doc = _doc('sensors = { ["imu.0"] = { rate = 100 } }')
    assert locate(doc, 'sensors["imu.0"].rate').value == 100


def test_locate_does_not_mutate_document():
    doc = _doc("a = { b = { c = 5 } }")
    before = doc.globals.keys()
    locate(doc, "a.b.c")
    locate(doc, "a.missing.deep")
    locate(doc, "zzz")
    assert doc.globals.keys() == before
    assert locate(doc, "a.b.c").value == 5


def test_reset_makes_previous_resolution_stale():
    doc = _doc("a = { b = 1 }")
    res = locate(doc, "a")
    assert not res.is_stale(doc)
    doc.reset()
    assert res.is_stale(doc)
    assert not locate(doc, "a").found


def test_segments_are_resolved_as_given():
    doc = _doc('a = { [\'x"y\'] = { [2] = "two" } }')
    res = locate(doc, (Field("a"), Field('x"y'), Index(2)))
    assert res.found
    assert res.value == "two"
    assert not locate(doc, (Field("a"), Field("x.y"))).found
