# tests/core/document/test_table.py
"""
Testes do modelo de valores (`Table`) e das coerções nativas.
"""

import math

import pytest

from flight_config.core.document.table import (
    Table,
    format_number,
    parse_number,
    to_integer,
    to_number,
    truthy,
    wrap_integer,
)


def test_array_and_fields_coexist():
    t = Table.from_sequence(["a", "b"])
    t.set("name", "x")
    assert t.border() == 2
    assert t.array() == ["a", "b"]
    assert t.get("name") == "x"
    assert len(t) == 3


def test_border_stops_at_first_gap():
    t = Table({1: "a", 2: "b", 4: "d"})
    assert t.border() == 2
    assert t.array() == ["a", "b"]


def test_assigning_nil_removes_key():
    t = Table({"a": 1})
    t.set("a", None)
    assert "a" not in t
    assert len(t) == 0


def test_integral_float_keys_are_normalized():
    t = Table()
    t.set(1.0, "one")
    assert t.get(1) == "one"
    assert t.keys() == [1]


def test_nil_key_is_rejected_on_write_but_reads_nil():
    t = Table()
    with pytest.raises(ValueError):
        t.set(None, 1)
    assert t.get(None) is None


def test_iteration_follows_insertion_order():
    t = Table()
    for key in ("z", "a", "m"):
        t.set(key, True)
    assert list(t) == ["z", "a", "m"]


def test_truthiness():
    assert truthy(0)
    assert truthy("")
    assert truthy(Table())
    assert not truthy(None)
    assert not truthy(False)


def test_numeric_string_coercion():
    assert parse_number(" 42 ") == 42
    assert parse_number("0x10") == 16
    assert parse_number("-1.5e2") == -150.0
    assert parse_number("abc") is None
    assert parse_number("inf") is None
    assert parse_number("1_000") is None


def test_to_integer_truncates_toward_zero():
    assert to_integer(3.9) == 3
    assert to_integer(-3.9) == -3
    assert to_integer("7.8") == 7
    assert to_integer(math.inf) is None
    assert to_integer(math.nan) is None
    assert to_integer(True) is None
    assert to_integer(Table()) is None
    assert to_integer(1e300) is None
    assert to_integer(-9.3e18) is None


def test_to_number_rejects_booleans():
    assert to_number(2) == 2
    assert to_number(False) is None


def test_format_number():
    assert format_number(3) == "3"
    assert format_number(3.0) == "3"
    assert format_number(0.1) == "0.1"
    assert format_number(math.inf) == "inf"


def test_integers_are_64_bit():
    assert wrap_integer(2**63) == -(2**63)
    assert wrap_integer(2**64 + 5) == 5
    assert parse_number("0x" + "f" * 300) == -1
    assert parse_number("9223372036854775807") == 2**63 - 1
    assert parse_number("9223372036854775808") == 2.0**63
    assert isinstance(parse_number("1" * 400), float)
    assert parse_number("-0x8000000000000000") == -(2**63)
