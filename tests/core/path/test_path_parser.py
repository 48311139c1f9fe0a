# tests/core/path/test_path_parser.py
"""
Testes do parser de paths.

Os testes asseguram que:
- paths simples viram um único campo global
- `.` e `[...]` produzem segmentos `Field` / `Index`
- tokens vazios são ignorados
- aspas entre colchetes preservam o texto literal
- segmentos não têm limite de tamanho
"""

import pytest

from flight_config.core.path.parser import Field, Index, format_path, parse_path


def test_bare_identifier_is_single_field():
    assert parse_path("stabilizer") == (Field("stabilizer"),)


def test_bare_path_keeps_closing_bracket_verbatim():
    # sem `.` e sem `[`: o path inteiro é o nome global
    assert parse_path("odd]name") == (Field("odd]name"),)


def test_empty_path_has_no_segments():
    assert parse_path("") == ()


def test_dotted_path():
    assert parse_path("a.b.c") == (Field("a"), Field("b"), Field("c"))


def test_bracket_digits_become_index():
    assert parse_path("a[2].b") == (Field("a"), Index(2), Field("b"))


def test_bracket_name_is_field():
    assert parse_path("accelerometers[MPU6050].axis_swap") == (
        Field("accelerometers"),
        Field("MPU6050"),
        Field("axis_swap"),
    )


@pytest.mark.parametrize(
    "path",
    ["a..b", ".a.b", "a.b.", "a[b]", "a.[b]"],
)
def test_empty_tokens_are_skipped(path):
    assert parse_path(path) == (Field("a"), Field("b"))


def test_dot_segment_with_digits_is_field():
    assert parse_path("a.1") == (Field("a"), Field("1"))


def test_quoted_bracket_keeps_dots_and_digits_as_field():
    assert parse_path('a["imu.0"].x') == (Field("a"), Field("imu.0"), Field("x"))
    assert parse_path("a['1']") == (Field("a"), Field("1"))


def test_unterminated_bracket_is_field():
    assert parse_path("a[2") == (Field("a"), Field("2"))


def test_mixed_digits_are_not_index():
    assert parse_path("a[2x]") == (Field("a"), Field("2x"))


def test_long_segments_are_supported():
    name = "s" * 4096
    assert parse_path(f"root.{name}") == (Field("root"), Field(name))


def test_format_path_round_trips_through_parser():
    segments = (Field("accelerometers"), Field("imu.0"), Index(3), Field("x"))
    text = format_path(segments)
    assert text == 'accelerometers["imu.0"][3].x'
    assert parse_path(text) == segments
