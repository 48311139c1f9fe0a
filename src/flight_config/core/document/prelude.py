# src/flight_config/core/document/prelude.py
"""
Prelúdio do documento: globais pré-declarados e construtores auxiliares.

Instalado em todo reset do documento, antes da avaliação do arquivo base.
Os construtores marcam a tabela recebida com um campo discriminante
(`link_type`, `sensor_type` ou `type`) para que o código de construção de
dispositivos despache pela marca.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict

from ..errors import ScriptRuntimeError
from .table import Function, Table, type_name

DEFAULT_BOARD = "generic"

DEVICE_COLLECTIONS = (
    "accelerometers",
    "gyroscopes",
    "magnetometers",
    "altimeters",
    "GPSes",
    "user_sensors",
)

_LINK_TYPES = {
    "Socket": "Socket",
    "RF24": "nRF24L01",
    "SX127x": "SX127x",
    "MultiLink": "MultiLink",
}


def _params(params: Any) -> Table:
    if not isinstance(params, Table):
        raise ScriptRuntimeError(f"attempt to index a {type_name(params)} value")
    return params


def _tagger(field: str, tag: str) -> Callable[..., Any]:
    def build(params: Any = None, *_: Any) -> Table:
        table = _params(params)
        table.set(field, tag)
        return table

    return build


def _vector(x: Any = None, y: Any = None, z: Any = None, w: Any = None, *_: Any) -> Table:
    return Table({"x": x, "y": y, "z": z, "w": w})


def _raw_wifi(params: Any = None, *_: Any) -> Table:
    table = _params(params)
    table.set("link_type", "RawWifi")
    table.set("device", "wlan0")
    if table.get("blocking") is None:
        table.set("blocking", True)
    if table.get("retries") is None:
        table.set("retries", 2)
    return table


def _register_sensor(globals_table: Table) -> Callable[..., Any]:
    def register(name: Any = None, params: Any = None, *_: Any) -> Any:
        sensors = globals_table.get("user_sensors")
        if not isinstance(sensors, Table):
            raise ScriptRuntimeError(f"attempt to index a {type_name(sensors)} value")
        if name is None:
            raise ScriptRuntimeError("table index is nil")
        if isinstance(name, float) and math.isnan(name):
            raise ScriptRuntimeError("table index is NaN")
        sensors.set(name, params)
        return params

    return register


def install_prelude(globals_table: Table, *, board: str = DEFAULT_BOARD) -> None:
    """Liga funções auxiliares e tabelas pré-declaradas em `globals_table`."""
    functions: Dict[str, Callable[..., Any]] = {
        "Vector": _vector,
        "RawWifi": _raw_wifi,
        "Voltmeter": _tagger("sensor_type", "Voltmeter"),
        "Buzzer": _tagger("type", "Buzzer"),
        "RegisterSensor": _register_sensor(globals_table),
    }
    for name, link_type in _LINK_TYPES.items():
        functions[name] = _tagger("link_type", link_type)

    for name, fn in functions.items():
        globals_table.set(name, Function(name, fn))

    globals_table.set("board", Table({"type": board}))
    globals_table.set("frame", Table({"motors": Table()}))
    for name in ("battery", "camera", "hud", "microphone", "controller"):
        globals_table.set(name, Table())
    globals_table.set("stabilizer", Table({"loop_time": 2000}))
    globals_table.set("sensors_map_i2c", Table())
    for name in DEVICE_COLLECTIONS:
        globals_table.set(name, Table())
