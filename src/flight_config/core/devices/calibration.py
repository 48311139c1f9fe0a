# src/flight_config/core/devices/calibration.py
"""
Aplicação de calibração de eixos a dispositivos registrados.

Para cada coleção de dispositivos calibráveis do documento
(`accelerometers`, `gyroscopes`, `magnetometers`), este módulo percorre as
chaves declaradas, consulta o registry e, quando há dispositivo com aquele
nome, aplica a tupla `axis_swap` lida do documento.

Política de aplicação:
    - Coleções na ordem: accelerometers, gyroscopes, magnetometers
    - Chaves na ordem de inserção da tabela
    - Dispositivo não registrado → ignorado silenciosamente
    - Eixo ausente no documento → 0

Invariantes:
    - O documento não é mutado
    - Apenas dispositivos registrados recebem `set_axis_swap`

Limites explícitos:
    - Não constrói nem registra dispositivos
    - Não implementa a matemática de calibração
"""

from __future__ import annotations

from typing import Any, Tuple

from ..config.accessors import get_integer
from ..document.document import Document
from ..document.table import Table, is_number
from ..path.parser import Field, Index, Segment
from .registry import AxisSwap, DeviceKind, DeviceLookup

CALIBRATED_COLLECTIONS: Tuple[Tuple[str, DeviceKind], ...] = (
    ("accelerometers", DeviceKind.ACCELEROMETER),
    ("gyroscopes", DeviceKind.GYROSCOPE),
    ("magnetometers", DeviceKind.MAGNETOMETER),
)


def _entry_segment(key: Any) -> Segment:
    if is_number(key) and not isinstance(key, float):
        return Index(key)
    return Field(str(key))


def read_axis_swap(document: Document, collection: str, key: Any) -> AxisSwap:
    entry = (Field(collection), _entry_segment(key), Field("axis_swap"))
    x, y, z = (get_integer(document, entry + (Field(axis),), 0) for axis in "xyz")
    return (x, y, z)


def apply_calibration(document: Document, registry: DeviceLookup) -> int:
    """
    Empurra as tuplas `axis_swap` do documento para os dispositivos registrados.

    Args:
        document: Documento carregado.
        registry: Colaborador com `lookup(kind, name)`.

    Returns:
        int: Quantidade de dispositivos configurados.
    """
    applied = 0
    for collection, kind in CALIBRATED_COLLECTIONS:
        table = document.get_global(collection)
        if not isinstance(table, Table):
            continue
        for key in table.keys():
            device = registry.lookup(kind, str(key))
            if device is None:
                continue
            device.set_axis_swap(read_axis_swap(document, collection, key))
            applied += 1
    return applied
