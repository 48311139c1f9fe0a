# src/flight_config/core/devices/registry.py
"""
Registry de dispositivos: colaborador externo da camada de configuração.

A configuração não constrói dispositivos: ela apenas consulta
dispositivos já registrados (para aplicar calibração) e reporta sensores
de usuário declarados no documento. Este módulo define os protocolos
desses colaboradores e uma implementação em memória.

Este módulo fornece:
- DeviceKind: classificação dos dispositivos calibráveis
- AxisSwappable / DeviceLookup / UserSensorRegistrar: protocolos
- DeviceRegistry: registry determinístico em memória
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable


class DeviceKind(str, Enum):
    """Tipos de dispositivo com calibração de eixos."""

    ACCELEROMETER = "accelerometer"
    GYROSCOPE = "gyroscope"
    MAGNETOMETER = "magnetometer"


AxisSwap = Tuple[int, int, int]


@runtime_checkable
class AxisSwappable(Protocol):
    def set_axis_swap(self, swap: AxisSwap) -> None:
        ...


@runtime_checkable
class DeviceLookup(Protocol):
    def lookup(self, kind: DeviceKind, name: str) -> Optional[AxisSwappable]:
        ...


@runtime_checkable
class UserSensorRegistrar(Protocol):
    def register_user_sensor(self, name: str, path: str) -> None:
        ...


class DeviceRegistry:
    """Registry em memória de dispositivos nomeados, por tipo.

    Também atende ao protocolo `UserSensorRegistrar`, guardando as
    declarações `(nome, path)` para construção posterior.
    """

    def __init__(self) -> None:
        self._devices: Dict[DeviceKind, Dict[str, Any]] = {kind: {} for kind in DeviceKind}
        self._user_sensors: Dict[str, str] = {}

    def register(self, kind: DeviceKind, name: str, device: Any) -> None:
        kind = DeviceKind(kind)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("device name must be a non-empty string")
        if name in self._devices[kind]:
            raise ValueError(f"{kind.value} already registered: {name}")
        self._devices[kind][name] = device

    def lookup(self, kind: DeviceKind, name: str) -> Optional[Any]:
        return self._devices[DeviceKind(kind)].get(name)

    def list_names(self, kind: DeviceKind) -> List[str]:
        return sorted(self._devices[DeviceKind(kind)].keys())

    def register_user_sensor(self, name: str, path: str) -> None:
        self._user_sensors[name] = path

    @property
    def user_sensors(self) -> Dict[str, str]:
        return dict(self._user_sensors)
