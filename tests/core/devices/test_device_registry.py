# tests/core/devices/test_device_registry.py
"""
Testes do registry de dispositivos em memória.

Os testes asseguram que:
- dispositivos são registrados e consultados por (tipo, nome)
- nomes duplicados ou vazios são rejeitados
- o registry atende aos protocolos usados pela fachada
"""

import pytest

from flight_config.core.devices.registry import (
    DeviceKind,
    DeviceLookup,
    DeviceRegistry,
    UserSensorRegistrar,
)


def test_register_and_lookup(device_registry, fake_device_factory):
    dev = fake_device_factory("MPU6050")
    device_registry.register(DeviceKind.GYROSCOPE, "MPU6050", dev)

    assert device_registry.lookup(DeviceKind.GYROSCOPE, "MPU6050") is dev
    assert device_registry.lookup(DeviceKind.ACCELEROMETER, "MPU6050") is None
    assert device_registry.lookup("gyroscope", "MPU6050") is dev


def test_duplicate_name_is_rejected(device_registry, fake_device_factory):
    device_registry.register(DeviceKind.MAGNETOMETER, "HMC5883L", fake_device_factory("a"))
    with pytest.raises(ValueError):
        device_registry.register(DeviceKind.MAGNETOMETER, "HMC5883L", fake_device_factory("b"))


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name_is_rejected(device_registry, fake_device_factory, name):
    with pytest.raises(ValueError):
        device_registry.register(DeviceKind.ACCELEROMETER, name, fake_device_factory("x"))


def test_unknown_kind_is_rejected(device_registry):
    with pytest.raises(ValueError):
        device_registry.lookup("barometer", "BMP280")


def test_list_names_sorted(device_registry, fake_device_factory):
    for name in ("b", "c", "a"):
        device_registry.register(DeviceKind.ACCELEROMETER, name, fake_device_factory(name))
    assert device_registry.list_names(DeviceKind.ACCELEROMETER) == ["a", "b", "c"]
    assert device_registry.list_names(DeviceKind.GYROSCOPE) == []


def test_user_sensors_copy(device_registry):
    device_registry.register_user_sensor("cpu_temp", "user_sensors.cpu_temp")
    snapshot = device_registry.user_sensors
    snapshot.clear()
    assert device_registry.user_sensors == {"cpu_temp": "user_sensors.cpu_temp"}


def test_protocols(device_registry, fake_device_factory):
    assert isinstance(device_registry, DeviceLookup)
    assert isinstance(device_registry, UserSensorRegistrar)
    assert not isinstance(fake_device_factory("x"), DeviceLookup)
