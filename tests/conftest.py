# tests/conftest.py
"""
Fixtures compartilhados para testes do Flight Config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos base e de settings semelhantes ao uso real
- dispositivos falsos que registram chamadas de calibração
- registry de dispositivos vazio

Decisões arquiteturais:
    - Documentos são fornecidos como string; testes que precisam de arquivo
      usam `tmp_path`
    - Dispositivos falsos usam duck typing em vez de herança

Invariantes:
    - Nenhuma fixture realiza I/O
    - Dados retornados são determinísticos e isolados
"""

from typing import List, Tuple

import pytest


class FakeDevice:
    """Dispositivo falso: guarda cada tupla recebida em `set_axis_swap`."""

    def __init__(self, name: str):
        self.name = name
        self.calls: List[Tuple[int, int, int]] = []

    def set_axis_swap(self, swap):
        self.calls.append(tuple(swap))


@pytest.fixture
def fake_device_factory():
    return FakeDevice


@pytest.fixture
def device_registry():
    from flight_config.core.devices.registry import DeviceRegistry

    return DeviceRegistry()


@pytest.fixture
def flight_base_script() -> str:
    """
    Documento base semelhante a um arquivo de configuração real de drone.

    Cobre:
    - tabelas aninhadas e arrays 1-based
    - construtores auxiliares do prelúdio (RF24, RawWifi, Vector, RegisterSensor)
    - coleções de dispositivos com `axis_swap`

    Returns:
        str: Texto-fonte do documento base.
    """
    return """\
-- configuração de exemplo
frame.type = "multicopter"
frame.motors = {
    { pin = 4, speed = 0.5 },
    { pin = 17, speed = 0.5 },
    { pin = 18, speed = 0.5 },
    { pin = 27, speed = 0.5 },
}

battery.capacity = 2200
battery.voltage = "11.1"

stabilizer.loop_time = 2500
stabilizer.pid_roll = { p = 0.45, i = 0.01, d = 0.1 }
stabilizer.rate_limits = { 400, 400, 250 }
stabilizer.horizon_angles = Vector( 20.0, 20.0 )

controller.link = RF24 {
    channel = 100,
    device = "/dev/spidev0.0",
}
camera.link = RawWifi { channel = 11 }

accelerometers["MPU6050"] = {
    axis_swap = { x = -2, y = 1, z = 3 },
}
gyroscopes["MPU6050"] = {
    axis_swap = { x = 1, y = -2, z = 3 },
}
magnetometers["HMC5883L"] = {
    axis_swap = { x = 2, y = 1 },
}

RegisterSensor( "cpu_temp", Voltmeter { device = "ADS1015", channel = 2 } )
"""


@pytest.fixture
def flight_settings_text() -> str:
    """Arquivo de settings no formato `chave = literal`."""
    return """\
stabilizer.loop_time = 3000
stabilizer.pid_roll.p = 0.5
camera.link.channel = 13
hud.enabled = true
"""
