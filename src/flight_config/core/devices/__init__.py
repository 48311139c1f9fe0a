# src/flight_config/core/devices/__init__.py
"""
Colaboradores de dispositivos do Flight Config.

    - registry    → protocolos e `DeviceRegistry` em memória
    - calibration → aplicação de `axis_swap` a dispositivos registrados
"""
