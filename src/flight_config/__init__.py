# src/flight_config/__init__.py
"""
Flight Config: store hierárquico de configuração para controle de voo.

Este pacote raiz define o namespace público do Flight Config: um
documento declarativo base (topologia de hardware, links, sensores,
frame, estabilizador) sobreposto por um documento de settings mutável,
persistido entre reinícios sem tocar o documento base.

Arquitetura em alto nível:
    - core.document → valores (`Table`), namespace global e avaliadores
    - core.path     → gramática de paths e resolver funcional
    - core.config   → acessores tipados, overlay de settings e fachada `Config`
    - core.devices  → registry de dispositivos e aplicação de calibração

Limites explícitos:
    - Não constrói dispositivos nem implementa calibração matemática
    - Não é uma linguagem de consulta genérica
    - Não valida schema
"""

from .core.config.store import Config
from .core.devices.registry import DeviceKind, DeviceRegistry
from .core.diagnostics import Diagnostics
from .core.errors import ConfigError, EvaluationError

__all__ = [
    "Config",
    "ConfigError",
    "DeviceKind",
    "DeviceRegistry",
    "Diagnostics",
    "EvaluationError",
]
