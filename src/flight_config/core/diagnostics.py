# src/flight_config/core/diagnostics.py
"""
Registro estruturado de diagnósticos do Flight Config.

Este módulo define o `Diagnostics`, coletor de eventos emitidos pela
fachada `Config` durante carga, escrita e aplicação de configuração.

Cada evento é armazenado como dicionário estruturado (nível, mensagem,
timestamp UTC e campos extras) e espelhado no logger padrão
`flight_config`, permitindo:
    - inspeção programática em testes
    - integração com o logging da aplicação hospedeira

Decisões arquiteturais:
    - Falhas de I/O e de avaliação são diagnósticos, nunca exceções fatais
    - "Não encontrado" no resolver não gera diagnóstico de erro
    - Warnings e erros também são agrupados em `warnings`
    - `events` e `warnings` retêm no máximo `max_events` entradas (as mais
      recentes); o logger recebe todos

Limites explícitos:
    - Não configura handlers nem formatação do logging
    - Não persiste eventos
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List

LOGGER_NAME = "flight_config"
DEFAULT_MAX_EVENTS = 1000

_LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class Diagnostics:
    """Coletor de eventos estruturados, espelhado no logger `flight_config`."""

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(LOGGER_NAME), repr=False)
    max_events: int = DEFAULT_MAX_EVENTS
    events: Deque[Dict[str, Any]] = field(init=False)
    warnings: Deque[str] = field(init=False)

    def __post_init__(self) -> None:
        self.events = deque(maxlen=self.max_events)
        self.warnings = deque(maxlen=self.max_events)

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        if level not in _LEVELS:
            raise ValueError(f"unknown diagnostic level: {level}")

        event = {
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

        if level in ("warning", "error"):
            self.warnings.append(message)

        if extra:
            context = " ".join(f"{k}={v}" for k, v in extra.items())
            self.logger.log(_LEVELS[level], "%s | %s", message, context)
        else:
            self.logger.log(_LEVELS[level], "%s", message)

    def debug(self, message: str, **extra: Any) -> None:
        # lookups frequentes: evita acumular eventos quando o nível está desligado
        if self.logger.isEnabledFor(logging.DEBUG):
            self.log(level="debug", message=message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self.log(level="info", message=message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        self.log(level="warning", message=message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self.log(level="error", message=message, **extra)

    def by_level(self, level: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["level"] == level]
