# src/flight_config/core/config/store.py
"""
Fachada canônica de configuração do Flight Config.

Este módulo define o `Config`, responsável por carregar o documento base,
sobrepor o documento de settings, expor leituras tipadas por path e
manter o overlay de settings sincronizado com mutações em runtime.

Fluxo de (re)carga:
    1. Reset do namespace global (prelúdio reinstalado, nova geração)
    2. Avaliação do arquivo base (script ou YAML/JSON, pela extensão)
    3. Avaliação do arquivo de settings sobre o mesmo namespace
    4. Releitura do arquivo de settings como linhas `chave = valor`
    5. Reporte de cada entrada de `user_sensors` ao registrador

Dois armazenamentos cooperam:
    - `Document`: árvore completa, lida pelos acessores
    - `SettingsOverlay`: log plano das chaves tocadas, persistido por `save()`

Contrato de sincronização:
    - Setters escrevem nos dois, de forma atômica
    - A carga popula os dois de forma independente; eles podem divergir
      (ex.: edições diretas via `execute` não entram no overlay)

Política de erros:
    - Falha de avaliação → diagnóstico `error` com arquivo e linha; os
      bindings anteriores permanecem e a carga segue para o passo seguinte
    - Arquivo ausente/ilegível → diagnóstico `warning`, nenhuma mudança
    - Falha de escrita → diagnóstico `error`, estado em memória preservado
    - Path não encontrado → `default` do chamador, sem diagnóstico de erro

Limites explícitos:
    - Não é thread-safe: chamadas concorrentes devem ser serializadas
    - Não constrói dispositivos
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..devices.calibration import apply_calibration
from ..devices.registry import DeviceLookup, UserSensorRegistrar
from ..diagnostics import Diagnostics
from ..document.document import Document, render_value
from ..document.prelude import DEFAULT_BOARD
from ..document.script import evaluate_script, to_literal
from ..document.table import Table, wrap_integer
from ..errors import EvaluationError
from ..path.resolver import PathLike, Resolution, locate
from . import accessors
from .settings import SettingsOverlay

DEFAULT_ELIDE = ("lens_shading",)


class Config:
    """Store hierárquico: documento base + overlay de settings."""

    def __init__(
        self,
        filename: Union[str, Path],
        settings_filename: Union[str, Path, None] = "",
        *,
        board: str = DEFAULT_BOARD,
        devices: Optional[DeviceLookup] = None,
        sensor_registrar: Optional[UserSensorRegistrar] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.filename = Path(filename)
        self.settings_filename = Path(settings_filename) if settings_filename else None
        self.devices = devices
        if sensor_registrar is None and isinstance(devices, UserSensorRegistrar):
            sensor_registrar = devices
        self.sensor_registrar = sensor_registrar
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        self.document = Document(board=board)
        self._overlay = SettingsOverlay()

        self.reload()

    # -----------------------------
    # Carga
    # -----------------------------
    def reload(self) -> None:
        """
        Recarrega base e settings do zero.

        Valores definidos por setters e ainda não salvos são descartados.
        Toda `Resolution` obtida antes da recarga passa a ser obsoleta.
        Falhas viram diagnósticos; a recarga nunca levanta exceção.
        """
        self.document.reset()
        self._overlay.clear()

        self._evaluate_file(self.filename)

        if self.settings_filename is not None:
            self._evaluate_file(self.settings_filename, suffix=".lua")
            self._load_overlay(self.settings_filename)

        self._report_user_sensors()

    def _read_text(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            self.diagnostics.warning("cannot read file", file=str(path), error=e.strerror or str(e))
        except UnicodeDecodeError as e:
            self.diagnostics.warning("cannot decode file as UTF-8", file=str(path), error=str(e))
        return None

    def _evaluate_file(self, path: Path, *, suffix: Optional[str] = None) -> bool:
        text = self._read_text(path)
        if text is None:
            return False
        try:
            self.document.evaluate(text, source=str(path), suffix=suffix)
        except EvaluationError as e:
            self.diagnostics.error(
                "error while evaluating file",
                file=e.source,
                line=e.line,
                reason=e.reason,
            )
            return False
        return True

    def _load_overlay(self, path: Path) -> None:
        try:
            malformed = self._overlay.load(path)
        except (OSError, UnicodeDecodeError):
            # já reportado na avaliação do mesmo arquivo
            return
        for bad in malformed:
            self.diagnostics.warning(
                "skipping malformed settings line",
                file=str(path),
                line=bad.line,
                content=bad.content,
            )
        for key, value in self._overlay.items():
            self.diagnostics.debug("setting loaded", key=key, value=value)

    def _report_user_sensors(self) -> None:
        sensors = self.document.get_global("user_sensors")
        if self.sensor_registrar is None or not isinstance(sensors, Table):
            return
        for key in sensors.keys():
            name = str(key)
            self.sensor_registrar.register_user_sensor(name, f"user_sensors.{name}")

    # -----------------------------
    # Leitura
    # -----------------------------
    def locate(self, path: PathLike) -> Resolution:
        """Resolução crua de `path` (ver `core.path.resolver.locate`)."""
        return locate(self.document, path)

    def _trace(self, accessor: str, path: PathLike, value: Any) -> Any:
        self.diagnostics.debug(f"{accessor}('{path}') -> {value!r}")
        return value

    def get_string(self, path: PathLike, default: str = "") -> str:
        """
        Lê uma string.

        Args:
            path: Path no documento (ex.: `"camera.link.device"`).
            default: Devolvido quando o path não existe ou não é string.

        Returns:
            str: O valor encontrado ou `default`.
        """
        return self._trace("get_string", path, accessors.get_string(self.document, path, default))

    def get_integer(self, path: PathLike, default: int = 0) -> int:
        """
        Lê um inteiro (números truncados, strings numéricas aceitas).

        Args:
            path: Path no documento (ex.: `"frame.motors[2].pin"`).
            default: Devolvido quando o path não existe ou não converte.

        Returns:
            int: O valor convertido ou `default`.
        """
        return self._trace("get_integer", path, accessors.get_integer(self.document, path, default))

    def get_number(self, path: PathLike, default: float = 0.0) -> float:
        """
        Lê um número como `float`.

        Args:
            path: Path no documento.
            default: Devolvido quando o path não existe ou não converte.

        Returns:
            float: O valor convertido ou `default`.
        """
        return self._trace("get_number", path, accessors.get_number(self.document, path, default))

    def get_boolean(self, path: PathLike, default: bool = False) -> bool:
        """
        Lê a veracidade do valor (tudo exceto nil e false é verdadeiro).

        Returns:
            bool: A veracidade do valor, ou `default` se o path não existe.
        """
        return self._trace("get_boolean", path, accessors.get_boolean(self.document, path, default))

    def integer_array(self, path: PathLike) -> List[int]:
        """Parte array do valor em `path` como inteiros (`[]` se ausente)."""
        return self._trace("integer_array", path, accessors.integer_array(self.document, path))

    def array_length(self, path: PathLike) -> int:
        """-1 se ausente, 0 se escalar, senão o tamanho (ver `accessors.array_length`)."""
        return accessors.array_length(self.document, path)

    @property
    def settings(self) -> Dict[str, str]:
        """Cópia do overlay de settings (nome → valor codificado)."""
        return self._overlay.as_dict()

    # -----------------------------
    # Escrita
    # -----------------------------
    def _set(self, name: str, value: Any) -> bool:
        if not name or name != name.strip() or "=" in name or "\n" in name:
            raise ValueError(f"invalid setting name: {name!r}")

        encoded = to_literal(value)
        try:
            evaluate_script(f"{name} = {encoded}", self.document.globals, source=f"<setting {name}>")
        except EvaluationError as e:
            self.diagnostics.error("cannot apply setting", key=name, value=encoded, reason=e.reason)
            return False

        self._overlay.set(name, encoded)
        return True

    def set_boolean(self, name: str, value: bool) -> bool:
        """
        Define um booleano no documento e no overlay, de forma atômica.

        Args:
            name: Path de atribuição (ex.: `"hud.enabled"`).
            value: Novo valor.

        Returns:
            bool: `True` se aplicado; `False` se a atribuição falhou (nenhum
            dos dois armazenamentos é alterado e um erro é registrado).

        Raises:
            ValueError: Se `name` não puder ser persistido no arquivo de
                settings (vazio, com espaços nas bordas, `=` ou quebra de linha).
        """
        return self._set(name, bool(value))

    def set_integer(self, name: str, value: int) -> bool:
        """Como `set_boolean`, para inteiros (reduzidos a 64 bits)."""
        return self._set(name, wrap_integer(int(value)))

    def set_number(self, name: str, value: float) -> bool:
        """Como `set_boolean`, para números."""
        return self._set(name, float(value))

    def set_string(self, name: str, value: str) -> bool:
        """Como `set_boolean`, para strings (persistidas como literal escapado)."""
        return self._set(name, str(value))

    def execute(self, code: str) -> bool:
        """Avalia statements avulsos sobre o documento (não toca o overlay)."""
        try:
            evaluate_script(code, self.document.globals, source="<execute>")
        except EvaluationError as e:
            self.diagnostics.error("error while executing code", line=e.line, reason=e.reason)
            return False
        return True

    def save(self) -> bool:
        """
        Grava o overlay no arquivo de settings, substituindo o conteúdo.

        Returns:
            bool: `False` sem arquivo de settings configurado ou em falha de
            escrita; o estado em memória é preservado.
        """
        if self.settings_filename is None:
            self.diagnostics.warning("no settings file configured, nothing saved")
            return False
        for key, value in self._overlay.items():
            self.diagnostics.debug("saving setting", key=key, value=value)
        try:
            self._overlay.save(self.settings_filename)
        except (OSError, UnicodeEncodeError) as e:
            self.diagnostics.error(
                "cannot write settings file",
                file=str(self.settings_filename),
                error=getattr(e, "strerror", None) or str(e),
            )
            return False
        return True

    # -----------------------------
    # Dispositivos
    # -----------------------------
    def apply(self, devices: Optional[DeviceLookup] = None) -> int:
        """
        Aplica as tuplas `axis_swap` do documento aos dispositivos registrados.

        Args:
            devices: Registry a usar; quando omitido, o recebido no construtor.

        Returns:
            int: Quantidade de dispositivos configurados.
        """
        registry = devices if devices is not None else self.devices
        if registry is None:
            self.diagnostics.warning("no device registry available, calibration skipped")
            return 0
        return apply_calibration(self.document, registry)

    # -----------------------------
    # Fonte e debug
    # -----------------------------
    def read_source(self) -> str:
        text = self._read_text(self.filename)
        return "" if text is None else text

    def write_source(self, content: str) -> bool:
        try:
            self.filename.write_text(content, encoding="utf-8")
        except (OSError, UnicodeEncodeError) as e:
            self.diagnostics.error(
                "cannot write file",
                file=str(self.filename),
                error=getattr(e, "strerror", None) or str(e),
            )
            return False
        return True

    def dump(self, path: str, *, elide: Iterable[str] = DEFAULT_ELIDE) -> str:
        resolved = self.locate(path)
        text = render_value(resolved.value, path, elide=elide)
        self.diagnostics.debug(text)
        return text
