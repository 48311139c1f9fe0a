# src/flight_config/core/config/settings.py
"""
Overlay de settings: log plano e persistido de valores ajustados em runtime.

O overlay é um mapa ordenado `nome → valor codificado` que registra apenas
as chaves explicitamente tocadas (lidas do arquivo de settings ou escritas
por um setter desde a última carga). Ele não espelha o documento inteiro.

Formato em disco (uma entrada por linha, sem escape nem comentários):

    trim(chave) + " = " + trim(valor) + "\\n"

Os valores são literais da linguagem de script (`true`, `42`, `0.5`,
`"texto"`), de modo que o mesmo arquivo possa ser avaliado como documento.

Política de leitura:
    - linhas em branco são ignoradas
    - a linha é dividida no primeiro `=`; chave e valor são aparados
    - linha sem `=` ou com chave vazia é malformada e ignorada
    - chave repetida: a última ocorrência vence, mantendo a posição original

Invariantes:
    - `save` seguido de leitura reproduz o mesmo mapa
    - A ordem de inserção é preservada na escrita

Limites explícitos:
    - Não avalia o arquivo como documento (responsabilidade da fachada)
    - Erros de I/O são propagados como `OSError`
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

_WHITESPACE = " \t\n\r\f\v"


@dataclass(frozen=True)
class MalformedLine:
    line: int
    content: str


def parse_settings_text(text: str) -> Tuple[List[Tuple[str, str]], List[MalformedLine]]:
    """Divide o texto em pares `(chave, valor)` e linhas malformadas."""
    entries: List[Tuple[str, str]] = []
    malformed: List[MalformedLine] = []

    for number, raw in enumerate(text.split("\n"), start=1):
        if not raw.strip(_WHITESPACE):
            continue
        key, sep, value = raw.partition("=")
        key = key.strip(_WHITESPACE)
        if not sep or not key:
            malformed.append(MalformedLine(number, raw.rstrip("\r")))
            continue
        entries.append((key, value.strip(_WHITESPACE)))

    return entries, malformed


class SettingsOverlay:
    """Mapa ordenado de settings persistidos."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = {}
        if entries:
            for key, value in entries.items():
                self.set(key, value)

    def set(self, name: str, encoded: str) -> None:
        self._entries[name] = encoded

    def get(self, name: str) -> Optional[str]:
        return self._entries.get(name)

    def clear(self) -> None:
        self._entries.clear()

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._entries.items())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    # -----------------------------
    # Texto e arquivo
    # -----------------------------
    def load_text(self, text: str) -> List[MalformedLine]:
        entries, malformed = parse_settings_text(text)
        for key, value in entries:
            self.set(key, value)
        return malformed

    def serialize(self) -> str:
        return "".join(f"{key} = {value}\n" for key, value in self._entries.items())

    def load(self, path: Union[str, Path]) -> List[MalformedLine]:
        text = Path(path).read_text(encoding="utf-8")
        return self.load_text(text)

    def save(self, path: Union[str, Path]) -> None:
        Path(path).write_text(self.serialize(), encoding="utf-8")
