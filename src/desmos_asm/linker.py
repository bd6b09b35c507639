# src/desmos_asm/linker.py
from __future__ import annotations
from typing import Dict, Iterator, Optional, Tuple

from .diagnostics import DuplicateLabelError, UndefinedLabelError

class LabelTable:
    """Tabla etiqueta -> línea (base 1) de su declaración.

    Se llena durante la primera pasada; `resolve` sólo debe usarse cuando
    esa pasada terminó, así los saltos hacia adelante encuentran su destino.
    """

    def __init__(self, *, filename: Optional[str] = None) -> None:
        self._lines: Dict[str, int] = {}
        self.filename = filename

    def define(self, name: str, line: int) -> None:
        if name in self._lines:
            raise DuplicateLabelError(name, self._lines[name], line=line, file=self.filename)
        self._lines[name] = line

    def resolve(self, name: str, *, line: int | None = None, mnemonic: str | None = None) -> int:
        """Línea de la etiqueta; `line` y `mnemonic` son los del salto, sólo para el mensaje."""
        try:
            return self._lines[name]
        except KeyError:
            raise UndefinedLabelError(name, mnemonic=mnemonic, line=line, file=self.filename) from None

    def __contains__(self, name: object) -> bool:
        return name in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self._lines.items())

    def as_dict(self) -> Dict[str, int]:
        return dict(self._lines)
