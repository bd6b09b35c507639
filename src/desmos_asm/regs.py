'''
registros: sigilo '$', nombre canónico R_{...} y conjunto ordenado de registros
'''

from __future__ import annotations
from typing import Dict, Iterator

REG_SIGIL = "$"

def is_reg(token: str) -> bool:
    """Indica si el token es una referencia a registro ('$nombre')."""
    return token.startswith(REG_SIGIL)

def real_name(name: str) -> str:
    """Nombre canónico en Desmos para el registro 'name' (sin sigilo)."""
    return f"R_{{{name}}}"

def normalize_reg(token: str) -> str:
    """Devuelve el nombre canónico de '$nombre' o lanza ValueError."""
    if not is_reg(token):
        raise ValueError(f"Registro inválido: {token}")
    return real_name(token[len(REG_SIGIL):])

class RegisterSet:
    """Conjunto de registros que conserva el orden del primer registro."""

    def __init__(self) -> None:
        self._regs: Dict[str, None] = {}

    def add(self, reg: str) -> None:
        self._regs.setdefault(reg, None)

    def __contains__(self, reg: object) -> bool:
        return reg in self._regs

    def __iter__(self) -> Iterator[str]:
        return iter(self._regs)

    def __len__(self) -> int:
        return len(self._regs)

    def __repr__(self) -> str:
        return f"RegisterSet({list(self._regs)!r})"
