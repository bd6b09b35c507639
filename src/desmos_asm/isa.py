'''
tabla formal del repertorio (mnemónicos, aridad, familia)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

class Mnemonic(Enum):
    MOV = "mov"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    JE = "je"
    JNE = "jne"
    JMP = "jmp"
    LIT = "lit"

@dataclass(frozen=True)
class ISpec:
    """Especificación de una instrucción.

    - itype: 'ASSIGN' (destino, fuente), 'BRANCH' (a, b, etiqueta),
      'JUMP' (etiqueta) o 'LIT' (texto libre)
    - arity: número exacto de argumentos; None si no se comprueba
    - emits_action: si la instrucción acuña un identificador de acción
    """
    itype: str
    arity: Optional[int]
    emits_action: bool = True

SPEC: Dict[Mnemonic, ISpec] = {}

def _add(m: Mnemonic, spec: ISpec):
    SPEC[m] = spec

# Asignaciones: destino <- f(destino, fuente)
for _m in (Mnemonic.MOV, Mnemonic.ADD, Mnemonic.SUB, Mnemonic.MUL, Mnemonic.DIV,
           Mnemonic.SIN, Mnemonic.COS, Mnemonic.TAN):
    _add(_m, ISpec("ASSIGN", 2))

# Saltos
_add(Mnemonic.JE,  ISpec("BRANCH", 3))
_add(Mnemonic.JNE, ISpec("BRANCH", 3))
_add(Mnemonic.JMP, ISpec("JUMP", 1))

# Literal: aridad libre, sin acción
_add(Mnemonic.LIT, ISpec("LIT", None, emits_action=False))

def mnemonic(name: str) -> Mnemonic:
    """Devuelve el Mnemonic correspondiente al texto (sensible a mayúsculas)."""
    try:
        return Mnemonic(name)
    except ValueError:
        raise KeyError(f"Instrucción desconocida: {name}") from None

def spec(m: Mnemonic | str) -> ISpec:
    """Devuelve la especificación de una instrucción por mnemónico."""
    if isinstance(m, str):
        m = mnemonic(m)
    return SPEC[m]
