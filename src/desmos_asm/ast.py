'''
dataclases de AST (Instruction, operandos) y de salida (Expression)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .isa import Mnemonic

# ---- Nodos a nivel de fuente ----

@dataclass(frozen=True)
class Instruction:
    """Instrucción con mnemónico ya resuelto y argumentos crudos."""
    mnemonic: 'Mnemonic'
    args: Tuple[str, ...]
    line: int

# ---- Operandos ----

@dataclass(frozen=True)
class Reg:
    """Registro canónico 'R_{name}'."""
    name: str

@dataclass(frozen=True)
class Lit:
    """Literal o nombre de etiqueta, tal cual aparece en el fuente."""
    text: str

Operand = Union[Reg, Lit]

# ---- Salida ----

@dataclass(frozen=True)
class Clickable:
    enabled: bool
    text: str

@dataclass(frozen=True)
class Expression:
    """Expresión LaTeX lista para Desmos, con metadatos de clic opcionales."""
    text: str
    clickable: Optional[Clickable] = None
    kind: str = "expression"

    def to_dict(self) -> Dict[str, Any]:
        """Forma del estado de Desmos: {'type', 'latex', 'clickableInfo'?}."""
        out: Dict[str, Any] = {"type": self.kind, "latex": self.text}
        if self.clickable is not None:
            out["clickableInfo"] = {
                "enabled": self.clickable.enabled,
                "latex": self.clickable.text,
            }
        return out
