from __future__ import annotations
import json
from typing import Iterable, List
from .ast import Expression

def to_latex_lines(exprs: Iterable[Expression]) -> List[str]:
    return [e.text for e in exprs]

def to_text(exprs: Iterable[Expression]) -> str:
    return "\n".join(to_latex_lines(exprs))

def to_json(exprs: Iterable[Expression]) -> str:
    """Formato de exportación {'exprs': [...]} con la forma de estado de Desmos."""
    return json.dumps({"exprs": [e.to_dict() for e in exprs]})

def write_text(exprs: Iterable[Expression], path: str) -> None:
    lines = to_latex_lines(exprs)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

def write_json(exprs: Iterable[Expression], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_json(exprs))
