'''
carga del preludio (.dsm): bloques separados por líneas vacías
'''

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Sequence

from .ast import Clickable, Expression
from .diagnostics import PreludeError

LOG = logging.getLogger(__name__)

CLICK_MARKER_LEN = 2
DEFAULT_PRELUDE = "magic"

def default_prelude_path(name: str = DEFAULT_PRELUDE) -> Path:
    """Ruta del preludio incluido en el paquete (desmap/<name>.dsm)."""
    return Path(__file__).resolve().parent / "desmap" / f"{name}.dsm"

def parse_block(block: Sequence[str]) -> Expression:
    """Primera línea: LaTeX. Segunda (opcional): marcador de 2 caracteres + LaTeX al hacer clic."""
    if not block:
        raise PreludeError("Empty prelude block")
    tex = block[0]
    if len(block) > 1:
        return Expression(tex, clickable=Clickable(True, block[1][CLICK_MARKER_LEN:]))
    return Expression(tex)

def parse_prelude(text: str) -> List[Expression]:
    blocks: List[List[str]] = []
    block: List[str] = []
    for line in text.splitlines():
        if line.strip() == "":
            if block:
                blocks.append(block)
            block = []
        else:
            block.append(line.rstrip())
    # no olvidar el último bloque
    if block:
        blocks.append(block)
    return [parse_block(b) for b in blocks]

def load_prelude(path: str | Path | None = None) -> List[Expression]:
    """Lee un .dsm del disco; sin ruta usa el preludio incluido."""
    p = Path(path) if path is not None else default_prelude_path()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as ex:
        raise PreludeError(f"Cannot read prelude {p}: {ex}", file=str(p)) from ex
    exprs = parse_prelude(text)
    LOG.debug("Prelude %s: %d expressions", p, len(exprs))
    return exprs
