from __future__ import annotations
import argparse, logging, sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .ast import Expression
from .parser import parse
from .encoding import Template, render, encode, build_action_table
from .prelude import load_prelude
from .diagnostics import AssemblyError, Diagnostic, PreludeError
from .writers import to_text, write_text, write_json

LOG = logging.getLogger(__name__)

@dataclass(frozen=True)
class AssembleResult:
    expressions: List[Expression]
    registers: List[str]
    labels: Dict[str, int]
    action_lines: Dict[str, int]
    diagnostics: List[Diagnostic]

def assemble_text(text: str, *, prelude: Optional[Sequence[Expression]] = None,
                  filename: str | None = None) -> AssembleResult:
    """Preludio + PASADA 1 (etiquetas, registros) + inicialización + PASADA 2 + tabla de acciones.

    Cualquier error del ensamblador se propaga sin devolver resultados parciales."""
    exprs: List[Expression] = list(prelude or [])

    parsed = parse(text, filename=filename)
    for d in parsed.diagnostics:
        LOG.warning("%s", d)

    exprs.extend(Expression(render(Template.INIT, reg=r)) for r in parsed.registers)

    enc = encode(parsed.instructions, parsed.labels, filename=filename)
    exprs.extend(enc.expressions)
    exprs.append(build_action_table(enc.actions))

    LOG.debug("%d instrucciones, %d acciones, %d registros",
              len(parsed.instructions), len(enc.actions), len(parsed.registers))
    return AssembleResult(
        expressions=exprs,
        registers=list(parsed.registers),
        labels=parsed.labels.as_dict(),
        action_lines={e.action: e.line for e in enc.actions},
        diagnostics=list(parsed.diagnostics),
    )

def _setup_logging(verbose: bool) -> None:
    root = logging.getLogger(__name__.rsplit(".", 1)[0])
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="desmos-asm", description="Desmos two-pass assembler")
    ap.add_argument("source", nargs="?", help="archivo .des de entrada")
    g = ap.add_mutually_exclusive_group()
    g.add_argument("--prelude", help="archivo .dsm con las expresiones iniciales (por defecto, el incluido)")
    g.add_argument("--no-prelude", action="store_true", help="no anteponer ningún preludio")
    ap.add_argument("-o", "--output", help="escribe las expresiones (una por línea) en este archivo")
    ap.add_argument("--json", help="exporta las expresiones en formato {\"exprs\": [...]}")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.source is None:
        print("Usage: desmos-asm <file>.des")
        return 0

    _setup_logging(args.verbose)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    try:
        prelude = [] if args.no_prelude else load_prelude(args.prelude)
    except PreludeError as ex:
        print(ex, file=sys.stderr)
        return 2

    try:
        res = assemble_text(text, prelude=prelude, filename=args.source)
    except AssemblyError as ex:
        print(ex, file=sys.stderr)
        return 1

    print(to_text(res.expressions))

    print("==== SYMBOL TABLE ====")
    print(res.registers)
    print("==== LABELS ====")
    print(res.labels)
    print("==== LINENO ====")
    print(res.action_lines)

    try:
        if args.output:
            write_text(res.expressions, args.output)
        if args.json:
            write_json(res.expressions, args.json)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
