# src/desmos_asm/parser.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .lexer import strip_comment, tokenize, split_label, split_mnemonic_args
from .ast import Instruction
from .isa import mnemonic as lookup_mnemonic
from .regs import RegisterSet, is_reg, normalize_reg
from .linker import LabelTable
from .diagnostics import (
    Diagnostic,
    MalformedLineError,
    UnknownCommandError,
    warning,
)

@dataclass
class ParseResult:
    instructions: List[Instruction]
    labels: LabelTable
    registers: RegisterSet
    diagnostics: List[Diagnostic] = field(default_factory=list)

def parse(text: str, *, filename: Optional[str] = None) -> ParseResult:
    """
    Primera pasada: recorre todas las líneas físicas y devuelve ParseResult con
      - instructions: instrucciones en orden de fuente (sin etiquetas)
      - labels: etiqueta -> línea de declaración
      - registers: registros referenciados, en orden de primera aparición

    Reglas:
      - Comentarios: ';' hasta fin de línea.
      - Líneas vacías se saltan pero cuentan para la numeración.
      - Etiquetas: primer token terminado en ':' (el resto de la línea se ignora).
      - Instrucciones: mnemónico + argumentos separados por espacios.

    Los errores (línea mal formada, mnemónico desconocido, etiqueta repetida)
    se lanzan como excepción; las advertencias quedan en `diagnostics`.
    """
    instructions: List[Instruction] = []
    labels = LabelTable(filename=filename)
    registers = RegisterSet()
    diags: List[Diagnostic] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        core = strip_comment(raw)
        if not core:
            continue

        tokens = tokenize(core)
        if not tokens:
            raise MalformedLineError(f"Invalid command at line {lineno}", line=lineno, file=filename)

        # 'label:'
        label, rest = split_label(tokens)
        if label is not None:
            if not label:
                raise MalformedLineError(f"Empty label name at line {lineno}", line=lineno, file=filename)
            labels.define(label, lineno)
            if rest:
                diags.append(warning(f"Text after label '{label}' ignored: {' '.join(rest)}",
                                     line=lineno, file=filename,
                                     hint="put the instruction on its own line"))
            continue

        name, args = split_mnemonic_args(tokens)
        try:
            m = lookup_mnemonic(name)
        except KeyError:
            raise UnknownCommandError(tokens[0], line=lineno, file=filename) from None

        for arg in args:
            if is_reg(arg):
                registers.add(normalize_reg(arg))

        instructions.append(Instruction(mnemonic=m, args=tuple(args), line=lineno))

    return ParseResult(instructions=instructions, labels=labels, registers=registers, diagnostics=diags)
