# src/desmos_asm/encoding.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from string import Template as _Fmt
from typing import Callable, Dict, Iterable, List, Optional

from .ast import Instruction, Expression, Reg, Lit, Operand
from .isa import Mnemonic, spec as isa_spec
from .linker import LabelTable
from .regs import is_reg, normalize_reg
from .diagnostics import AssemblyError, ArityMismatchError, CodegenError

LOG = logging.getLogger(__name__)

# ---------------- Plantillas de salida (LaTeX de Desmos) ----------------

class Template(Enum):
    INIT   = r"${reg} = 0"
    MOV    = r"${action} = ${dst} \to ${src}"
    ADD    = r"${action} = ${dst} \to ${dst} + ${src}"
    SUB    = r"${action} = ${dst} \to ${dst} - ${src}"
    MUL    = r"${action} = ${dst} \to ${dst} \cdot ${src}"
    DIV    = r"${action} = ${dst} \to \frac{${dst}}{${src}}"
    SIN    = r"${action} = ${dst} \to \sin\left(${src}\right)"
    COS    = r"${action} = ${dst} \to \cos\left(${src}\right)"
    TAN    = r"${action} = ${dst} \to \tan\left(${src}\right)"
    JE     = r"${action} = \left\{${a}=${b}:G_{oto}\left(${target}\right)\right\}"
    JNE    = r"${action} = \left\{${a}\neq ${b}:G_{oto}\left(${target}\right)\right\}"
    JMP    = r"${action} = G_{oto}\left(${target}\right)"
    LIT    = r"${text}"
    ACTION = r"I_{nternalAction${n}}"
    BRANCH = r"T=${line}: ${action}"
    TABLE  = r"F_{a}=\left\{${branches}\right\},i_{ncrement}"

def render(template: Template, **slots: object) -> str:
    """Instancia una plantilla; falta de un hueco -> KeyError."""
    return _Fmt(template.value).substitute({k: str(v) for k, v in slots.items()})

# ---------------- Tabla de acciones ----------------

@dataclass(frozen=True)
class ActionEntry:
    action: str
    line: int

class ActionAllocator:
    """Acuña identificadores I_{nternalActionN} con N estrictamente creciente."""

    def __init__(self, start: int = 0) -> None:
        self._next = start
        self.entries: List[ActionEntry] = []

    def mint(self, line: int) -> str:
        name = render(Template.ACTION, n=self._next)
        self._next += 1
        self.entries.append(ActionEntry(name, line))
        return name

def build_action_table(entries: Iterable[ActionEntry]) -> Expression:
    """Expresión de despacho: una rama T=línea por acción, ordenadas por línea."""
    ordered = sorted(entries, key=lambda e: e.line)
    branches = ",".join(render(Template.BRANCH, line=e.line, action=e.action) for e in ordered)
    return Expression(render(Template.TABLE, branches=branches))

# ---------------- Operandos ----------------

def resolve_operand(token: str) -> Operand:
    if is_reg(token):
        return Reg(normalize_reg(token))
    return Lit(token)

def operand_text(op: Operand) -> str:
    return op.name if isinstance(op, Reg) else op.text

def _operands(args) -> List[str]:
    return [operand_text(resolve_operand(a)) for a in args]

# ---------------- Reglas por familia ----------------

# Cada regla devuelve los huecos de su plantilla salvo `action`.
Slots = Dict[str, object]

def _gen_assign(ins: Instruction, labels: LabelTable) -> Slots:
    dst, src = _operands(ins.args)
    return {"dst": dst, "src": src}

def _gen_branch(ins: Instruction, labels: LabelTable) -> Slots:
    a, b = _operands(ins.args[:2])
    target = labels.resolve(ins.args[2], line=ins.line, mnemonic=ins.mnemonic.value)
    return {"a": a, "b": b, "target": target}

def _gen_jump(ins: Instruction, labels: LabelTable) -> Slots:
    return {"target": labels.resolve(ins.args[0], line=ins.line, mnemonic=ins.mnemonic.value)}

def _gen_lit(ins: Instruction, labels: LabelTable) -> Slots:
    return {"text": " ".join(ins.args)}

_FAMILY: Dict[str, Callable[[Instruction, LabelTable], Slots]] = {
    "ASSIGN": _gen_assign,
    "BRANCH": _gen_branch,
    "JUMP": _gen_jump,
    "LIT": _gen_lit,
}

TEMPLATES: Dict[Mnemonic, Template] = {
    Mnemonic.MOV: Template.MOV,
    Mnemonic.ADD: Template.ADD,
    Mnemonic.SUB: Template.SUB,
    Mnemonic.MUL: Template.MUL,
    Mnemonic.DIV: Template.DIV,
    Mnemonic.SIN: Template.SIN,
    Mnemonic.COS: Template.COS,
    Mnemonic.TAN: Template.TAN,
    Mnemonic.JE: Template.JE,
    Mnemonic.JNE: Template.JNE,
    Mnemonic.JMP: Template.JMP,
    Mnemonic.LIT: Template.LIT,
}

def gen_instruction(ins: Instruction, labels: LabelTable, alloc: ActionAllocator, *,
                    filename: Optional[str] = None) -> Expression:
    """Genera la expresión de una instrucción, comprobando antes su aridad."""
    s = isa_spec(ins.mnemonic)
    if s.arity is not None and len(ins.args) != s.arity:
        raise ArityMismatchError(ins.mnemonic.value, s.arity, len(ins.args),
                                 line=ins.line, file=filename)
    slots = _FAMILY[s.itype](ins, labels)
    if s.emits_action:
        slots["action"] = alloc.mint(ins.line)
    return Expression(render(TEMPLATES[ins.mnemonic], **slots))

# ---------------- Pasada 2 ----------------

@dataclass(frozen=True)
class EncodeResult:
    expressions: List[Expression]
    actions: List[ActionEntry] = field(default_factory=list)

def encode(instructions: Iterable[Instruction], labels: LabelTable, *,
           filename: Optional[str] = None) -> EncodeResult:
    """Segunda pasada: una expresión por instrucción, en orden de fuente.

    Cualquier fallo aborta la pasada; los errores del ensamblador ya nombran
    mnemónico y línea y se propagan tal cual; el resto se registra y se
    envuelve en CodegenError.
    """
    alloc = ActionAllocator()
    out: List[Expression] = []
    for ins in instructions:
        try:
            out.append(gen_instruction(ins, labels, alloc, filename=filename))
        except AssemblyError as ex:
            # quien captura la excepción la informa
            LOG.debug("%s", ex)
            raise
        except Exception as ex:
            LOG.error("Error while transforming command %s (%d): %s", ins.mnemonic.value, ins.line, ex)
            raise CodegenError(ins.mnemonic.value, line=ins.line, file=filename) from ex
    return EncodeResult(expressions=out, actions=list(alloc.entries))
