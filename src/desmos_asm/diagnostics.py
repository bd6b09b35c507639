'''
clase Diagnostic, helpers (línea, severidad) y jerarquía de excepciones del ensamblador
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores y advertencias, con ubicación opcional (archivo y línea)
    y un mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, hint, file)

def warning(message: str, *, line: int | None = None,
            file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, line, hint, file)

# ---- Excepciones ----

class AssemblyError(Exception):
    """Error fatal del ensamblador; lleva el Diagnostic que lo describe."""

    def __init__(self, message: str, *, line: int | None = None,
                 file: str | None = None, hint: str | None = None) -> None:
        self.diagnostic = error(message, line=line, file=file, hint=hint)
        super().__init__(str(self.diagnostic))

    @property
    def line(self) -> Optional[int]:
        return self.diagnostic.line

    @property
    def message(self) -> str:
        return self.diagnostic.message

class MalformedLineError(AssemblyError):
    """Línea con forma no reconocible."""

class UnknownCommandError(AssemblyError):
    """Mnemónico que no pertenece al repertorio."""

    def __init__(self, mnemonic: str, *, line: int | None = None, file: str | None = None) -> None:
        self.mnemonic = mnemonic
        super().__init__(f"Invalid command {mnemonic} ({line})", line=line, file=file)

class ArityMismatchError(AssemblyError):
    """Número de argumentos distinto del que exige el mnemónico."""

    def __init__(self, mnemonic: str, expected: int, got: int, *,
                 line: int | None = None, file: str | None = None) -> None:
        self.mnemonic = mnemonic
        self.expected = expected
        self.got = got
        super().__init__(
            f"Invalid arguments for command {mnemonic}. Expected {expected} arguments, got {got}",
            line=line, file=file,
        )

class UndefinedLabelError(AssemblyError):
    """Salto a una etiqueta que no se declaró en ninguna línea."""

    def __init__(self, label: str, *, mnemonic: str | None = None,
                 line: int | None = None, file: str | None = None) -> None:
        self.label = label
        self.mnemonic = mnemonic
        msg = f"Undefined label: {label}"
        if mnemonic is not None:
            msg += f" in command {mnemonic} ({line})"
        super().__init__(msg, line=line, file=file,
                         hint="declare it as '<name>:' on its own line")

class DuplicateLabelError(AssemblyError):
    """Etiqueta declarada más de una vez."""

    def __init__(self, label: str, first_line: int, *, line: int | None = None,
                 file: str | None = None) -> None:
        self.label = label
        self.first_line = first_line
        super().__init__(f"Label redefined: {label} (first declared at line {first_line})",
                         line=line, file=file)

class CodegenError(AssemblyError):
    """Fallo al generar una instrucción concreta; la causa va en __cause__."""

    def __init__(self, mnemonic: str, *, line: int | None = None, file: str | None = None) -> None:
        self.mnemonic = mnemonic
        super().__init__(f"Error while transforming command {mnemonic} ({line})",
                         line=line, file=file)

class PreludeError(AssemblyError):
    """No se pudo leer o interpretar el preludio (.dsm)."""
