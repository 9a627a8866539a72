from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    VARIABLE = "variable"
    METHOD = "method"


class VerificationError(Exception):
    """Base exception for every S-Java verification failure.

    Attributes:
        reason (str): Human-readable description, without the line prefix.
        line_number (int | None): Source line the failure was found on.
    """

    kind = ErrorKind.METHOD

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        if line_number:
            super().__init__(f"Line {line_number}: {reason}")
        else:
            super().__init__(reason)


class VariableError(VerificationError):
    """Illegal variable declaration, assignment or variable use."""

    kind = ErrorKind.VARIABLE


class MethodError(VerificationError):
    """Illegal method declaration, method call, block structure or condition."""

    kind = ErrorKind.METHOD


class LineSyntaxError(MethodError):
    """A line whose shape matches no S-Java statement."""

    pass


@dataclass
class Variable:
    var_type: str
    is_final: bool = False
    initialized: bool = False

    def to_markdown(self, name: str) -> str:
        return f"| {name} | {self.var_type} | {self.is_final} | {self.initialized} |"

    def __str__(self) -> str:
        prefix = "final " if self.is_final else ""
        state = "initialized" if self.initialized else "uninitialized"
        return f"{prefix}{self.var_type} ({state})"


@dataclass(frozen=True)
class Parameter:
    var_type: str
    name: str
    is_final: bool = False

    def __str__(self) -> str:
        prefix = "final " if self.is_final else ""
        return f"{prefix}{self.var_type} {self.name}"


@dataclass(frozen=True)
class MethodSignature:
    name: str
    parameters: tuple[Parameter, ...] = field(default_factory=tuple)
    line_number: int = 0

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"void {self.name}({params})"


# name -> descriptor, for globals and for every local frame
VariableTable = dict[str, Variable]
MethodTable = dict[str, MethodSignature]


def table_to_markdown(globals_table: VariableTable, methods: MethodTable) -> str:
    result = "| Name | Type | Final | Initialized |\n"
    result += "|------|------|-------|-------------|\n"
    for name, var in globals_table.items():
        result += var.to_markdown(name) + "\n"
    result += "\n| Method | Line |\n|--------|------|\n"
    for signature in methods.values():
        result += f"| {signature} | {signature.line_number} |\n"
    return result
