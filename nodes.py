"""Syntax tree shared by the parser, the compiler and the printers.

Nodes are frozen dataclasses so they can be matched structurally:

    match statement:
        case Let(alias, expression): ...
        case SystemCall(Exit(expression)): ...
"""
import enum
from dataclasses import dataclass


class ArithmeticOperator(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class LiteralKind(enum.Enum):
    U32 = "U32"
    F64 = "F64"
    STRING = "String"
    BOOLEAN = "Boolean"


U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class Literal:
    kind: LiteralKind
    value: object

    @classmethod
    def u32(cls, value):
        if not 0 <= value <= U32_MAX:
            raise ValueError(f"{value} is out of range for U32")
        return cls(LiteralKind.U32, value)


@dataclass(frozen=True)
class Alias:
    name: str


@dataclass(frozen=True)
class Term:
    term: object  # Alias | Literal


@dataclass(frozen=True)
class BinaryOp:
    operator: ArithmeticOperator
    left: object
    right: object


@dataclass(frozen=True)
class Exit:
    expression: object


@dataclass(frozen=True)
class Let:
    alias: str
    expression: object


@dataclass(frozen=True)
class SystemCall:
    syscall: Exit


@dataclass(frozen=True)
class Program:
    statements: tuple

    def __post_init__(self):
        # Lists are accepted for convenience but the tree stays immutable.
        object.__setattr__(self, "statements", tuple(self.statements))


def number(value):
    return Term(Literal.u32(value))


def alias(name):
    return Term(Alias(name))
