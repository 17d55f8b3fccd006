"""One-shot s-expression dump of the syntax tree, for inspection by other tools.

    let x = 1 + 2;   =>   (Program (Let "x" (BinaryOp Add (Term (Literal U32 1))
                                                          (Term (Literal U32 2)))))

Heads are named after the node classes and enum variants. The format is not
versioned.
"""
import sexpdata
from sexpdata import Symbol

from nodes import (
    Alias,
    ArithmeticOperator,
    BinaryOp,
    Exit,
    Let,
    Literal,
    LiteralKind,
    Program,
    SystemCall,
    Term,
)


def to_sexp(node):
    match node:
        case Program(statements):
            return [Symbol("Program"), *(to_sexp(s) for s in statements)]
        case Let(name, exp):
            return [Symbol("Let"), name, to_sexp(exp)]
        case SystemCall(syscall):
            return [Symbol("SystemCall"), to_sexp(syscall)]
        case Exit(exp):
            return [Symbol("Exit"), to_sexp(exp)]
        case BinaryOp(operator, left, right):
            return [Symbol("BinaryOp"), Symbol(operator.name.capitalize()), to_sexp(left), to_sexp(right)]
        case Term(term):
            return [Symbol("Term"), to_sexp(term)]
        case Alias(name):
            return [Symbol("Alias"), name]
        case Literal(kind, value):
            return [Symbol("Literal"), Symbol(kind.value), value]
        case _:
            raise ValueError(f"not an AST node: {node!r}")


def from_sexp(sexp):
    match sexp:
        case [Symbol() as head, *args]:
            return _build(str(head), args)
        case _:
            raise ValueError(f"not an AST s-expression: {sexp!r}")


def _build(head, args):
    match head, args:
        case "Program", statements:
            return Program([from_sexp(s) for s in statements])
        case "Let", [name, exp]:
            return Let(str(name), from_sexp(exp))
        case "SystemCall", [syscall]:
            return SystemCall(from_sexp(syscall))
        case "Exit", [exp]:
            return Exit(from_sexp(exp))
        case "BinaryOp", [operator, left, right]:
            return BinaryOp(ArithmeticOperator[str(operator).upper()], from_sexp(left), from_sexp(right))
        case "Term", [term]:
            return Term(from_sexp(term))
        case "Alias", [name]:
            return Alias(str(name))
        case "Literal", [kind, value]:
            return Literal(LiteralKind(str(kind)), value)
        case _:
            raise ValueError(f"malformed {head} node: {args!r}")


def dumps(node):
    return sexpdata.dumps(to_sexp(node))


def dump(node, stream):
    stream.write(dumps(node))
    stream.write("\n")


def loads(text):
    return from_sexp(sexpdata.loads(text))
