import io
import sys

from nodes import Alias, BinaryOp, Exit, Let, Literal, Program, SystemCall, Term

INDENT = 2


def format_exp(exp):
    match exp:
        case BinaryOp(operator, left, right):
            return f"({format_exp(left)} {operator.value} {format_exp(right)})"
        case Term(Alias(name)):
            return name
        case Term(Literal(_, value)):
            return str(value)
        case _:
            raise NotImplementedError(exp)


def format_statement(statement):
    match statement:
        case Let(name, exp):
            return f"STATEMENT LET {name} ASSIGN {format_exp(exp)};"
        case SystemCall(Exit(exp)):
            return f"STATEMENT SYSCALL EXIT {format_exp(exp)}"
        case _:
            raise NotImplementedError(statement)


def pretty_print(program, stream=None):
    stream = sys.stdout if stream is None else stream
    match program:
        case Program(statements):
            stream.write("PROGRAM\n")
            for statement in statements:
                stream.write(f"{'':{INDENT}}{format_statement(statement)}\n")
        case _:
            raise NotImplementedError(program)


def format_program(program):
    stream = io.StringIO()
    pretty_print(program, stream)
    return stream.getvalue()
