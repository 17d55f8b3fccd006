import datetime
import io

from errors import (
    AlreadyDeclared,
    StackOverflow,
    StackUnderflow,
    UndeclaredAlias,
    UnimplementedLiteral,
    UnimplementedOperator,
)
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
    number,
)

WORD_SIZE = 8
MAX_STACK_DEPTH = 100

# Linux x86-64 syscall number for exit(2)
SYS_EXIT = 60

STACK_PTR = "rsp"
ACCUMULATOR = "rax"
SCRATCH = "rbx"
FIRST_ARG = "rdi"

ENTRY_POINT = "_start"

DEFAULT_EXIT = SystemCall(Exit(number(0)))


def indirect(reg, offset):
    if offset >= 0:
        return f"[{reg}+{offset}]"
    else:
        return f"[{reg}{offset}]"


class Var:
    def __init__(self, stack_location):
        self.stack_location = stack_location

    def __repr__(self):
        return f"Var(stack_location={self.stack_location})"


class Compiler:
    """Lowers a Program to NASM text using the machine stack as a value stack.

    Every expression leaves exactly one word on top of the stack. `depth`
    counts words pushed and not yet popped, so a variable declared at slot
    s sits at [rsp + (depth - s - 1) * WORD_SIZE].
    """

    def __init__(self, stream, max_stack_depth=MAX_STACK_DEPTH, append_default_exit=True):
        self.stream = stream
        self.max_stack_depth = max_stack_depth
        self.append_default_exit = append_default_exit
        self.vars = {}
        self.depth = 0
        self.peak_depth = 0
        self.pushes = 0
        self.pops = 0

    def emit(self, line=""):
        self.stream.write(line)
        self.stream.write("\n")

    def push(self, operand):
        if self.depth + 1 > self.max_stack_depth:
            raise StackOverflow(self.max_stack_depth)
        self.depth += 1
        self.pushes += 1
        self.peak_depth = max(self.peak_depth, self.depth)
        self.emit(f"push {operand}")

    def pop(self, reg):
        if self.depth == 0:
            raise StackUnderflow()
        self.depth -= 1
        self.pops += 1
        self.emit(f"pop {reg}")

    def mov(self, dst, src):
        self.emit(f"mov {dst}, {src}")

    def add(self, dst, src):
        self.emit(f"add {dst}, {src}")

    def syscall(self):
        self.emit("syscall")

    def stack_offset(self, var):
        return (self.depth - var.stack_location - 1) * WORD_SIZE

    def visit_literal(self, literal):
        match literal:
            case Literal(LiteralKind.U32, value):
                self.mov(ACCUMULATOR, value)
                self.push(ACCUMULATOR)
            case _:
                raise UnimplementedLiteral(literal)

    def visit_exp(self, exp):
        match exp:
            case Term(Literal() as literal):
                self.visit_literal(literal)
            case Term(Alias(name)):
                var = self.vars.get(name)
                if var is None:
                    raise UndeclaredAlias(name)
                self.push(f"qword {indirect(STACK_PTR, self.stack_offset(var))}")
            case BinaryOp(ArithmeticOperator.ADD, left, right):
                self.visit_exp(left)
                self.visit_exp(right)
                self.pop(ACCUMULATOR)
                self.pop(SCRATCH)
                self.add(ACCUMULATOR, SCRATCH)
                self.push(ACCUMULATOR)
            case BinaryOp(operator, _, _):
                raise UnimplementedOperator(operator)
            case _:
                raise NotImplementedError(exp)

    def visit_statement(self, statement):
        match statement:
            case Let(name, exp):
                if name in self.vars:
                    raise AlreadyDeclared(name, self.vars[name].stack_location)
                # The slot is the depth before the push: the value lands exactly
                # there. The alias is only visible once its value exists.
                slot = self.depth
                self.visit_exp(exp)
                self.vars[name] = Var(slot)
            case SystemCall(Exit(exp)):
                self.visit_exp(exp)
                self.pop(FIRST_ARG)
                self.mov(ACCUMULATOR, SYS_EXIT)
                self.syscall()
            case _:
                raise NotImplementedError(statement)
        self.emit()

    def header(self, timestamp):
        self.emit(f"; generated {timestamp:%H:%M:%S / %d %b %Y}")
        self.emit()

    def visit_program(self, program, timestamp=None):
        if timestamp is None:
            timestamp = datetime.datetime.now()
        match program:
            case Program(statements):
                self.header(timestamp)
                self.emit("section .text")
                self.emit(f"global {ENTRY_POINT}")
                self.emit(f"{ENTRY_POINT}:")
                for statement in statements:
                    self.visit_statement(statement)
                if self.append_default_exit:
                    self.visit_statement(DEFAULT_EXIT)
            case _:
                raise NotImplementedError(program)


def compile_program(program, timestamp=None, **options):
    """Return the assembly for `program`; nothing is returned if any stage fails."""
    c = Compiler(io.StringIO(), **options)
    c.visit_program(program, timestamp)
    return c.stream.getvalue()
