import enum

from errors import (
    MalformedNumber,
    NoStatementsFound,
    UnexpectedEndOfInput,
    UnexpectedStatement,
    UnexpectedToken,
    UnknownSyscall,
)
from lexer import Kind, Lexer
from nodes import (
    U32_MAX,
    Alias,
    ArithmeticOperator,
    BinaryOp,
    Exit,
    Let,
    Literal,
    Program,
    SystemCall,
    Term,
)


class SysCallName(enum.Enum):
    EXIT = "exit"


OPERATORS = {
    Kind.ADD: ArithmeticOperator.ADD,
    Kind.SUB: ArithmeticOperator.SUB,
    Kind.MUL: ArithmeticOperator.MUL,
    Kind.DIV: ArithmeticOperator.DIV,
}


class Parser:
    """Recursive descent over a Lexer, pulling one token at a time.

    program      := statement+
    statement    := let_stmt | syscall_stmt
    let_stmt     := "let" alias "=" expression
    syscall_stmt := "syscall" syscall_name expression
    expression   := term (operator expression)? ";"
    term         := number | alias

    There is no operator precedence: a + b * c is a + (b * c) and
    a - b + c is a - (b + c).
    """

    def __init__(self, lexer):
        self.lexer = lexer

    def expect_token(self, expected=None):
        token = self.lexer.next()
        if token is None:
            raise UnexpectedEndOfInput(expected, *self.lexer.position())
        if expected is not None and token.kind is not expected:
            raise UnexpectedToken(token, f"(expected {expected.name})")
        return token

    def program(self):
        statements = []
        while self.lexer.peek() is not None:
            statements.append(self.statement(self.lexer.next()))
        if not statements:
            raise NoStatementsFound()
        return Program(statements)

    def statement(self, token):
        match token.kind:
            case Kind.KEYWORD_LET:
                return self.assign()
            case Kind.SYSTEM_CALL:
                return self.syscall()
            case _:
                raise UnexpectedStatement(token)

    def assign(self):
        name = self.expect_token(Kind.ALIAS).text
        self.expect_token(Kind.ASSIGN)
        return Let(name, self.expression())

    def syscall(self):
        token = self.expect_token(Kind.ALIAS)
        try:
            name = SysCallName(token.text)
        except ValueError:
            raise UnknownSyscall(token) from None
        match name:
            case SysCallName.EXIT:
                return SystemCall(Exit(self.expression()))

    def term(self):
        token = self.expect_token()
        match token.kind:
            case Kind.NUMBER:
                value = int(token.text)
                if value > U32_MAX:
                    raise MalformedNumber(token)
                return Term(Literal.u32(value))
            case Kind.ALIAS:
                return Term(Alias(token.text))
            case _:
                raise UnexpectedToken(token)

    def expression(self):
        left = self.term()
        token = self.expect_token()
        if token.kind is Kind.SEMICOLON:
            return left
        if token.kind not in OPERATORS:
            raise UnexpectedToken(token)
        right = self.expression()
        return BinaryOp(OPERATORS[token.kind], left, right)


def parse(source):
    return Parser(Lexer(source)).program()
