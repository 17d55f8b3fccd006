class CompileError(Exception):
    def __init__(self, message, token=None, line=None, column=None):
        super().__init__(message)
        self.message = message
        self.token = token
        if token is not None:
            line = token.line if line is None else line
            column = token.column if column is None else column
        self.line = line
        self.column = column

    def __str__(self):
        if self.line is None:
            return self.message
        return f"line {self.line}, column {self.column}: {self.message}"


class LexError(CompileError):
    pass


class ParseError(CompileError):
    pass


class UnexpectedStatement(ParseError):
    def __init__(self, token):
        super().__init__(
            f"unexpected statement kind {token.kind.name} value {token.text!r}", token
        )


class UnexpectedToken(ParseError):
    def __init__(self, token, where="in expression"):
        super().__init__(
            f"unexpected token {token.kind.name} value {token.text!r} {where}", token
        )


class UnexpectedEndOfInput(ParseError):
    def __init__(self, expected=None, line=None, column=None):
        what = "token" if expected is None else expected.name
        super().__init__(
            f"expected {what} but reached end of input", line=line, column=column
        )


class UnknownSyscall(ParseError):
    def __init__(self, token):
        super().__init__(f"unknown syscall {token.text!r}", token)


class MalformedNumber(ParseError):
    def __init__(self, token):
        super().__init__(f"malformed number {token.text!r}", token)


class NoStatementsFound(CompileError):
    def __init__(self):
        super().__init__("no statements found")


class SemanticError(CompileError):
    pass


class UndeclaredAlias(SemanticError):
    def __init__(self, alias):
        super().__init__(f"undeclared alias {alias!r}")
        self.alias = alias


class AlreadyDeclared(SemanticError):
    def __init__(self, alias, slot):
        super().__init__(f"alias {alias!r} already declared at stack slot {slot}")
        self.alias = alias


class CodegenError(CompileError):
    pass


class UnimplementedOperator(CodegenError):
    def __init__(self, operator):
        super().__init__(f"unimplemented operator {operator.name} ({operator.value})")
        self.operator = operator


class UnimplementedLiteral(CodegenError):
    def __init__(self, literal):
        super().__init__(f"unimplemented literal {literal.kind.name} {literal.value!r}")


class StackOverflow(CodegenError):
    def __init__(self, limit):
        super().__init__(f"stack overflow (max depth {limit})")


class StackUnderflow(CodegenError):
    def __init__(self):
        super().__init__("stack underflow")
