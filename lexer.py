import enum
import re
from collections import namedtuple
from dataclasses import dataclass

from errors import LexError


class Kind(enum.Enum):
    WHITESPACE = enum.auto()
    LINE_COMMENT = enum.auto()
    BLOCK_COMMENT = enum.auto()
    KEYWORD_LET = enum.auto()
    SYSTEM_CALL = enum.auto()
    PAREN_OPEN = enum.auto()
    PAREN_CLOSE = enum.auto()
    BRACE_OPEN = enum.auto()
    BRACE_CLOSE = enum.auto()
    ALIAS = enum.auto()
    NUMBER = enum.auto()
    ASSIGN = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    SEMICOLON = enum.auto()


TRIVIA = frozenset({Kind.WHITESPACE, Kind.LINE_COMMENT, Kind.BLOCK_COMMENT})

Rule = namedtuple("Rule", ["kind", "pattern"])


def _rules(*pairs):
    return tuple(Rule(kind, re.compile(pattern)) for kind, pattern in pairs)


# Longest match wins; on a tie the earlier rule wins, so keywords beat ALIAS.
RULES = _rules(
    (Kind.WHITESPACE, r"\s+"),
    (Kind.LINE_COMMENT, r"//[^\n]*"),
    (Kind.BLOCK_COMMENT, r"/\*[\s\S]*?(?:\*/|\Z)"),
    (Kind.KEYWORD_LET, r"let"),
    (Kind.SYSTEM_CALL, r"syscall"),
    (Kind.PAREN_OPEN, r"\("),
    (Kind.PAREN_CLOSE, r"\)"),
    (Kind.BRACE_OPEN, r"\{"),
    (Kind.BRACE_CLOSE, r"\}"),
    (Kind.ALIAS, r"[a-z][a-z0-9_]*"),
    (Kind.NUMBER, r"[0-9]+"),
    (Kind.ASSIGN, r"="),
    (Kind.ADD, r"\+"),
    (Kind.SUB, r"-"),
    (Kind.MUL, r"\*"),
    (Kind.DIV, r"/"),
    (Kind.SEMICOLON, r";"),
)


@dataclass(frozen=True)
class Token:
    kind: Kind
    text: str
    line: int
    column: int

    def __str__(self):
        return f"{self.kind.name} {self.text!r} at {self.line}:{self.column}"


class Lexer:
    """Lazily splits source text into tokens, dropping whitespace and comments.

    Only one token of lookahead is ever buffered (see peek()).
    """

    def __init__(self, source, rules=RULES):
        self.source = source
        self.rules = rules
        self.pos = 0
        self.line = 1
        self.column = 1
        self.slice = None
        self._peeked = None

    def __iter__(self):
        return self

    def __next__(self):
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    def next(self):
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
        else:
            token = self._scan()
        if token is not None:
            self.slice = token.text
        return token

    def peek(self):
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def position(self):
        return self.line, self.column

    def _match(self):
        best = None
        for rule in self.rules:
            m = rule.pattern.match(self.source, self.pos)
            if m is None or m.end() == self.pos:
                continue
            if best is None or m.end() > best[1].end():
                best = (rule, m)
        return best

    def _advance(self, text):
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)
        self.pos += len(text)

    def _scan(self):
        while self.pos < len(self.source):
            best = self._match()
            if best is None:
                raise LexError(
                    f"unrecognized character {self.source[self.pos]!r}",
                    line=self.line,
                    column=self.column,
                )
            rule, m = best
            text = m.group()
            if rule.kind is Kind.BLOCK_COMMENT and (len(text) < 4 or not text.endswith("*/")):
                raise LexError("unterminated block comment", line=self.line, column=self.column)
            token = Token(rule.kind, text, self.line, self.column)
            self._advance(text)
            if rule.kind not in TRIVIA:
                return token
        return None


def tokenize(source):
    return list(Lexer(source))
