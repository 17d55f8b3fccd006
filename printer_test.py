#!/usr/bin/env python3
import io
import textwrap
import unittest

from nodes import Literal, LiteralKind, Program, SystemCall, Exit, Term
from parser import parse
from printer import format_exp, format_program, pretty_print


class PrinterTests(unittest.TestCase):
    def test_program(self):
        self.assertEqual(
            format_program(parse("let x = 1 + 2; syscall exit x;")),
            textwrap.dedent(
                """\
                PROGRAM
                  STATEMENT LET x ASSIGN (1 + 2);
                  STATEMENT SYSCALL EXIT x
                """
            ),
        )

    def test_nested_expression(self):
        program = parse("syscall exit a - b * c / 4;")
        self.assertEqual(format_exp(program.statements[0].syscall.expression), "(a - (b * (c / 4)))")

    def test_non_integer_literal(self):
        program = Program([SystemCall(Exit(Term(Literal(LiteralKind.F64, 2.5))))])
        self.assertIn("EXIT 2.5", format_program(program))

    def test_pretty_print_to_stream(self):
        stream = io.StringIO()
        pretty_print(parse("let a = 1;"), stream)
        self.assertEqual(stream.getvalue(), "PROGRAM\n  STATEMENT LET a ASSIGN 1;\n")


if __name__ == "__main__":
    unittest.main()
