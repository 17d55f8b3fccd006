#!/usr/bin/env python3
import io
import unittest

import sexpdata
from sexpdata import Symbol

from astdump import dump, dumps, loads, to_sexp
from nodes import Alias, Literal, LiteralKind, Term
from parser import parse


class AstDumpTests(unittest.TestCase):
    def test_let_and_exit(self):
        self.assertEqual(
            dumps(parse("let x = 5; syscall exit x;")),
            '(Program (Let "x" (Term (Literal U32 5))) (SystemCall (Exit (Term (Alias "x")))))',
        )

    def test_binary_op(self):
        self.assertEqual(
            dumps(parse("let y = 1 + x;").statements[0]),
            '(Let "y" (BinaryOp Add (Term (Literal U32 1)) (Term (Alias "x"))))',
        )

    def test_heads_are_symbols(self):
        sexp = sexpdata.loads(dumps(parse("syscall exit 2 * 3;")))
        self.assertEqual(sexp[0], Symbol("Program"))
        self.assertEqual(sexp[1][1][1][0], Symbol("BinaryOp"))
        self.assertEqual(sexp[1][1][1][1], Symbol("Mul"))

    def test_loads_inverts_dumps(self):
        program = parse("let a = 1; let b = a + 2 - 3; syscall exit b / 4;")
        self.assertEqual(loads(dumps(program)), program)

    def test_dump_to_stream(self):
        stream = io.StringIO()
        dump(Term(Alias("z")), stream)
        self.assertEqual(stream.getvalue(), '(Term (Alias "z"))\n')

    def test_other_literal_kinds(self):
        self.assertEqual(to_sexp(Literal(LiteralKind.F64, 1.5)), [Symbol("Literal"), Symbol("F64"), 1.5])

    def test_rejects_non_nodes(self):
        with self.assertRaises(ValueError):
            to_sexp(42)
        with self.assertRaises(ValueError):
            loads("(Let)")
        with self.assertRaises(ValueError):
            loads("(Frobnicate 1)")


if __name__ == "__main__":
    unittest.main()
