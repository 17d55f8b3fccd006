#!/usr/bin/env python3
import os
import platform
import shutil
import tempfile
import unittest

from compiler import compile_program
from parser import parse
from run import LD, NASM, build, execute

CAN_BUILD = (
    platform.system() == "Linux"
    and platform.machine() in ("x86_64", "AMD64")
    and shutil.which(NASM) is not None
    and shutil.which(LD) is not None
)


@unittest.skipUnless(CAN_BUILD, "needs nasm and ld on Linux x86-64")
class EndToEndTests(unittest.TestCase):
    def _run(self, source, **options):
        asm = compile_program(parse(source), **options)
        with tempfile.TemporaryDirectory() as tmp:
            exe = build(asm, os.path.join(tmp, "out"), verbose=False)
            return execute(exe, verbose=False)

    def test_exit_alias(self):
        self.assertEqual(self._run("let x = 5; syscall exit x;"), 5)

    def test_explicit_exit_runs_before_default_exit(self):
        self.assertEqual(self._run("syscall exit 100;"), 100)

    def test_default_exit(self):
        self.assertEqual(self._run("let x = 7;"), 0)

    def test_add(self):
        self.assertEqual(self._run("let a = 20; let b = 22; syscall exit a + b;"), 42)
        self.assertEqual(self._run("let a = 1 + 2 + 3; syscall exit a + a + 4;"), 16)

    def test_alias_reads_leave_binding_intact(self):
        self.assertEqual(self._run("let a = 3; let b = a + a; let c = a + b; syscall exit c + a;"), 12)

    def test_exit_code_is_truncated_to_a_byte(self):
        self.assertEqual(self._run("syscall exit 300;"), 300 & 0xFF)

    def test_first_exit_wins(self):
        self.assertEqual(self._run("syscall exit 1; syscall exit 2;"), 1)


if __name__ == "__main__":
    unittest.main()
