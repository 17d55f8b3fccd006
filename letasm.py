#!/usr/bin/env python3
import argparse
import os
import sys
import time

import astdump
import printer
import run
from compiler import MAX_STACK_DEPTH, compile_program
from errors import CompileError
from lexer import Lexer
from parser import Parser


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compile a let/syscall program to x86-64 NASM")
    parser.add_argument("source", help="source file to compile")
    parser.add_argument("-o", "--outdir", default=".", help="directory for generated files")
    parser.add_argument(
        "--no-default-exit",
        dest="default_exit",
        action="store_false",
        help="do not append exit(0) after the last statement",
    )
    parser.add_argument("--max-stack-depth", type=int, default=MAX_STACK_DEPTH)
    parser.add_argument("--ast", action="store_true", help="write the AST as <stem>.ast")
    parser.add_argument("--print-ast", action="store_true", help="print the AST")
    parser.add_argument("--run", action="store_true", help="assemble, link and run the result")
    parser.add_argument("-q", "--quiet", dest="verbose", action="store_false")
    return parser.parse_args(argv)


def timed(label, verbose, fn, *args, **kwargs):
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    if verbose:
        print(f"{label} took {(time.perf_counter() - start) * 1000:.3f}ms")
    return result


def compile_source(source, args):
    program = timed("Parser", args.verbose, Parser(Lexer(source)).program)
    asm = timed(
        "Compiler",
        args.verbose,
        compile_program,
        program,
        max_stack_depth=args.max_stack_depth,
        append_default_exit=args.default_exit,
    )
    return program, asm


def write(path, text):
    with open(path, "w") as f:
        f.write(text)
    return path


def main(argv=None):
    args = parse_args(argv)
    try:
        with open(args.source, "r") as infile:
            source = infile.read()
    except OSError as e:
        print(f"error: {args.source}: {e.strerror or e}", file=sys.stderr)
        return 1

    try:
        program, asm = compile_source(source, args)
    except CompileError as e:
        print(f"error: {args.source}: {e}", file=sys.stderr)
        return 1

    if args.print_ast:
        printer.pretty_print(program)

    os.makedirs(args.outdir, exist_ok=True)
    stem = os.path.join(args.outdir, os.path.splitext(os.path.basename(args.source))[0])
    if args.ast:
        write(f"{stem}.ast", astdump.dumps(program) + "\n")
    asm_path = write(f"{stem}.s", asm)
    if not args.run:
        return 0

    obj_path = run.assemble(asm_path, f"{stem}.o", verbose=args.verbose)
    exe_path = run.link(obj_path, stem, verbose=args.verbose)
    status = run.execute(exe_path, verbose=args.verbose)
    if args.verbose:
        print(f"Exit status {status}")
    return status


if __name__ == "__main__":
    sys.exit(main())
