#!/usr/bin/env python3
# Copyright (c) Facebook, Inc. and its affiliates. (http://www.facebook.com)

import os
import shlex
import subprocess
import tempfile
import textwrap

NASM = "nasm"
LD = "ld"


def run(
    cmd,
    verbose=True,
    cwd=None,
    check=True,
    capture_output=False,
    encoding="utf-8",
    # Specify an integer number of seconds
    timeout=-1,
    **kwargs,
):
    if verbose:
        info = "$ "
        if cwd is not None:
            info += f"cd {cwd}; "
        info += " ".join(shlex.quote(str(c)) for c in cmd)
        if capture_output:
            info += " >& ..."
        lines = textwrap.wrap(
            info,
            break_on_hyphens=False,
            break_long_words=False,
            replace_whitespace=False,
            subsequent_indent="  ",
        )
        print(" \\\n".join(lines))
    if timeout != -1:
        cmd = ["timeout", "--signal=KILL", f"{timeout}s", *cmd]
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            check=check,
            capture_output=capture_output,
            encoding=encoding,
            **kwargs,
        )
    except subprocess.CalledProcessError as e:
        if e.returncode == -9:
            # Error code from `timeout` command signaling it had to be killed
            raise TimeoutError("Command timed out", cmd)
        raise


def assemble(asm_path, obj_path, verbose=True):
    run([NASM, "-felf64", asm_path, "-o", obj_path], verbose=verbose)
    return obj_path


def link(obj_path, exe_path, verbose=True):
    run([LD, obj_path, "-o", exe_path], verbose=verbose)
    return exe_path


def build(program, outfile=None, verbose=True):
    """Assemble and link assembly text into an executable at `outfile`."""
    if not outfile:
        outfile = "a.out"
    with tempfile.TemporaryDirectory() as tmp:
        asm_path = os.path.join(tmp, "out.s")
        with open(asm_path, "w") as f:
            f.write(program)
        compiled_object = assemble(asm_path, os.path.join(tmp, "out.o"), verbose=verbose)
        link(compiled_object, outfile, verbose=verbose)
    return outfile


def execute(exe_path, verbose=True, timeout=10):
    """Run a linked program and return its exit status."""
    result = run([os.path.abspath(exe_path)], verbose=verbose, check=False, timeout=timeout)
    return result.returncode
