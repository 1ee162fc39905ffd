from __future__ import annotations

from rubima.bytecode import Program
from rubima.parser import parse_program
from rubima.vm import Value, run_program


def compile_source(*, src: str) -> Program:
    return parse_program(src)


def run_source(*, src: str) -> Value | None:
    program = compile_source(src=src)
    return run_program(program)
