from __future__ import annotations

from rubima.api import compile_source, run_source
from rubima.bytecode import Instruction, Integer, JumpTarget, Label, Opcode, Program
from rubima.errors import ParseError, RubimaError, VMError
from rubima.labels import LabelRegistry
from rubima.parser import Parser, parse_program
from rubima.vm import VM, run_program

__all__ = [
    "Instruction",
    "Integer",
    "JumpTarget",
    "Label",
    "LabelRegistry",
    "Opcode",
    "ParseError",
    "Parser",
    "Program",
    "RubimaError",
    "VM",
    "VMError",
    "compile_source",
    "parse_program",
    "run_program",
    "run_source",
]
