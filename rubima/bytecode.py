from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

UNRESOLVED = -1


class Opcode(str, Enum):
    NOP = "nop"
    PUSH = "push"
    POP = "pop"
    DUP = "dup"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    NOT = "not"
    SMALLER = "smaller"
    BIGGER = "bigger"
    GOTO = "goto"
    IF = "if"
    ERROR = "error"

    @classmethod
    def from_mnemonic(cls, text: str) -> Opcode:
        """Map a source mnemonic to its opcode; anything unknown becomes ERROR."""
        op = _MNEMONICS.get(text)
        return cls.ERROR if op is None else op


_MNEMONICS = {op.value: op for op in Opcode if op is not Opcode.ERROR}


@dataclass(slots=True, eq=False)
class Label:
    """A named jump target shared by every operand that references it.

    `position` stays at UNRESOLVED until the definition line is parsed.
    Equality is identity: two operands point at the same label only when they
    hold the same object.
    """

    name: str
    identity: int
    position: int = UNRESOLVED

    @property
    def resolved(self) -> bool:
        return self.position >= 0


@dataclass(frozen=True, slots=True)
class Integer:
    value: int


@dataclass(frozen=True, slots=True)
class JumpTarget:
    label: Label

    @property
    def position(self) -> int:
        return self.label.position


Operand = Integer | JumpTarget


@dataclass(frozen=True, slots=True)
class Instruction:
    opcode: Opcode
    operands: tuple[Operand, ...] = ()
    # source spelling, kept so unknown mnemonics survive a listing
    mnemonic: str | None = field(default=None, compare=False)

    @property
    def text(self) -> str:
        return self.mnemonic or self.opcode.value

    @property
    def arg(self) -> Operand | None:
        return self.operands[0] if self.operands else None


@dataclass(frozen=True, slots=True)
class Program:
    instructions: tuple[Instruction, ...]
    labels: Mapping[str, Label] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)

    def __getitem__(self, pc: int) -> Instruction:
        return self.instructions[pc]
