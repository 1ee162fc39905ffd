from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Sequence

from rubima.bytecode import INT32_MAX, INT32_MIN, Instruction, Integer, JumpTarget, Opcode
from rubima.errors import VMError

logger = logging.getLogger(__name__)

Value = int | bool


def as_bool(value: Value) -> bool:
    """Truthiness used by `not` and `if`.

    Only an explicit False is falsy. Every int, zero included, is truthy.
    """
    if isinstance(value, bool):
        return value
    return True


def as_int(value: Value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise VMError("value is not an int")
    return value


def _div(a: int, b: int) -> int:
    if b == 0:
        raise VMError("division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


_ARITH: dict[Opcode, Callable[[int, int], int]] = {
    Opcode.ADD: operator.add,
    Opcode.SUB: operator.sub,
    Opcode.MUL: operator.mul,
    Opcode.DIV: _div,
}

_COMPARE: dict[Opcode, Callable[[int, int], bool]] = {
    Opcode.SMALLER: operator.lt,
    Opcode.BIGGER: operator.gt,
}


class VM:
    """Stack machine over a compiled instruction sequence.

    Binary opcodes pop `a` then `b` and push `a op b`, so the value pushed
    last is the left operand.
    """

    def __init__(self) -> None:
        self.stack: list[Value] = []
        self.pc = 0
        self.steps = 0

    def eval(self, program: Sequence[Instruction]) -> Value | None:
        self.stack = []
        self.pc = 0
        self.steps = 0
        try:
            while 0 <= self.pc < len(program):
                self.dispatch(program[self.pc])
        except VMError as exc:
            if exc.pc is None:
                raise VMError(exc.reason, pc=self.pc) from None
            raise
        return self.stack[-1] if self.stack else None

    def dispatch(self, insn: Instruction) -> None:
        logger.debug("%04d %s %s", self.pc, insn.opcode.value, list(insn.operands))
        self.steps += 1
        op = insn.opcode

        if op is Opcode.NOP:
            pass
        elif op is Opcode.PUSH:
            arg = insn.arg
            if not isinstance(arg, Integer):
                raise VMError("push expects an integer operand")
            self.push(arg.value)
        elif op is Opcode.POP:
            self.pop()
        elif op is Opcode.DUP:
            value = self.pop()
            self.push(value)
            self.push(value)
        elif op in _ARITH:
            a = as_int(self.pop())
            b = as_int(self.pop())
            result = _ARITH[op](a, b)
            if not INT32_MIN <= result <= INT32_MAX:
                raise VMError("integer overflow")
            self.push(result)
        elif op is Opcode.NOT:
            self.push(not as_bool(self.pop()))
        elif op in _COMPARE:
            a = as_int(self.pop())
            b = as_int(self.pop())
            self.push(_COMPARE[op](a, b))
        elif op is Opcode.GOTO:
            self.pc = _jump_target(insn)
            return
        elif op is Opcode.IF:
            if as_bool(self.pop()):
                self.pc = _jump_target(insn)
                return
        else:
            raise VMError(f"cannot dispatch {op.value}")
        self.pc += 1

    def push(self, value: Value) -> None:
        self.stack.append(value)
        logger.debug("stack %s", self.stack)

    def pop(self) -> Value:
        if not self.stack:
            raise VMError("empty stack")
        value = self.stack.pop()
        logger.debug("stack %s", self.stack)
        return value


def _jump_target(insn: Instruction) -> int:
    arg = insn.arg
    if not isinstance(arg, JumpTarget):
        raise VMError(f"{insn.opcode.value} expects a label operand")
    if not arg.label.resolved:
        raise VMError(f"label :{arg.label.name} is never defined")
    return arg.position


def run_program(program: Sequence[Instruction]) -> Value | None:
    return VM().eval(program)
