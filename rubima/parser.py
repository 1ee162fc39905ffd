from __future__ import annotations

import logging
from types import MappingProxyType

from rubima.bytecode import INT32_MAX, Instruction, Integer, JumpTarget, Opcode, Operand, Program
from rubima.errors import ParseError
from rubima.labels import LabelRegistry
from rubima.lexer import CODE, INT, LABEL, MARKER, Token, split_lines, tokenize_line

logger = logging.getLogger(__name__)


class Parser:
    """Line-oriented assembler.

    Instructions and labels accumulate across `parse` calls, so a program may
    be fed in pieces that share one label namespace.
    """

    def __init__(self) -> None:
        self.instructions: list[Instruction] = []
        self.labels = LabelRegistry()
        self._lineno = 0

    @property
    def pc(self) -> int:
        """Index the next emitted instruction will occupy."""
        return len(self.instructions)

    def parse(self, src: str) -> Program:
        for line in split_lines(src):
            self._lineno += 1
            self._parse_line(line)
        return self.program()

    def program(self) -> Program:
        return Program(
            instructions=tuple(self.instructions),
            labels=MappingProxyType(self.labels.as_dict()),
        )

    def _parse_line(self, line: str) -> None:
        tokens = tokenize_line(line, lineno=self._lineno)
        if not tokens:
            return

        head, rest = tokens[0], tokens[1:]
        if head.kind == MARKER:
            label = self.labels.define(head.name)
            if label.resolved:
                raise self._error(f"duplicate label definition :{label.name}", line, head)
            self.labels.resolve(label, self.pc)
            logger.debug("label :%s -> %d", label.name, label.position)
            return

        if head.kind != CODE:
            raise self._error("expected mnemonic", line, head)
        for tok in rest:
            if tok.kind == CODE:
                raise self._error("unexpected mnemonic in operand position", line, tok)

        operands = tuple(self._operand(line, tok) for tok in rest)
        insn = Instruction(Opcode.from_mnemonic(head.text), operands, mnemonic=head.text)
        logger.debug("%04d %s", self.pc, insn)
        self.instructions.append(insn)

    def _operand(self, line: str, tok: Token) -> Operand:
        if tok.kind == INT:
            value = int(tok.text)
            if value > INT32_MAX:
                raise self._error("integer literal out of range", line, tok)
            return Integer(value)
        if tok.kind == LABEL:
            return JumpTarget(self.labels.define(tok.name))
        raise self._error(f"unexpected token {tok.text!r}", line, tok)

    def _error(self, message: str, line: str, tok: Token) -> ParseError:
        return ParseError(
            message,
            remainder=line[tok.col - 1 :].rstrip(),
            line=self._lineno,
            col=tok.col,
        )


def parse_program(src: str) -> Program:
    return Parser().parse(src)
