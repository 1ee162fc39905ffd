from __future__ import annotations

from pydantic import BaseModel, Field

from rubima.bytecode import Instruction, Integer, JumpTarget, Label, Program


class OperandView(BaseModel):
    kind: str
    value: int | None = None
    label: str | None = None
    position: int | None = None


class InstructionView(BaseModel):
    pc: int
    opcode: str
    mnemonic: str
    operands: list[OperandView] = Field(default_factory=list)


class LabelView(BaseModel):
    name: str
    identity: int
    position: int
    resolved: bool


class ProgramListing(BaseModel):
    instructions: list[InstructionView]
    labels: list[LabelView]


class RunReport(BaseModel):
    ok: bool
    result: bool | int | None = None
    steps: int = 0
    error: str | None = None


def operand_view(operand: Integer | JumpTarget) -> OperandView:
    if isinstance(operand, Integer):
        return OperandView(kind="integer", value=operand.value)
    return OperandView(kind="label", label=operand.label.name, position=operand.position)


def instruction_view(pc: int, insn: Instruction) -> InstructionView:
    return InstructionView(
        pc=pc,
        opcode=insn.opcode.value,
        mnemonic=insn.text,
        operands=[operand_view(o) for o in insn.operands],
    )


def label_view(label: Label) -> LabelView:
    return LabelView(
        name=label.name,
        identity=label.identity,
        position=label.position,
        resolved=label.resolved,
    )


def program_listing(program: Program) -> ProgramListing:
    return ProgramListing(
        instructions=[instruction_view(pc, insn) for pc, insn in enumerate(program)],
        labels=[label_view(label) for label in sorted(program.labels.values(), key=lambda label: label.identity)],
    )
