from __future__ import annotations

from rubima.bytecode import Instruction, Integer, Program


def to_listing(program: Program) -> str:
    """Render a program back to assembly, one instruction per line.

    Resolved labels are written as definition lines before the instruction
    they point at; labels positioned at the end of the program follow the
    last instruction.
    """
    by_position: dict[int, list[str]] = {}
    for label in sorted(program.labels.values(), key=lambda label: label.identity):
        if label.resolved:
            by_position.setdefault(label.position, []).append(label.name)

    lines: list[str] = []
    for pc, insn in enumerate(program):
        lines.extend(f":{name}" for name in by_position.get(pc, []))
        lines.append(f"  {_insn(insn)}")
    lines.extend(f":{name}" for name in by_position.get(len(program), []))
    return "\n".join(lines) + ("\n" if lines else "")


def _insn(insn: Instruction) -> str:
    parts = [insn.text]
    for operand in insn.operands:
        if isinstance(operand, Integer):
            parts.append(str(operand.value))
        else:
            parts.append(f":{operand.label.name}")
    return " ".join(parts)
