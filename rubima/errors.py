from __future__ import annotations


class RubimaError(Exception):
    pass


class ParseError(RubimaError):
    def __init__(
        self,
        message: str,
        *,
        remainder: str = "",
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.remainder = remainder
        self.line = line
        self.col = col
        prefix = ""
        if line is not None and col is not None:
            prefix = f"line {line} col {col}: "
        suffix = f" (at {remainder!r})" if remainder else ""
        super().__init__(prefix + str(message) + suffix)


class VMError(RubimaError):
    def __init__(self, reason: str, *, pc: int | None = None) -> None:
        self.reason = reason
        self.pc = pc
        prefix = "" if pc is None else f"pc {pc}: "
        super().__init__(prefix + reason)
