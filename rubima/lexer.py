from __future__ import annotations

import re
from dataclasses import dataclass

from rubima.errors import ParseError

MARKER = "MARKER"
LABEL = "LABEL"
CODE = "CODE"
INT = "INT"

_MARKER_RE = re.compile(r":(\w+)")
_LABEL_RE = re.compile(r":([a-z]+)")
_SPACE_RE = re.compile(r"\s+")
_COMMENT_RE = re.compile(r"#.*")
_CODE_RE = re.compile(r"[a-z]+")
_INT_RE = re.compile(r"[0-9]+")
_NEWLINE_RE = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str
    col: int

    @property
    def name(self) -> str:
        """Label name without the leading colon (MARKER and LABEL tokens)."""
        return self.text[1:] if self.text.startswith(":") else self.text


def tokenize_line(line: str, *, lineno: int | None = None) -> list[Token]:
    """Split one source line into tokens.

    A line that is nothing but `:name` yields a single MARKER token. Otherwise
    references, whitespace, comments, mnemonics and integers are tried in that
    order at each position; text matching none of them raises ParseError with
    the unconsumed rest of the line.
    """
    stripped = line.strip()
    offset = len(line) - len(line.lstrip())

    if _MARKER_RE.fullmatch(stripped):
        return [Token(MARKER, stripped, offset + 1)]

    tokens: list[Token] = []
    pos = 0
    while pos < len(stripped):
        m = _LABEL_RE.match(stripped, pos)
        if m:
            tokens.append(Token(LABEL, m.group(0), offset + pos + 1))
            pos = m.end()
            continue

        m = _SPACE_RE.match(stripped, pos)
        if m:
            pos = m.end()
            continue

        m = _COMMENT_RE.match(stripped, pos)
        if m:
            break

        m = _CODE_RE.match(stripped, pos)
        if m:
            tokens.append(Token(CODE, m.group(0), offset + pos + 1))
            pos = m.end()
            continue

        m = _INT_RE.match(stripped, pos)
        if m:
            tokens.append(Token(INT, m.group(0), offset + pos + 1))
            pos = m.end()
            continue

        raise ParseError(
            "syntax error",
            remainder=stripped[pos:],
            line=lineno,
            col=offset + pos + 1,
        )
    return tokens


def split_lines(src: str) -> list[str]:
    """Split on LF or CRLF only; a trailing newline does not start a new line."""
    lines = _NEWLINE_RE.split(src)
    if lines[-1] == "":
        lines.pop()
    return lines
