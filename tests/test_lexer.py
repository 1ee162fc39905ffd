from __future__ import annotations

import pytest

from rubima.errors import ParseError
from rubima.lexer import split_lines, tokenize_line


def _kinds(line: str) -> list[tuple[str, str]]:
    return [(t.kind, t.text) for t in tokenize_line(line)]


def test_tokens_basic():
    assert _kinds("  push 12  ") == [("CODE", "push"), ("INT", "12")]
    assert _kinds("if :loop") == [("CODE", "if"), ("LABEL", ":loop")]


def test_whole_line_marker():
    assert _kinds("  :label_1  ") == [("MARKER", ":label_1")]
    assert tokenize_line(":label")[0].name == "label"


def test_marker_with_other_tokens_is_not_a_definition():
    assert _kinds(":loop push") == [("LABEL", ":loop"), ("CODE", "push")]


def test_comments_and_blank_lines():
    assert _kinds("   ") == []
    assert _kinds("# only a comment") == []
    assert _kinds("add # push 1") == [("CODE", "add")]


def test_reference_stops_at_non_lowercase():
    assert _kinds("goto :abc1") == [("CODE", "goto"), ("LABEL", ":abc"), ("INT", "1")]


def test_columns_are_one_based():
    toks = tokenize_line("  push 7")
    assert [t.col for t in toks] == [3, 8]


def test_unknown_char_raises_with_remainder():
    with pytest.raises(ParseError) as e:
        tokenize_line("push %%", lineno=4)
    assert e.value.remainder == "%%"
    assert (e.value.line, e.value.col) == (4, 6)
    assert "line 4" in str(e.value)


def test_uppercase_mnemonic_is_a_syntax_error():
    with pytest.raises(ParseError) as e:
        tokenize_line("PUSH 1")
    assert e.value.remainder == "PUSH 1"


def test_split_lines_only_on_newlines():
    assert split_lines("push 1\r\npop\n") == ["push 1", "pop"]
    assert split_lines("a # x\x0cb\u2028c\n") == ["a # x\x0cb\u2028c"]
    assert split_lines("") == []
    assert split_lines("\n\n") == ["", ""]


def test_non_ascii_digits_are_rejected():
    with pytest.raises(ParseError) as e:
        tokenize_line("push \u0661\u0662")
    assert e.value.remainder == "\u0661\u0662"
