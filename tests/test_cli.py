from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from rubima.main import main

PROJECT_ROOT = Path(__file__).resolve().parents[1]

LOOP = """
push 1
:label
push 1
add
dup
push 1000
bigger
if :label
"""


def _run(args: list[str], *, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "rubima", *args],
        cwd=PROJECT_ROOT,
        env=env,
        input=stdin,
        text=True,
        capture_output=True,
        check=False,
    )


def test_cli_run(tmp_path: Path):
    p = tmp_path / "loop.rbm"
    p.write_text(LOOP, encoding="utf-8")

    proc = _run(["run", str(p)])
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.strip().splitlines() == ["1000"]


def test_cli_run_stdin_json():
    proc = _run(["run", "-", "--json"], stdin="push 1\npush 2\nsmaller\n")
    assert proc.returncode == 0, proc.stderr
    report = json.loads(proc.stdout)
    assert report == {"ok": True, "result": False, "steps": 3, "error": None}


def test_cli_runtime_error_exit_code(tmp_path: Path):
    p = tmp_path / "bad.rbm"
    p.write_text("pop\n", encoding="utf-8")
    assert main(["run", str(p)]) == 1


def test_cli_parse_error(tmp_path: Path, capsys):
    p = tmp_path / "bad.rbm"
    p.write_text("push %%\n", encoding="utf-8")
    assert main(["run", str(p)]) == 1
    err = capsys.readouterr().err
    assert "ParseError" in err and "%%" in err


def test_cli_compile_listing(tmp_path: Path, capsys):
    p = tmp_path / "prog.rbm"
    p.write_text("goto :out\n:out\npush 1 # one\n", encoding="utf-8")
    assert main(["compile", str(p)]) == 0
    assert capsys.readouterr().out == "  goto :out\n:out\n  push 1\n"


def test_cli_compile_warns_on_dangling_label(tmp_path: Path, capsys):
    p = tmp_path / "prog.rbm"
    p.write_text("goto :nowhere\n", encoding="utf-8")
    assert main(["compile", str(p), "--json"]) == 0
    captured = capsys.readouterr()
    assert "nowhere" in captured.err
    assert json.loads(captured.out)["labels"][0]["resolved"] is False


def test_cli_missing_file():
    with pytest.raises(SystemExit) as e:
        main(["run", "does-not-exist.rbm"])
    assert e.value.code == 2
