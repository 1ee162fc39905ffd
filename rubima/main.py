from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rubima.config import load_settings
from rubima.errors import ParseError, RubimaError
from rubima.listing import to_listing
from rubima.parser import Parser
from rubima.schemas import RunReport, program_listing
from rubima.vm import VM, Value


def _source_path(value: str) -> Path:
    if value == "-":
        return Path(value)
    p = Path(value)
    if not p.is_file():
        raise argparse.ArgumentTypeError(f"file not found: {value}")
    return p


def _read_source(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _format_value(value: Value | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _cmd_run(args: argparse.Namespace) -> int:
    src = _read_source(args.file)
    vm = VM()
    try:
        program = Parser().parse(src)
        value = vm.eval(program)
    except RubimaError as exc:
        if args.json:
            print(RunReport(ok=False, steps=vm.steps, error=str(exc)).model_dump_json())
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(RunReport(ok=True, result=value, steps=vm.steps).model_dump_json())
        return 0
    text = _format_value(value)
    if text is not None:
        print(text)
    return 0


def _cmd_compile(args: argparse.Namespace) -> int:
    src = _read_source(args.file)
    parser = Parser()
    try:
        program = parser.parse(src)
    except ParseError as exc:
        print(f"ParseError: {exc}", file=sys.stderr)
        return 1

    for label in parser.labels.unresolved():
        print(f"warning: label :{label.name} is referenced but never defined", file=sys.stderr)

    if args.json:
        print(program_listing(program).model_dump_json(indent=2))
    else:
        sys.stdout.write(to_listing(program))
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(prog="rubima")
    sub = parser.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="compile and evaluate a program")
    run_p.add_argument("file", type=_source_path, help="source file, or - for stdin")
    run_p.add_argument("--json", action="store_true", help="print a JSON run report")
    run_p.add_argument("--trace", action="store_true", help="log every dispatched instruction")

    compile_p = sub.add_parser("compile", help="print the compiled instruction listing")
    compile_p.add_argument("file", type=_source_path, help="source file, or - for stdin")
    compile_p.add_argument("--json", action="store_true", help="print the listing as JSON")

    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "trace", False) else settings.effective_level
    logging.basicConfig(level=level, format="%(name)s %(levelname)s %(message)s", stream=sys.stderr)

    if args.cmd == "run":
        return _cmd_run(args)
    if args.cmd == "compile":
        return _cmd_compile(args)
    raise AssertionError(f"unhandled command: {args.cmd}")
