"""
lbasic CLI Entrypoint.

This module provides the command-line interface for inspecting how lbasic
source is tokenized and parsed.

Features:
    - Read source from `.bas` files or inline strings.
    - Print the token list of each line, the parsed statements, their JSON
      form, or the Python rendering of their expression operands.
    - Extend the built-in function registry and bound IF nesting.

Example usage:
    lbasic program.bas
    lbasic -s '10 PRINT "hi"' --json
    lbasic program.bas --tokens
    lbasic -s '10 LET A = FOO(1)' --functions FOO --emit

Functions:
    run_lbasic(source: str, is_string: bool = False, mode: str = "repr",
               functions: Iterable[str] | None = None, max_depth: int = MAX_IF_DEPTH) -> None:
        Runs the lex/parse pipeline and prints the selected view.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, configures logging and invokes run_lbasic.
"""

import argparse
import json
import logging
import sys
from collections.abc import Iterable

from lbasic.emitters.py_emitter import PythonEmitter
from lbasic.lbasic_constants import DEFAULT_FUNCTIONS, MAX_IF_DEPTH
from lbasic.lbasic_errors import BasicError
from lbasic.lbasic_lexer import Lexer
from lbasic.lbasic_parser import parse_program

logger = logging.getLogger(__name__)

MODES = ("repr", "tokens", "json", "emit")


def run_lbasic(
    source: str,
    is_string: bool = False,
    mode: str = "repr",
    functions: Iterable[str] | None = None,
    max_depth: int = MAX_IF_DEPTH,
) -> None:
    """
    Run the lbasic front end over a program and print the requested view.

    Args:
        source (str): The lbasic source code or path to a `.bas` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        mode (str): One of "repr", "tokens", "json" or "emit".
        functions (Iterable[str] | None): Function registry; defaults to the built-ins.
        max_depth (int): Maximum IF nesting depth.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.bas',
            or if `mode` is unknown.
        BasicError: On the first line that fails to lex or parse.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown output mode: {mode!r}")
    if not is_string and not source.lower().endswith(".bas"):
        raise ValueError("Only .bas files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()
    logger.debug(f"Running lbasic in {mode} mode")

    if mode == "tokens":
        lexer = Lexer(functions)
        for line in source.splitlines():
            if line.strip():
                print(" ".join(repr(tok) for tok in lexer.tokenize(line)))
        return

    program = parse_program(source, functions=functions, max_depth=max_depth)

    if mode == "json":
        print(json.dumps([stmt.to_dict() for stmt in program], indent=2))
    elif mode == "emit":
        emitter = PythonEmitter()
        for stmt in program:
            operands = "; ".join(emitter.emit_operands(stmt))
            print(f"{stmt.line_number} {stmt.kind.value}: {operands}".rstrip())
    else:
        for stmt in program:
            print(repr(stmt))


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the lbasic CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-t`, `--tokens`: Print tokens instead of statements.
        - `-j`, `--json`: Print statements as JSON.
        - `-e`, `--emit`: Print the Python rendering of expression operands.
        - `--functions`: Comma-separated names added to the function registry.
        - `--max-depth`: Maximum IF nesting depth.
        - `--verbose`: Enable debug logging.

    Returns:
        Process exit status: 0 on success, 1 on a lexing or parsing error.
    """
    parser = argparse.ArgumentParser(prog="lbasic")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "-t", "--tokens", action="store_const", dest="mode", const="tokens",
        help="Print the tokens of each line",
    )
    view.add_argument(
        "-j", "--json", action="store_const", dest="mode", const="json",
        help="Print parsed statements as JSON",
    )
    view.add_argument(
        "-e", "--emit", action="store_const", dest="mode", const="emit",
        help="Print expression operands rendered as Python",
    )
    parser.add_argument(
        "--functions",
        default="",
        metavar="NAMES",
        help="Comma-separated function names added to the built-in registry",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_IF_DEPTH,
        help=f"Maximum IF nesting depth (default: {MAX_IF_DEPTH})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    extra = [name.strip().upper() for name in args.functions.split(",") if name.strip()]
    functions = {**DEFAULT_FUNCTIONS, **{name: None for name in extra}}

    try:
        run_lbasic(
            source=args.source,
            is_string=args.string,
            mode=args.mode or "repr",
            functions=functions,
            max_depth=args.max_depth,
        )
    except BasicError as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
