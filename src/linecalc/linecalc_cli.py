"""
linecalc CLI Entrypoint.

This module provides the command-line interface for running linecalc programs.
It supports evaluating files or inline strings, dumping tokens or syntax trees,
and the interactive REPL.

Features:
    - Read source from `.calc` files or inline strings.
    - Run every line through the same runner as the REPL, with one shared
      variable table; `quit` stops processing.
    - Dump the token stream (`--tokens`) or the syntax tree as JSON (`--ast`).
    - Launch an interactive REPL with optional verbosity.

Example usage:
    linecalc roots.calc
    linecalc -s "a = 2; b = 3; a^b"
    linecalc -s "6/2(1+2)" --ast
    linecalc --repl --verbose

Functions:
    run_linecalc(source: str, is_string: bool = False, show_tokens: bool = False,
                 show_ast: bool = False, verbose: bool = False) -> None:
        Executes the linecalc pipeline (lex → parse → evaluate) over every line.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL, dump, or run).
"""

import argparse
import json
import re
import sys

from linecalc.linecalc_constants import NESTED_TOO_DEEPLY, PROGRAM_NAME, PROGRAM_VERSION
from linecalc.linecalc_lexer import LexError, tokenize
from linecalc.linecalc_parser import ParseError, parse_line
from linecalc.linecalc_repl import run_line, start_repl

LINE_SEPARATOR = re.compile(r"[;\n]")


def run_linecalc(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
    verbose: bool = False,
) -> None:
    """
    Run the linecalc pipeline over every line of a program.

    Args:
        source (str): The program text or path to a `.calc` file.
        is_string (bool): If True, treats `source` as program text instead of a file path.
        show_tokens (bool): If True, prints each line's tokens instead of evaluating.
        show_ast (bool): If True, prints each line's syntax tree as JSON instead of evaluating.
        verbose (bool): If True, prints each parsed tree before running it.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.calc'.

    Side Effects:
        - Prints results and errors to stdout.
    """
    if not is_string and not source.endswith(".calc"):
        raise ValueError("Only .calc files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    lines = [line for line in LINE_SEPARATOR.split(source) if line.strip()]

    # 2. Dumps
    if show_tokens:
        for line in lines:
            try:
                print(" ".join(repr(tok) for tok in tokenize(line)))
            except LexError as e:
                print(e)
        return

    if show_ast:
        for line in lines:
            try:
                node = parse_line(line)
            except (LexError, ParseError) as e:
                print(e)
                continue
            try:
                print(json.dumps(node.to_dict()))
            except RecursionError:
                print(ParseError(NESTED_TOO_DEEPLY, node.line, node.col))
        return

    # 3. Evaluation
    variables: dict[str, float] = {}
    for line in lines:
        if not run_line(line, variables, verbose=verbose):
            break


def main() -> None:
    """
    Entry point for the linecalc CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the program (or dumps its tokens or trees).

    Supported flags:
        - `-s`, `--string`: Interpret source as program text instead of a file path.
        - `--tokens`: Print the token stream of each line.
        - `--ast`: Print the syntax tree of each line as JSON.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Print each parsed tree before running it.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        start_repl()
        return
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME)
    parser.add_argument("source", nargs="?", help="Filename or program text (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as program text"
    )
    dumps = parser.add_mutually_exclusive_group()
    dumps.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of evaluating"
    )
    dumps.add_argument(
        "--ast", action="store_true", help="Print syntax trees as JSON instead of evaluating"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Print each parsed tree before running it"
    )
    parser.add_argument(
        "--version", action="version", version=f"{PROGRAM_NAME} {PROGRAM_VERSION}"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        start_repl(verbose=args.verbose)
    else:
        run_linecalc(
            source=args.source,
            is_string=args.string,
            show_tokens=args.tokens,
            show_ast=args.ast,
            verbose=args.verbose,
        )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
