import io
import traceback
from collections.abc import MutableMapping

from linecalc.linecalc_ast import ASTNode
from linecalc.linecalc_constants import NESTED_TOO_DEEPLY, PROGRAM_NAME, PROGRAM_VERSION
from linecalc.linecalc_eval import EvalError, evaluate
from linecalc.linecalc_help import help_text
from linecalc.linecalc_lexer import LexError
from linecalc.linecalc_parser import ParseError, parse_line

Variables = MutableMapping[str, float]


def format_value(value: float) -> str:
    """Render a result: `9` for integral values, `repr()` otherwise."""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def run_program(node: ASTNode, variables: Variables) -> bool:
    """Execute one parsed line. Returns False when it is time to exit."""
    if node.kind == "command":
        if node.value == "quit":
            return False
        if node.value == "help":
            print(help_text())
            return True
        raise AssertionError(f"Unknown command: {node.value!r}")

    try:
        result = evaluate(node, variables)
    except EvalError as e:
        print(e)
        return True

    if node.kind == "assign":
        # Bind only after a successful evaluation
        name = str(node.value)
        variables[name] = result
        print(f"{name} = {format_value(result)}")
    else:
        print(format_value(result))
    return True


def run_line(src: str, variables: Variables, verbose: bool = False) -> bool:
    """Parse and execute one line of input. Returns False when it is time to exit."""
    if not src.strip():
        return True

    try:
        node = parse_line(src)
    except (LexError, ParseError) as e:
        print(e)
        return True

    if verbose:
        try:
            print(f"[ast] >>> {node!r}")
        except RecursionError:
            print(f"[ast] >>> {NESTED_TOO_DEEPLY}")
    return run_program(node, variables)


def start_repl(verbose: bool = False) -> None:
    print(f"{PROGRAM_NAME} {PROGRAM_VERSION}")
    print("Type help for usage, quit to exit.")
    variables: dict[str, float] = {}

    while True:
        try:
            src = input(">>> ")
            if src.strip().lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            try:
                keep_going = run_line(src, variables, verbose=verbose)
            except AssertionError:
                raise
            except Exception:
                print_traceback()
                continue
            if not keep_going:
                print("Exiting linecalc.")
                return
        except (KeyboardInterrupt, EOFError):
            print("\nExiting linecalc.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
