import json
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from linecalc import linecalc_cli

ROOTS_PROGRAM = """\
a = 2
b = -5
c = 3

r = (-b + sqrt(b^2 - 4ac)) / (2a)
s = (-b - sqrt(b^2 - 4ac)) / (2a)
r * s
"""


def test_run_linecalc_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    linecalc_cli.run_linecalc(source="x = 3; 2x^2", is_string=True)
    out = capsys.readouterr().out.splitlines()
    assert out == ["x = 3", "18"]


def test_run_linecalc_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "roots.calc"
    file_path.write_text(ROOTS_PROGRAM)
    linecalc_cli.run_linecalc(source=str(file_path))
    out = capsys.readouterr().out.splitlines()
    assert out == ["a = 2", "b = -5", "c = 3", "r = 1.5", "s = 1", "1.5"]


def test_run_linecalc_rejects_other_extensions(tmp_path: Path) -> None:
    file_path = tmp_path / "roots.txt"
    file_path.write_text("1 + 1")
    with pytest.raises(ValueError, match=r"Only \.calc files are supported\."):
        linecalc_cli.run_linecalc(source=str(file_path))


def test_run_linecalc_reports_errors_and_continues(
    capsys: pytest.CaptureFixture[str],
) -> None:
    linecalc_cli.run_linecalc(source="1 +; y; 2 ~; sqrt(4)", is_string=True)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Parse error: unexpected end of input (col 4)",
        "Evaluation error: variable y is undefined",
        "Syntax error: unrecognized character: '~' (col 4)",
        "2",
    ]


def test_run_linecalc_quit_stops(capsys: pytest.CaptureFixture[str]) -> None:
    linecalc_cli.run_linecalc(source="1\nquit\n2", is_string=True)
    assert capsys.readouterr().out.splitlines() == ["1"]


def test_run_linecalc_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    linecalc_cli.run_linecalc(source="x", is_string=True, verbose=True)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "[ast] >>> ASTNode(expr_stmt, children=[ASTNode(variable, value='x')])",
        "Evaluation error: variable x is undefined",
    ]


def test_run_linecalc_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    linecalc_cli.run_linecalc(source="13.25e2e24; 1 ~", is_string=True, show_tokens=True)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Token(NUMBER, 1325.0) Token(IDENT, e) Token(NUMBER, 24.0) Token(EOF, EOF)",
        "Syntax error: unrecognized character: '~' (col 4)",
    ]


def test_run_linecalc_ast(capsys: pytest.CaptureFixture[str]) -> None:
    linecalc_cli.run_linecalc(source="y = 2; (1", is_string=True, show_ast=True)
    first, second = capsys.readouterr().out.splitlines()
    tree = json.loads(first)
    assert tree["kind"] == "assign"
    assert tree["value"] == "y"
    assert [c["kind"] for c in tree["children"]] == ["variable", "literal"]
    assert tree["children"][1]["value"] == 2.0
    assert second == "Parse error: expected ')', got end of input (col 4)"


def test_run_linecalc_variables_do_not_leak_between_runs(
    capsys: pytest.CaptureFixture[str],
) -> None:
    linecalc_cli.run_linecalc(source="x = 1", is_string=True)
    linecalc_cli.run_linecalc(source="x", is_string=True)
    out = capsys.readouterr().out.splitlines()
    assert out == ["x = 1", "Evaluation error: variable x is undefined"]


def test_main_cli_parses(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["linecalc", "-s", "1 + 1", "--tokens"])
    called = {}

    def dummy_run(**kwargs: Any) -> None:
        called.update(kwargs)

    monkeypatch.setattr(linecalc_cli, "run_linecalc", dummy_run)
    linecalc_cli.main()
    assert called == {
        "source": "1 + 1",
        "is_string": True,
        "show_tokens": True,
        "show_ast": False,
        "verbose": False,
    }


def test_main_calls_repl_on_no_args(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_repl(*args: Any, **kwargs: Any) -> None:
        called["ran"] = True

    monkeypatch.setattr(sys, "argv", ["linecalc"])
    monkeypatch.setattr(linecalc_cli, "start_repl", fake_repl)
    linecalc_cli.main()
    assert called.get("ran")


def test_main_repl_flag_calls_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    called_args = {}

    def fake_repl(*, verbose: Any) -> None:
        called_args["verbose"] = verbose

    monkeypatch.setattr(sys, "argv", ["linecalc", "--repl", "--verbose"])
    monkeypatch.setattr(linecalc_cli, "start_repl", fake_repl)
    linecalc_cli.main()
    assert called_args == {"verbose": True}


def test_main_dumps_are_exclusive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["linecalc", "-s", "1", "--tokens", "--ast"])
    with pytest.raises(SystemExit) as e:
        linecalc_cli.main()
    assert e.value.code == 2


def test_main_version(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["linecalc", "--version"])
    with pytest.raises(SystemExit) as e:
        linecalc_cli.main()
    assert e.value.code == 0
    assert capsys.readouterr().out.strip() == "linecalc 1.0.0"


def test_cli_subprocess_runs_inline_program() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "linecalc.linecalc_cli", "-s", "6/2(1+2)"],
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "9"


def test_cli_subprocess_repl_reads_stdin() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "linecalc.linecalc_cli", "--repl"],
        input="x = 4\nsqrt(x)\nquit\n",
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert result.returncode == 0
    assert "x = 4" in result.stdout
    assert ">>> 2\n" in result.stdout
    assert result.stdout.rstrip().endswith("Exiting linecalc.")


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(source=st.text(alphabet=st.characters(blacklist_categories=["Cs"])))  # type: ignore[misc]
def test_run_linecalc_random_input_does_not_crash(
    source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    linecalc_cli.run_linecalc(source=source, is_string=True)
    capsys.readouterr()


def test_run_linecalc_deep_unary_chain_does_not_abort_batch(
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = "-" * 600 + "1; 2"

    linecalc_cli.run_linecalc(source=source, is_string=True, show_ast=True)
    first, second = capsys.readouterr().out.splitlines()
    assert first == "Parse error: expression is nested too deeply (col 1)"
    assert json.loads(second)["children"][0]["value"] == 2.0

    linecalc_cli.run_linecalc(source=source, is_string=True, verbose=True)
    assert capsys.readouterr().out.splitlines() == [
        "[ast] >>> expression is nested too deeply",
        "Evaluation error: expression is nested too deeply",
        "[ast] >>> ASTNode(expr_stmt, children=[ASTNode(literal, value=2.0)])",
        "2",
    ]
