import os
from typing import Any

import pytest

from linecalc.linecalc_ast import ASTNode

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # Nukes the teardown assertion that fails in act
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


def sexpr(node: ASTNode) -> str:
    """Render a tree as an s-expression, ignoring source positions."""
    if node.kind == "literal":
        return format(node.value, "g")
    if node.kind == "variable":
        return str(node.value)
    if node.kind == "expr_stmt":
        return f"(expr {sexpr(node.children[0])})"
    if node.kind == "assign":
        return f"(= {node.value} {sexpr(node.children[1])})"
    if node.kind == "command":
        return f"(command {node.value})"
    head = node.kind if node.kind == "paren" else str(node.value)
    return "(" + " ".join([head] + [sexpr(c) for c in node.children]) + ")"


@pytest.fixture  # type: ignore[misc]
def render() -> Any:
    return sexpr


@pytest.fixture  # type: ignore[misc]
def variables() -> dict[str, float]:
    return {}
