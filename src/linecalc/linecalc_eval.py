"""
Tree-walking evaluator for linecalc ASTs.

The `Evaluator` dispatches each node to an `eval_<kind>` method and returns a
finite float. Every intermediate result is checked: infinities and NaNs are
reported as an `EvalError` instead of being returned.

The variable table is read, never written. Recording an assignment is the
caller's job, and only after evaluation succeeds.

Example:
    >>> from linecalc.linecalc_parser import parse_line
    >>> evaluate(parse_line("x + 1"), {"x": 2.0})
    3.0

Raises:
    EvalError: Undefined variable, wrong argument count, or a non-finite result.
    NotImplementedError: If a node kind has no evaluation method.
    AssertionError: If the tree breaks an invariant the parser guarantees.
"""

import math
from collections.abc import Mapping

from linecalc.linecalc_ast import ASTNode
from linecalc.linecalc_builtins import BUILTIN_FUNCS
from linecalc.linecalc_constants import NESTED_TOO_DEEPLY

BINARY_FAILURES: dict[str, str] = {
    "+": "arithmetic overflow during addition",
    "-": "arithmetic overflow during subtraction",
    "*": "arithmetic overflow during multiplication",
    "/": "arithmetic overflow during division",
    "^": "result of exponentiation is undefined",
}


class EvalError(Exception):
    """Raised when a syntactically valid expression has no finite value.

    Attributes:
        description (str): What went wrong.
    """

    def __init__(self, description: str):
        super().__init__(f"Evaluation error: {description}")
        self.description = description


def apply_binary(op: str, left: float, right: float) -> float:
    """Applies a binary operator, mapping Python's arithmetic exceptions to NaN."""
    try:
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            return left / right
        if op == "^":
            return math.pow(left, right)
    except (ZeroDivisionError, OverflowError, ValueError):
        return math.nan
    raise AssertionError(f"Unexpected binary operator: {op!r}")  # pragma: no cover


class Evaluator:
    """Evaluates linecalc AST nodes against a variable table.

    Attributes:
        variables (Mapping[str, float]): Bound variables, letter to value.
    """

    def __init__(self, variables: Mapping[str, float]) -> None:
        self.variables = variables

    def evaluate(self, node: ASTNode) -> float:
        try:
            return self._visit(node)
        except RecursionError:
            raise EvalError(NESTED_TOO_DEEPLY) from None

    def _visit(self, node: ASTNode) -> float:
        """Invokes the `eval_<kind>` method for a node.

        Raises:
            NotImplementedError: If the node kind cannot be evaluated.
        """
        method = getattr(self, f"eval_{node.kind}", None)
        if method is None:
            raise NotImplementedError(
                f"No evaluation method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        return method(node)  # type: ignore[no-any-return]

    def eval_expr_stmt(self, node: ASTNode) -> float:
        return self._visit(node.children[0])

    def eval_assign(self, node: ASTNode) -> float:
        return self._visit(node.children[1])

    def eval_paren(self, node: ASTNode) -> float:
        return self._visit(node.children[0])

    def eval_unary(self, node: ASTNode) -> float:
        value = self._visit(node.children[0])
        if node.value == "+":
            return value
        if node.value == "-":
            return -value
        raise AssertionError(f"Unexpected unary operator: {node.value!r}")

    def eval_binary(self, node: ASTNode) -> float:
        op = str(node.value)
        if op not in BINARY_FAILURES:
            raise AssertionError(f"Unexpected binary operator: {op!r}")
        left = self._visit(node.children[0])
        right = self._visit(node.children[1])
        result = apply_binary(op, left, right)
        if not math.isfinite(result):
            raise EvalError(BINARY_FAILURES[op])
        return result

    def eval_call(self, node: ASTNode) -> float:
        builtin = BUILTIN_FUNCS.get(str(node.value))
        if builtin is None:
            raise AssertionError(f"Unknown function: {node.value!r}")
        args = [self._visit(arg) for arg in node.children]
        arity_error = builtin.arity_error(len(args))
        if arity_error is not None:
            raise EvalError(arity_error)
        result, failure = builtin.call(args)
        if failure is not None:
            raise EvalError(failure)
        return result

    def eval_variable(self, node: ASTNode) -> float:
        name = str(node.value)
        if name not in self.variables:
            raise EvalError(f"variable {name} is undefined")
        return self.variables[name]

    def eval_literal(self, node: ASTNode) -> float:
        return float(node.value)  # type: ignore[arg-type]


def evaluate(node: ASTNode, variables: Mapping[str, float] | None = None) -> float:
    """Evaluate an expression, `expr_stmt` or `assign` node to a finite float."""
    return Evaluator(variables if variables is not None else {}).evaluate(node)
