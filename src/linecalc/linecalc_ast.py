"""
Defines the abstract syntax tree (AST) node structure for linecalc.

Classes:
    ASTNode:
        Represents a node in the syntax tree produced by the parser and walked by
        the evaluator. Nodes are immutable once constructed.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Node kinds:
    Expressions:
        "literal"   value=float
        "variable"  value=letter
        "paren"     children=[inner]
        "unary"     value="+"|"-", children=[inner]
        "binary"    value="+"|"-"|"*"|"/"|"^", children=[left, right]
        "call"      value=function name, children=arguments
    Programs (exactly one per parsed line):
        "command"   value="help"|"quit"
        "assign"    value=letter, children=[variable, expression]
        "expr_stmt" children=[expression]

Example:
    node = ASTNode("binary", "+", [ASTNode("literal", 1.0), ASTNode("literal", 2.0)])
"""

from typing import Any, TypedDict


class ASTDict(TypedDict):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node (e.g., "binary", "call", "assign").
        value (Any): The node's value: operator, name, letter or float.
        line (int): Line number in the source where the node originates.
        col (int): Column number in the source where the node originates.
        children (list[ASTDict]): Child nodes, in order.
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]


class ASTNode:
    """
    Represents an immutable node in the linecalc syntax tree.

    Args:
        kind (str): The type of node (e.g., "binary", "call", "assign").
        value (str | float, optional): Operator, function name, variable letter or literal value.
        children (list[ASTNode], optional): Child nodes, stored as a tuple.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).

    Raises:
        AttributeError: On any attempt to set an attribute after construction.
    """

    __slots__ = ("kind", "value", "children", "line", "col", "_frozen")

    def __init__(
        self,
        kind: str,
        value: str | float | None = None,
        children: list["ASTNode"] | tuple["ASTNode", ...] | None = None,
        line: int = 0,
        col: int = 0,
    ):
        self.kind = kind
        self.value = value
        self.children: tuple["ASTNode", ...] = tuple(children or ())
        self.line = line
        self.col = col
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"ASTNode is immutable; cannot set {name!r}")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ASTNode is immutable; cannot delete {name!r}")

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.line, self.col, self.children))

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "value": self.value,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self.children],
        }
