"""
Token tables and program metadata for linecalc.

Exports:
    token_hashmap: single-character operators mapped to their token type.
    COMMAND_KEYWORDS: command names, in matching order.
    FUNCTION_KEYWORDS: function names, in matching order.
    VARIABLE_NAMES: the letters usable as variables.
    NESTED_TOO_DEEPLY: error description for input deeper than the call stack allows.

Keyword tables are matched by prefix in the order listed here, not by longest
match. Keep new entries from shadowing existing ones.
"""

import string

PROGRAM_NAME = "linecalc"
PROGRAM_VERSION = "1.0.0"

token_hashmap: dict[str, str] = {
    "+": "PLUS",
    "-": "SUB",
    "*": "MULT",
    "/": "DIV",
    "^": "POW",
    "(": "LPAREN",
    ")": "RPAREN",
    ",": "COMMA",
    "=": "ASSIGN",
}

COMMAND_KEYWORDS: tuple[str, ...] = ("help", "quit")

FUNCTION_KEYWORDS: tuple[str, ...] = (
    "abs",
    "arccos",
    "arcsin",
    "arctan",
    "cos",
    "exp",
    "ln",
    "log",
    "max",
    "min",
    "pow",
    "sin",
    "sqrt",
    "tan",
)

VARIABLE_NAMES: str = string.ascii_lowercase

NESTED_TOO_DEEPLY = "expression is nested too deeply"
