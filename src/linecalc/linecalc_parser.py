"""
linecalc Parser

Parses one line of linecalc tokens into an abstract syntax tree (AST).

The parser pulls tokens from a `Lexer` one at a time, with one token of
lookahead, and builds a tree of immutable `ASTNode` instances. Exactly one
program node is produced per line.

Supported Constructs
--------------------
- Commands: `help`, `quit`
- Assignments: `x = <expression>`
- Expressions:
    * Binary `+ - * / ^`, all left-associative (so `2^3^2` is `(2^3)^2`)
    * Unary `+` and `-` binding to a single term
    * Parentheses and function calls `f(a, b, ...)`
    * Implicit multiplication: `2x`, `3sqrt(2)`, `6/2(1+2)`

Precedence (low to high)
------------------------
additive (`+ -`) → multiplicative (`* /`, juxtaposition) → power (`^`) → term

Parser Behavior
---------------
- Fail-fast: the first missing or unexpected token raises `ParseError` and the
  whole line is discarded.
- Arity is not checked here; a call keeps however many arguments were written.

Entry Points
------------
- `Parser.parse()`: Parse a full line into a program node.
- `parse_line()`: Convenience wrapper building the stream, lexer and parser.

Raises
------
ParseError
    Raised when unexpected tokens appear or required tokens are missing.
LexError
    Propagated from the lexer.
"""

from __future__ import annotations

from linecalc.linecalc_ast import ASTNode
from linecalc.linecalc_constants import NESTED_TOO_DEEPLY, token_hashmap
from linecalc.linecalc_lexer import CharacterStream, Lexer, Token

TOKEN_SPELLINGS: dict[str, str] = {v: k for k, v in token_hashmap.items()}


class ParseError(SyntaxError):
    """Raised when a token is missing or out of place.

    Attributes:
        description (str): What went wrong, without location.
        line (int): Line of the offending token.
        col (int): Column of the offending token.
    """

    def __init__(self, description: str, line: int = 1, col: int = 1):
        super().__init__(f"Parse error: {description} (col {col})")
        self.description = description
        self.line = line
        self.col = col


class Parser:
    """
    linecalc Parser Class

    Responsible for turning the token stream of one line into a program node:
    a `command`, an `assign`, or an `expr_stmt`.

    Attributes
    ----------
    lexer : Lexer
        The token source. The parser only ever looks at its current token and,
        when classifying a statement, at the one after it.
    additive_ops : set[str]
        Token types of the additive operators.
    multiplicative_ops : set[str]
        Token types of the explicit multiplicative operators.
    sign_ops : set[str]
        Token types allowed as unary prefixes.
    implicit_mult_starts : set[str]
        Token types that trigger an implicit multiplication with a full power
        expression on the right.

    Methods
    -------
    parse() -> ASTNode
        Parse the whole line.
    parse_command() -> ASTNode
        Parse `help` or `quit`.
    parse_assignment() -> ASTNode
        Parse `x = <expression>`.
    parse_expression_statement() -> ASTNode
        Parse a bare expression.
    parse_expression() -> ASTNode
        Parse an expression at the lowest precedence level.
    parse_term() -> ASTNode
        Parse a parenthesized expression, unary term, call, variable or literal.
    parse_argument_list() -> list[ASTNode]
        Parse comma-separated call arguments up to the closing parenthesis.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer: Lexer = lexer

        self.additive_ops: set[str] = {"PLUS", "SUB"}
        self.multiplicative_ops: set[str] = {"MULT", "DIV"}
        self.sign_ops: set[str] = {"PLUS", "SUB"}
        self.implicit_mult_starts: set[str] = {"IDENT", "FUNC"}

    def current(self) -> Token:
        return self.lexer.current()

    def peek(self) -> Token:
        return self.lexer.peek()

    def advance(self) -> Token:
        return self.lexer.advance()

    def error(self, description: str) -> ParseError:
        """Build a ParseError located at the current token."""
        tok = self.current()
        return ParseError(description, tok.line, tok.col)

    def match(self, *types: str) -> Token:
        """Require the current token to be one of `types`, consume it and return it."""
        tok = self.current()
        if tok.type in types:
            self.advance()
            return tok
        expected = " or ".join(f"'{TOKEN_SPELLINGS.get(t, t.lower())}'" for t in types)
        raise self.error(f"expected {expected}, got {tok.describe()}")

    def require_end_of_input(self) -> Token:
        tok = self.current()
        if tok.type != "EOF":
            raise self.error("extra characters at the end of line")
        return tok

    def parse(self) -> ASTNode:
        """Parse a full line and return its program node."""
        self.advance()
        try:
            return self.parse_statement()
        except RecursionError:
            raise self.error(NESTED_TOO_DEEPLY) from None

    def parse_statement(self) -> ASTNode:
        """Classify the line by its first token (and, for variables, the second)."""
        tok = self.current()

        if tok.type == "COMMAND":
            return self.parse_command()
        if tok.type == "IDENT" and self.peek().type == "ASSIGN":
            return self.parse_assignment()
        return self.parse_expression_statement()

    def parse_command(self) -> ASTNode:
        cmd_tok = self.match("COMMAND")
        self.require_end_of_input()
        return ASTNode("command", cmd_tok.value, line=cmd_tok.line, col=cmd_tok.col)

    def parse_assignment(self) -> ASTNode:
        """Parse `x = <expression>`; the caller has already seen the `=`."""
        var_tok = self.match("IDENT")
        self.match("ASSIGN")
        target = ASTNode("variable", var_tok.value, line=var_tok.line, col=var_tok.col)
        rhs = self.parse_expression()
        self.require_end_of_input()
        return ASTNode(
            "assign",
            var_tok.value,
            [target, rhs],
            line=var_tok.line,
            col=var_tok.col,
        )

    def parse_expression_statement(self) -> ASTNode:
        expr = self.parse_expression()
        self.require_end_of_input()
        return ASTNode("expr_stmt", children=[expr], line=expr.line, col=expr.col)

    def parse_expression(self) -> ASTNode:
        return self.parse_additive()

    def parse_additive(self) -> ASTNode:
        result = self.parse_multiplicative()

        while self.current().type in self.additive_ops:
            op_tok = self.advance_past()
            rhs = self.parse_multiplicative()
            result = self.binary(op_tok, result, rhs)

        return result

    def parse_multiplicative(self) -> ASTNode:
        """Parse `*` and `/` chains, synthesizing `*` for juxtaposed terms.

        `a(b)` multiplies by the parenthesized term only, while `2x^2` and
        `3sqrt(2)` multiply by a full power expression.
        """
        result = self.parse_power()

        while True:
            tok = self.current()
            if tok.type in self.multiplicative_ops:
                op_tok = self.advance_past()
                rhs = self.parse_power()
            elif tok.type == "LPAREN":
                op_tok = Token("MULT", "*", tok.line, tok.col)
                rhs = self.parse_term()
            elif tok.type in self.implicit_mult_starts:
                op_tok = Token("MULT", "*", tok.line, tok.col)
                rhs = self.parse_power()
            else:
                break
            result = self.binary(op_tok, result, rhs)

        return result

    def parse_power(self) -> ASTNode:
        result = self.parse_term()

        while self.current().type == "POW":
            op_tok = self.advance_past()
            rhs = self.parse_term()
            result = self.binary(op_tok, result, rhs)

        return result

    def parse_term(self) -> ASTNode:
        """Parse a parenthesized expression, a signed term, a call, a variable or a literal."""
        tok = self.current()

        if tok.type == "NUMBER":
            self.advance()
            return ASTNode("literal", tok.value, line=tok.line, col=tok.col)

        if tok.type == "LPAREN":
            self.advance()
            inner = self.parse_expression()
            self.match("RPAREN")
            return ASTNode("paren", children=[inner], line=tok.line, col=tok.col)

        if tok.type in self.sign_ops:
            self.advance()
            inner = self.parse_term()
            return ASTNode("unary", tok.value, [inner], line=tok.line, col=tok.col)

        if tok.type == "IDENT":
            self.advance()
            return ASTNode("variable", tok.value, line=tok.line, col=tok.col)

        if tok.type == "FUNC":
            self.advance()
            self.match("LPAREN")
            args = self.parse_argument_list()
            self.match("RPAREN")
            return ASTNode("call", tok.value, args, line=tok.line, col=tok.col)

        if tok.type == "COMMAND":
            raise self.error(f"unexpected command '{tok.value}'")

        if tok.type == "EOF":
            raise self.error("unexpected end of input")

        raise self.error(f"unexpected {tok.describe()}")

    def parse_argument_list(self) -> list[ASTNode]:
        """Parse zero or more comma-separated arguments, leaving `)` in place."""
        args: list[ASTNode] = []
        if self.current().type == "RPAREN":
            return args

        while True:
            args.append(self.parse_expression())
            if self.current().type == "RPAREN":
                return args
            if self.current().type != "COMMA":
                raise self.error("either ')' or ',' must follow argument")
            self.advance()

    def advance_past(self) -> Token:
        """Consume the current token and return it (rather than the next one)."""
        tok = self.current()
        self.advance()
        return tok

    @staticmethod
    def binary(op_tok: Token, left: ASTNode, right: ASTNode) -> ASTNode:
        return ASTNode(
            "binary", op_tok.value, [left, right], line=left.line, col=left.col
        )


def parse_line(source: str) -> ASTNode:
    """Lex and parse one line of input into a program node.

    Raises:
        LexError: If the line contains an unrecognized character or malformed number.
        ParseError: If the tokens do not form a valid statement.
    """
    return Parser(Lexer(CharacterStream(source))).parse()
