"""Usage text shown by the `help` command."""

from linecalc.linecalc_constants import PROGRAM_NAME, PROGRAM_VERSION

USAGE = """\
is an interactive calculator that runs in a terminal.

commands:
help            displays this help text.
quit            exits.
<var> = <expr>  evaluates <expr> and assigns the result to variable <var>.
<expr>          evaluates <expr> and displays the result.

<var> is a single letter variable name, one of a..z.
<expr> is a mathematical expression built from any of the following:

<number>          a number literal: nnn[.nnn][ennn] or .nnn[ennn]
expr + expr       addition
expr - expr       subtraction
expr * expr       multiplication
expr / expr       division
expr ^ expr       exponentiation
-expr             unary negation
+expr             unary plus, accepted for completeness
(expr)            parentheses change the order of evaluation
abs(expr)         absolute value
arccos(expr)      arc cosine
arcsin(expr)      arc sine
arctan(expr)      arc tangent
cos(expr)         cosine
exp(expr)         e to a power
ln(expr)          natural logarithm (base e)
log(expr)         logarithm (base 10)
max(e1, e2, ...)  maximum of two or more arguments
min(e1, e2, ...)  minimum of two or more arguments
pow(e1, e2)       e1 to the power e2
sin(expr)         sine
sqrt(expr)        square root
tan(expr)         tangent
<var>             previously assigned value of a variable

Parentheses after a function name are mandatory.

The multiplication sign '*' can be left out when the right hand operand
is not a number: 2x, 3sqrt(2) and a(b + c) are all products.

Variables can be referred to only after they have been assigned at least
once. A variable can be reassigned, and may appear in its own right hand
side:
x = 10
x = x + 10

Functions, parenthesized subexpressions and unary expressions are evaluated
first, then exponentiation, then multiplication and division, and finally
addition and subtraction. All binary operators group left to right, including
'^': 2^3^2 is (2^3)^2 = 64. The expression
6 / 2(1 + 2)
yields 9.

Infinities and undefined values are reported as errors and are never
assigned.

Example input:
a = 2
b = -5
c = 3
r = (-b + sqrt(b^2 - 4ac)) / (2a)
s = (-b - sqrt(b^2 - 4ac)) / (2a)"""


def help_text() -> str:
    return f"{PROGRAM_NAME} {PROGRAM_VERSION} {USAGE}"
