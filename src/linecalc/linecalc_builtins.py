"""
Built-in math functions for linecalc.

Every function is registered in `BUILTIN_FUNCS` through `register_builtin`,
together with its arity policy and, for domain-restricted functions, the
message reported when the result is not a finite number.

Arity is checked at evaluation time, not by the parser: fixed-arity functions
need exactly `arity` arguments, variadic ones (`max`, `min`) at least `arity`.
"""

import math
from typing import Callable

Impl = Callable[..., float]


class Builtin:
    """A registered built-in function.

    Attributes:
        name (str): Keyword the lexer recognizes for this function.
        fn (Impl): Implementation taking the evaluated arguments.
        arity (int): Exact argument count, or the minimum when `variadic`.
        variadic (bool): Whether `arity` is a lower bound.
        domain (str | None): Failure message for a non-finite result.
    """

    def __init__(
        self,
        name: str,
        fn: Impl,
        arity: int,
        variadic: bool = False,
        domain: str | None = None,
    ) -> None:
        self.name = name
        self.fn = fn
        self.arity = arity
        self.variadic = variadic
        self.domain = domain

    def __repr__(self) -> str:
        return f"Builtin({self.name}, arity={self.arity}{'+' if self.variadic else ''})"

    def arity_error(self, count: int) -> str | None:
        """Returns the arity failure message for `count` arguments, or None if it fits."""
        if self.variadic:
            if count >= self.arity:
                return None
            return f"{self.name}: at least {self.arity} arguments required, got {count}"
        if count == self.arity:
            return None
        if self.arity == 1:
            return f"{self.name}: single argument required, got {count}"
        return f"{self.name}: {self.arity} arguments required, got {count}"

    def call(self, args: list[float]) -> tuple[float, str | None]:
        """Applies the function, returning the result and a failure message if it is not finite.

        `math` signals domain errors and overflow by raising; both count as an
        undefined result here.
        """
        try:
            result = self.fn(*args)
        except (ValueError, OverflowError, ZeroDivisionError):
            result = math.nan
        if math.isfinite(result):
            return result, None
        return result, self.domain or f"{self.name}: result is undefined"


BUILTIN_FUNCS: dict[str, Builtin] = dict()


def register_builtin(
    name: str, arity: int, variadic: bool = False, domain: str | None = None
) -> Callable[[Impl], Impl]:
    def decorator(fn: Impl) -> Impl:
        BUILTIN_FUNCS[name] = Builtin(
            name=name, fn=fn, arity=arity, variadic=variadic, domain=domain
        )
        return fn

    return decorator


def fold_extremum(args: tuple[float, ...], better: Callable[[float, float], bool]) -> float:
    """Running extremum over `args`; on ties the first-seen value is kept."""
    result = args[0]
    for arg in args[1:]:
        if better(arg, result):
            result = arg
    return result


@register_builtin("abs", 1)
def abs_(x: float) -> float:
    return abs(x)


@register_builtin("arccos", 1, domain="arccos: argument must be between -1..1")
def arccos_(x: float) -> float:
    return math.acos(x)


@register_builtin("arcsin", 1, domain="arcsin: argument must be between -1..1")
def arcsin_(x: float) -> float:
    return math.asin(x)


@register_builtin("arctan", 1)
def arctan_(x: float) -> float:
    return math.atan(x)


@register_builtin("cos", 1)
def cos_(x: float) -> float:
    return math.cos(x)


@register_builtin("exp", 1, domain="exp: overflow")
def exp_(x: float) -> float:
    return math.exp(x)


@register_builtin("ln", 1, domain="ln: argument must be greater than zero")
def ln_(x: float) -> float:
    return math.log(x)


@register_builtin("log", 1, domain="log: argument must be greater than zero")
def log_(x: float) -> float:
    return math.log10(x)


@register_builtin("max", 2, variadic=True)
def max_(*args: float) -> float:
    return fold_extremum(args, lambda a, b: a > b)


@register_builtin("min", 2, variadic=True)
def min_(*args: float) -> float:
    return fold_extremum(args, lambda a, b: a < b)


@register_builtin("pow", 2, domain="pow: the result is undefined")
def pow_(base: float, exponent: float) -> float:
    return math.pow(base, exponent)


@register_builtin("sin", 1)
def sin_(x: float) -> float:
    return math.sin(x)


@register_builtin("sqrt", 1, domain="sqrt: argument must be nonnegative")
def sqrt_(x: float) -> float:
    return math.sqrt(x)


@register_builtin("tan", 1, domain="tan: result is undefined")
def tan_(x: float) -> float:
    return math.tan(x)
