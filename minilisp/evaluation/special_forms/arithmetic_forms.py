"""Binary arithmetic and equality primitives: + - * / =

Numeric promotion: int op int gives an int; if either operand is a float the
other one is widened and the result is a float. Anything else is a type
mismatch.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from minilisp import Expr, FormHandler
from minilisp.errors import TypeMismatch
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context
from minilisp.types.expr import is_equal
from minilisp.types.nil import Nil
from minilisp.types.symbol import T


def evaluate_operands(
    tail: Expr, context: Context, evaluate_fn: FormHandler, form: str
) -> tuple[Expr, Expr, Context]:
    """Evaluate both operands of a binary primitive, each in `context`.

    Returns the two values and the context of the second evaluation, or the
    error context of whichever failed first (in which case both values are Nil).
    """
    first, second = unpack_args(tail, 2, form)
    left = evaluate_fn(context.set_expr(first))
    if left.has_error:
        return Nil, Nil, left
    right = evaluate_fn(context.set_expr(second))
    if right.has_error:
        return Nil, Nil, right
    return left.expr, right.expr, right


def _is_number(value: Expr) -> bool:
    return type(value) is int or type(value) is float


def _divide(x: int | float, y: int | float) -> int | float:
    if type(x) is int and type(y) is int:
        if y == 0:
            raise TypeMismatch("Eval error in /: integer division by zero")
        # Truncate toward zero
        q = abs(x) // abs(y)
        return q if (x < 0) == (y < 0) else -q
    x, y = float(x), float(y)
    if y == 0.0:
        # IEEE semantics instead of ZeroDivisionError
        if x == 0.0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def _arithmetic(symbol: str, op: Callable[[Expr, Expr], Expr]):
    def form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
        x, y, ctx = evaluate_operands(tail, context, evaluate_fn, symbol)
        if ctx.has_error:
            return ctx
        if not (_is_number(x) and _is_number(y)):
            raise TypeMismatch(f"Eval error in {symbol}: invalid types for arguments")
        if type(x) is float or type(y) is float:
            x, y = float(x), float(y)
        return ctx.set_expr(op(x, y))

    form.__name__ = f"arithmetic_{op.__name__}"
    form.__doc__ = f"({symbol} x y)"
    return form


add_form = _arithmetic("+", operator.add)
sub_form = _arithmetic("-", operator.sub)
mul_form = _arithmetic("*", operator.mul)
div_form = _arithmetic("/", _divide)


def equal_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """(= a b) is t when both values are structurally equal, else nil."""
    x, y, ctx = evaluate_operands(tail, context, evaluate_fn, "=")
    if ctx.has_error:
        return ctx
    return ctx.set_expr(T if is_equal(x, y) else Nil)
