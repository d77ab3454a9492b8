from __future__ import annotations

from typing import Callable

from minilisp import Expr
from minilisp.errors import MalformedForm, MalformedParameters, TooFewArguments, TooManyArguments
from minilisp.types.context import Context
from minilisp.types.expr import split_list
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident


def unpack_args(args: Expr, count: int, form: str) -> list[Expr]:
    """Return the `count` elements of the argument list of `form`.

    Raises TooFewArguments / TooManyArguments when the list has the wrong
    length and MalformedForm when it is not a proper list.
    """
    items, rest = split_list(args)
    if rest is not Nil:
        raise MalformedForm(f"ill-formed {form}: arguments are not a proper list")
    if len(items) < count:
        raise TooFewArguments(
            f"ill-formed {form}: expected {count} argument(s), got {len(items)}"
        )
    if len(items) > count:
        raise TooManyArguments(
            f"ill-formed {form}: too many args, expected {count}, got {len(items)}"
        )
    return items


def parameter_names(params: Expr) -> list[str]:
    """Validate a parameter list and return its names in order.

    A well-formed list is a possibly empty chain of Cons(Ident, ...) ending
    in Nil.
    """
    items, rest = split_list(params)
    if rest is not Nil:
        raise MalformedParameters(
            "invalid form for args (must be a list of idents), got a non-list"
        )
    names = []
    for item in items:
        if not isinstance(item, Ident):
            raise MalformedParameters(
                f"invalid form for args (must be a list of idents), got {item!r}"
            )
        names.append(item.name)
    return names


def bind_arguments(
    callee: Context,
    params: Expr,
    args: Expr,
    caller: Context,
    evaluate_fn: Callable[[Context], Context] | None = None,
) -> Context:
    """
    Single source of truth for parameter binding.

    Binds each parameter name to the matching call-site argument on top of
    `callee`. With `evaluate_fn` (function call) each argument is first
    evaluated in the caller's context as it was before the call, so that an
    argument never sees a sibling parameter; without it (macro call)
    arguments are bound unevaluated.

    Arity mismatches raise; a failed argument evaluation or a reserved
    parameter name returns the error sentinel.
    """
    names = parameter_names(params)
    values, rest = split_list(args)
    if rest is not Nil:
        raise MalformedForm("Error in function call: arguments are not a proper list")
    if len(values) < len(names):
        raise TooFewArguments(
            f"Error in function call: expected {len(names)} argument(s), got {len(values)}"
        )
    if len(values) > len(names):
        raise TooManyArguments(
            f"Error in function call: expected {len(names)} argument(s), got {len(values)}"
        )

    ctx = callee
    for name, arg in zip(names, values):
        if evaluate_fn is not None:
            evaluated = evaluate_fn(caller.set_expr(arg))
            if evaluated.has_error:
                return ctx.with_error(evaluated.error)
            arg = evaluated.expr
        ctx = ctx.bind(name, arg)
        if ctx.has_error:
            return ctx
    return ctx
