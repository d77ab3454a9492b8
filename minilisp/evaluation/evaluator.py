"""Core evaluator for minilisp.

`evaluate(context)` reduces `context.expr` and returns a new Context holding
the value. Failures are never raised out of an evaluation step: they come
back as the error sentinel (expr = Nil, error set), and every caller checks
`has_error` right after each sub-evaluation, returning the failing context
unchanged so that the first diagnostic is the one that survives.

Recursion depth follows the nesting of the evaluated program (no tail-call
elimination). Running out of Python stack is a resource limit: it fails the
top-level expression being evaluated, see evaluate_expression.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable

from minilisp import Expr
from minilisp.config import get_recursion_limit
from minilisp.debug_utils.pprint import to_string
from minilisp.errors import MinilispError, NotCallable, RecursionLimitExceeded
from minilisp.evaluation.apply import call_function, call_macro, expand_macro
from minilisp.evaluation.special_forms import SPECIAL_FORMS
from minilisp.evaluation.special_forms.quote_forms import expand_quasiquote
from minilisp.types.context import Context
from minilisp.types.expr import Cons, Quasiquote, Quote
from minilisp.types.lambda_fn import Lambda, Macro
from minilisp.types.symbol import Ident

logger = logging.getLogger(__name__)


def evaluate(context: Context) -> Context:
    """Evaluate the current expression of `context`."""
    expr = context.expr
    match expr:
        case Ident(name):
            return context.lookup(name)
        case Quote(quoted):
            return context.set_expr(quoted)
        case Quasiquote(template):
            return expand_quasiquote(context, template, evaluate)
        case Cons(head, tail):
            return apply_form(context, head, tail)

    # --- Literals, nil, closures and macros evaluate to themselves ---
    return context


def apply_form(context: Context, head: Expr, args: Expr) -> Context:
    """Evaluate the application `(head . args)`."""
    try:
        return _apply(context, head, args)
    except MinilispError as err:
        return context.fail(err)


def _apply(context: Context, head: Expr, args: Expr, seen: tuple[str, ...] = ()) -> Context:
    if isinstance(head, Ident):
        handler = SPECIAL_FORMS.get(head.name)
        if handler is not None:
            return handler(args, context, evaluate)
        if head.name in seen:
            raise NotCallable(f"{head.name} is bound to itself through {' -> '.join(seen)}")
        resolved = context.lookup(head)
        if resolved.has_error:
            return resolved
        return _apply_value(context, resolved.expr, args, seen + (head.name,))

    if isinstance(head, Cons):
        # Evaluate head if it is a list and re-dispatch on the value.
        resolved = evaluate(context.set_expr(head))
        if resolved.has_error:
            return resolved
        return _apply_value(resolved, resolved.expr, args)

    return _apply_value(context, head, args)


def _apply_value(context: Context, fn: Expr, args: Expr, seen: tuple[str, ...] = ()) -> Context:
    match fn:
        case Ident():
            # A binding naming a form or another binding: apply it in turn.
            return _apply(context, fn, args, seen)
        case Lambda():
            return call_function(context, fn, args, evaluate)
        case Macro():
            return call_macro(context, fn, args, evaluate)
    raise NotCallable(
        f"Invalid argument in first place of evaluated list: {to_string(fn)} is not callable"
    )


def macroexpand_1(context: Context, form: Expr) -> Context:
    """Expand a macro call once without evaluating the expansion.

    Forms whose head does not resolve to a macro are returned unchanged.
    """
    if not isinstance(form, Cons):
        return context.set_expr(form)
    head = form.head
    if isinstance(head, Ident):
        if head.name in SPECIAL_FORMS or not context.is_bound(head):
            return context.set_expr(form)
        head = context.env[head.name]
    if not isinstance(head, Macro):
        return context.set_expr(form)
    try:
        expansion = expand_macro(context, head, form.tail, evaluate)
    except MinilispError as err:
        return context.fail(err)
    return expansion.with_env(context.env)


def evaluate_expression(context: Context, expr: Expr) -> Context:
    """Evaluate one expression tree in `context`.

    Running out of Python stack fails this expression only: the result is
    the error sentinel over `context`.
    """
    try:
        return evaluate(context.set_expr(expr))
    except RecursionError:
        return context.fail(RecursionLimitExceeded(
            f"maximum recursion depth exceeded while evaluating {to_string(expr)}"
        ))


def raise_recursion_limit(limit: int | None = None) -> None:
    """Make room for deep minilisp recursion; the limit is never lowered."""
    limit = get_recursion_limit() if limit is None else limit
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)


def evaluate_program(context: Context, exprs: Iterable[Expr]) -> Context:
    """Evaluate top-level forms in order, threading the context.

    A failing form does not stop the program: the next form starts from the
    failed form's context with the error cleared, so definitions made before
    the failure stay bound. The returned context reflects the last form.
    """
    for expr in exprs:
        context = evaluate_expression(context.clear_error(), expr)
        if context.has_error:
            logger.debug("top-level form failed: %s", to_string(expr))
    return context
