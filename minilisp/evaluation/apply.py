"""Application engine for minilisp.

Function calls and macro calls share the parameter binder in
minilisp.types.bind; they differ in whether arguments are evaluated and in
what happens to the value of the body:

- function call: the body's value is the result;
- macro call: the body's value is an expansion, evaluated again in the
  caller's environment.

In both cases bindings made while evaluating the body do not leak into the
caller: the result carries the caller's environment.
"""

from __future__ import annotations

import logging

from minilisp import Expr, FormHandler
from minilisp.debug_utils.pprint import to_string
from minilisp.types.bind import bind_arguments
from minilisp.types.context import Context
from minilisp.types.lambda_fn import Lambda, Macro

logger = logging.getLogger(__name__)


def call_function(context: Context, fn: Lambda, args: Expr, evaluate_fn: FormHandler) -> Context:
    """Apply a closure to the unevaluated call-site arguments `args`.

    The callee environment is the call-site environment, then the closure's
    own name (for recursion), then its captured bindings, then the
    parameters, each layer shadowing the previous one.
    """
    callee = context
    if fn.name is not None:
        callee = callee.merge({fn.name: fn})
    callee = callee.merge(fn.captured)
    callee = bind_arguments(callee, fn.params, args, context, evaluate_fn)
    if callee.has_error:
        return callee.with_env(context.env)

    result = evaluate_fn(callee.set_expr(fn.body))
    return result.with_env(context.env)


def expand_macro(context: Context, macro: Macro, args: Expr, evaluate_fn: FormHandler) -> Context:
    """Run the macro body with its parameters bound to the unevaluated
    arguments; the resulting context holds the expansion, not yet evaluated."""
    call = bind_arguments(context, macro.params, args, context)
    if call.has_error:
        return call
    return evaluate_fn(call.set_expr(macro.body))


def call_macro(context: Context, macro: Macro, args: Expr, evaluate_fn: FormHandler) -> Context:
    expansion = expand_macro(context, macro, args, evaluate_fn)
    if expansion.has_error:
        return expansion.with_env(context.env)
    logger.info("macroexpand gives %s", to_string(expansion.expr))
    return evaluate_fn(expansion.with_env(context.env))
