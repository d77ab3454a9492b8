from __future__ import annotations

import logging

from pyrsistent import pmap

from minilisp import Expr, FormHandler
from minilisp.debug_utils.pprint import to_string
from minilisp.errors import CaptureFailure, MalformedForm, TooFewArguments, TooManyArguments
from minilisp.evaluation.free_vars import free_identifiers
from minilisp.types.bind import parameter_names
from minilisp.types.context import Context
from minilisp.types.expr import split_list
from minilisp.types.lambda_fn import Lambda
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident

logger = logging.getLogger(__name__)


def lambda_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """
    (lambda (params) body) or (lambda name (params) body)

    The closure captures exactly the free identifiers of its body, looked up
    in the defining environment now; a missing one is a capture failure. A
    named lambda also binds its name to the new closure in the current
    environment so that it can be called recursively.
    """
    items, rest = split_list(tail)
    if rest is not Nil:
        raise MalformedForm("Wrong arguments to lambda")
    if len(items) < 2:
        raise TooFewArguments("Wrong arguments to lambda: expected a parameter list and a body")
    if len(items) > 3:
        raise TooManyArguments("Too many arguments to lambda")

    name: str | None = None
    if len(items) == 3:
        name_expr, params, body = items
        if not isinstance(name_expr, Ident):
            raise MalformedForm(
                f"Error in lambda for name, expected ident, got {to_string(name_expr)}"
            )
        name = name_expr.name
    else:
        params, body = items

    ignore = set(parameter_names(params))
    if name is not None:
        ignore.add(name)

    free = free_identifiers(body, ignore)
    captured = None
    if free:
        missing = sorted(ident for ident in free if not context.is_bound(ident))
        if missing:
            raise CaptureFailure(
                f"Lambda depends on ident {', '.join(missing)} "
                f"but it can't be found in this context"
            )
        captured = pmap({ident: context.env[ident] for ident in free})

    closure = Lambda(params, body, captured, name)
    logger.debug("closure %s captures %s", to_string(closure), sorted(free))

    result = context.set_expr(closure)
    if name is None:
        return result
    return result.bind(name, closure)
