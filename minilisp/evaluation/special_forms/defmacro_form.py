"""Special form: defmacro.

Binds a Macro value whose parameters follow the same rule as lambda
parameters.
"""

from __future__ import annotations

from minilisp import Expr, FormHandler
from minilisp.errors import MalformedForm
from minilisp.types.bind import parameter_names, unpack_args
from minilisp.types.context import Context
from minilisp.types.lambda_fn import Macro
from minilisp.types.symbol import Ident


def defmacro_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """(defmacro name (params) body): bind and return the macro."""
    name, params, body = unpack_args(tail, 3, "defmacro")
    if not isinstance(name, Ident):
        raise MalformedForm("Error: macro name is not an ident")
    parameter_names(params)

    macro = Macro(params, body)
    return context.set_expr(macro).bind(name, macro)
