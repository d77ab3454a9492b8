from minilisp import Expr, FormHandler
from minilisp.errors import MalformedForm
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context
from minilisp.types.symbol import Ident


def define_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """
    (def name value)
    Evaluates `value`, binds it to `name` and returns it. Binding a reserved
    name fails and leaves the environment as it was.
    """
    name, value_expr = unpack_args(tail, 2, "def")
    if not isinstance(name, Ident):
        raise MalformedForm("def must take an ident as first parameter")

    value = evaluate_fn(context.set_expr(value_expr))
    if value.has_error:
        return value
    return value.bind(name, value.expr)
