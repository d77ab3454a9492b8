import sys

from minilisp import Expr, FormHandler
from minilisp.debug_utils.pprint import to_string
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context
from minilisp.types.nil import Nil


def print_debug_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """(print-debug expr): write the value of expr to stdout, return nil."""
    (operand,) = unpack_args(tail, 1, "print-debug")
    value = evaluate_fn(context.set_expr(operand))
    if value.has_error:
        return value
    print(to_string(value.expr), file=sys.stdout)
    return value.set_expr(Nil)
