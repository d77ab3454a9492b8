from minilisp import Expr, FormHandler
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context
from minilisp.types.nil import Nil


def if_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """(if predicate then else)

    Only Nil is false; every other value, including 0, selects `then`.
    The branch is evaluated in the context produced by the predicate.
    """
    predicate, then_expr, else_expr = unpack_args(tail, 3, "if")

    cond = evaluate_fn(context.set_expr(predicate))
    if cond.has_error:
        return cond

    branch = else_expr if cond.expr is Nil else then_expr
    return evaluate_fn(cond.set_expr(branch))
