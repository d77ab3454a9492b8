from minilisp import Expr, FormHandler
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context


def eval_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    # The operand is evaluated once to obtain an expression, which is then evaluated.
    (operand,) = unpack_args(tail, 1, "eval")
    expr_ctx = evaluate_fn(context.set_expr(operand))
    if expr_ctx.has_error:
        return expr_ctx
    return evaluate_fn(expr_ctx)
