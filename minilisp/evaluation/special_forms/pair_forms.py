from minilisp import Expr, FormHandler
from minilisp.errors import TypeMismatch
from minilisp.evaluation.special_forms.arithmetic_forms import evaluate_operands
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context
from minilisp.types.expr import Cons


def _evaluate_pair(tail: Expr, context: Context, evaluate_fn: FormHandler, form: str) -> Context:
    (operand,) = unpack_args(tail, 1, form)
    ctx = evaluate_fn(context.set_expr(operand))
    if ctx.has_error:
        return ctx
    if not isinstance(ctx.expr, Cons):
        raise TypeMismatch(f"Error: {form} must take a list")
    return ctx


def car_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    ctx = _evaluate_pair(tail, context, evaluate_fn, "car")
    if ctx.has_error:
        return ctx
    return ctx.set_expr(ctx.expr.head)


def cdr_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    ctx = _evaluate_pair(tail, context, evaluate_fn, "cdr")
    if ctx.has_error:
        return ctx
    return ctx.set_expr(ctx.expr.tail)


def cons_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    """(cons a b): a new pair of the two values; the pair itself is not evaluated."""
    head, rest, ctx = evaluate_operands(tail, context, evaluate_fn, "cons")
    if ctx.has_error:
        return ctx
    return ctx.set_expr(Cons(head, rest))
