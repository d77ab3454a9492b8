from minilisp import Expr, FormHandler
from minilisp.errors import MalformedForm
from minilisp.types.bind import unpack_args
from minilisp.types.context import Context
from minilisp.types.expr import Cons, Unquote
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident


def expand_quasiquote(context: Context, template: Expr, evaluate_fn: FormHandler) -> Context:
    """Rebuild `template`, replacing each unquoted part by its value.

    Cons cells are rebuilt from their expanded halves; every other node,
    including a nested quasiquote, is kept as literal data (quasiquote does
    not nest).
    """
    match template:
        case Unquote(inner):
            return evaluate_fn(context.set_expr(inner))
        case Cons(Ident("unquote"), Cons(inner, rest)) if rest is Nil:
            return evaluate_fn(context.set_expr(inner))
        case Cons(head, tail):
            car = expand_quasiquote(context, head, evaluate_fn)
            if car.has_error:
                return car
            cdr = expand_quasiquote(car, tail, evaluate_fn)
            if cdr.has_error:
                return cdr
            return cdr.set_expr(Cons(car.expr, cdr.expr))
    return context.set_expr(template)


def quote_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    (expr,) = unpack_args(tail, 1, "quote")
    return context.set_expr(expr)


def quasiquote_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    (template,) = unpack_args(tail, 1, "quasiquote")
    return expand_quasiquote(context, template, evaluate_fn)


def unquote_form(tail: Expr, context: Context, evaluate_fn: FormHandler) -> Context:
    raise MalformedForm("unquote not valid outside of quasiquote")
