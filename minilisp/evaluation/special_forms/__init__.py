"""Registry of special forms and primitives for the minilisp evaluator.

Maps names to handler functions `(tail, context, evaluate_fn) -> Context`
that receive the unevaluated argument list. The evaluator consults this
table before ordinary application. Handlers report shape errors by raising a
MinilispError, which the evaluator turns into the error sentinel; failures of
the sub-evaluations they perform are returned as they are.

Every name in the table is reserved (see RESERVED_IDENTS).
"""

from minilisp.evaluation.special_forms.arithmetic_forms import add_form, sub_form, mul_form, div_form, equal_form
from minilisp.evaluation.special_forms.define_form import define_form
from minilisp.evaluation.special_forms.defmacro_form import defmacro_form
from minilisp.evaluation.special_forms.eval_form import eval_form
from minilisp.evaluation.special_forms.if_form import if_form
from minilisp.evaluation.special_forms.lambda_form import lambda_form
from minilisp.evaluation.special_forms.pair_forms import car_form, cdr_form, cons_form
from minilisp.evaluation.special_forms.print_debug_form import print_debug_form
from minilisp.evaluation.special_forms.quote_forms import quote_form, quasiquote_form, unquote_form

SPECIAL_FORMS = {
    "if": if_form,
    "def": define_form,
    "+": add_form,
    "-": sub_form,
    "*": mul_form,
    "/": div_form,
    "=": equal_form,
    "car": car_form,
    "cdr": cdr_form,
    "cons": cons_form,
    "lambda": lambda_form,
    "defmacro": defmacro_form,
    "eval": eval_form,
    "print-debug": print_debug_form,
    "quote": quote_form,
    "quasiquote": quasiquote_form,
    "unquote": unquote_form,
}
