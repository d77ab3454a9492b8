# Core type aliases for minilisp's data model.
# Literals are plain Python values (int, float, str). Nil, Ident, Cons, the
# quoting markers and the callable values (Lambda, Macro) live in minilisp.types.
#
# Naming guidance:
# - Expr: any node of the expression tree. Code and data share one
#   representation, so the reader's output and the evaluator's results are
#   both Exprs.
# - FormHandler: signature of a special form implementation, see
#   minilisp.evaluation.special_forms.

from typing import Any, Callable

Expr = Any

# (unevaluated argument list, context, evaluator) -> context
FormHandler = Callable[..., Any]

__version__ = "0.1.0"
