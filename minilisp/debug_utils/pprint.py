"""Textual rendering of minilisp expressions.

Used by `print-debug`, the REPL and the `repr()` of tree nodes.
"""

from __future__ import annotations

from minilisp import Expr
from minilisp.types.expr import Cons, Quasiquote, Quote, Unquote, iter_list
from minilisp.types.lambda_fn import Lambda, Macro
from minilisp.types.nil import Nil, NilType
from minilisp.types.symbol import Ident

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}


def _string_literal(s: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in s) + '"'


def _list_to_string(expr: Cons) -> str:
    parts = [to_string(item) for item in iter_list(expr)]
    node = expr
    while isinstance(node, Cons):
        node = node.tail
    if node is not Nil:
        # improper list
        parts.append(".")
        parts.append(to_string(node))
    return "(" + " ".join(parts) + ")"


def _params_to_string(params: Expr) -> str:
    if isinstance(params, NilType):
        return "()"
    return to_string(params)


def to_string(expr: Expr) -> str:
    match expr:
        case NilType():
            return "nil"
        case Ident(name):
            return name
        case str():
            return _string_literal(expr)
        case int() | float():
            return repr(expr)
        case Quote(inner):
            return "'" + to_string(inner)
        case Quasiquote(inner):
            return "`" + to_string(inner)
        case Unquote(inner):
            return "," + to_string(inner)
        case Cons():
            return _list_to_string(expr)
        case Lambda():
            name = f" {expr.name}" if expr.name else ""
            return f"#<lambda{name} {_params_to_string(expr.params)}>"
        case Macro():
            return f"#<macro {_params_to_string(expr.params)}>"
    return repr(expr)
