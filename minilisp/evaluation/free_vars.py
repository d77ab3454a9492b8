"""Free-variable analysis for closure construction.

A pure traversal of a lambda body returning the names the closure has to
capture from its defining environment. It never evaluates anything.
"""

from __future__ import annotations

import logging

from minilisp import Expr
from minilisp.types.context import is_reserved_ident
from minilisp.types.expr import Cons, Quasiquote, Quote, Unquote
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident

logger = logging.getLogger(__name__)


def free_identifiers(body: Expr, ignore: frozenset[str] | set[str] = frozenset()) -> set[str]:
    """Identifiers referenced by `body` that are not reserved and not in `ignore`.

    - A nested `(lambda ...)` is skipped: it does its own capture when it is
      built.
    - Quoted data (`'x`, `(quote x)`) contributes nothing.
    - Inside a quasiquote template identifiers are data, except within an
      unquote, which is walked normally (nested lambdas included, as data
      until unquoted). A long-form `(unquote x)` counts only with exactly one
      operand, wherever it sits on the spine, as in expand_quasiquote.
    """
    found: set[str] = set()
    _collect(body, found, ignore, quoted=False)
    return found


def _collect(expr: Expr, found: set[str], ignore, quoted: bool) -> None:
    match expr:
        case Ident(name):
            if not quoted and name not in ignore and not is_reserved_ident(name):
                found.add(name)
        case Quote():
            return
        case Quasiquote(inner):
            _collect(inner, found, ignore, True)
        case Unquote(inner):
            _collect(inner, found, ignore, False)
        case Cons(head, _):
            if isinstance(head, Ident) and not quoted:
                if head.name == "quote":
                    return
                if head.name == "quasiquote":
                    quoted = True
                elif head.name == "lambda":
                    logger.debug("Inner lambda detected, its captures are its own")
                    return
            node = expr
            while isinstance(node, Cons):
                if quoted and _is_unquote_form(node):
                    # (a unquote b) reads as (a . ,b)
                    _collect(node.tail.head, found, ignore, False)
                    return
                _collect(node.head, found, ignore, quoted)
                node = node.tail
            # dotted tail
            _collect(node, found, ignore, quoted)


def _is_unquote_form(node: Cons) -> bool:
    """(unquote x) inside a template: the same shape expand_quasiquote evaluates."""
    match node:
        case Cons(Ident("unquote"), Cons(_, rest)) if rest is Nil:
            return True
    return False
