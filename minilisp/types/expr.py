"""Expression tree nodes for minilisp.

Integers, floats and strings are represented by the matching Python values,
Nil by the `Nil` singleton and identifiers by `Ident`. The remaining nodes are
defined here. Nodes are never mutated after construction, so any number of
contexts and closures may share the same subtree.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from minilisp import Expr
from minilisp.types.nil import Nil


def is_equal(a: Expr, b: Expr) -> bool:
    """Structural equality. Values of different types never compare equal,
    so `1` and `1.0` are distinct."""
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    return a == b


class Cons:
    """A pair. Chains of Cons ending in Nil are lists."""

    __slots__ = ("head", "tail")
    __match_args__ = ("head", "tail")

    def __init__(self, head: Expr, tail: Expr = Nil):
        self.head = head
        self.tail = tail

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cons):
            return NotImplemented
        a, b = self, other
        # Walk the spine iteratively; only heads recurse
        while isinstance(a, Cons) and isinstance(b, Cons):
            if a is b:
                return True
            if not is_equal(a.head, b.head):
                return False
            a, b = a.tail, b.tail
        return is_equal(a, b)

    __hash__ = None

    def __iter__(self) -> Iterator[Expr]:
        return iter_list(self)

    def __repr__(self) -> str:
        from minilisp.debug_utils.pprint import to_string
        return to_string(self)


class _Marker:
    __slots__ = ("expr",)
    __match_args__ = ("expr",)

    def __init__(self, expr: Expr):
        self.expr = expr

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and is_equal(self.expr, other.expr)

    __hash__ = None

    def __repr__(self) -> str:
        from minilisp.debug_utils.pprint import to_string
        return to_string(self)


class Quote(_Marker):
    """'expr: evaluates to expr itself."""
    __slots__ = ()


class Quasiquote(_Marker):
    """`expr: a template, rebuilt with its unquoted parts evaluated."""
    __slots__ = ()


class Unquote(_Marker):
    """,expr: only meaningful inside a quasiquote template."""
    __slots__ = ()


# --- List helpers ---

def from_list(items: Iterable[Expr], tail: Expr = Nil) -> Expr:
    """Build a Cons chain from a Python iterable, terminated by `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Cons(item, result)
    return result


def iter_list(expr: Expr) -> Iterator[Expr]:
    """Yield the heads of a Cons chain. Stops at the first non-Cons tail."""
    while isinstance(expr, Cons):
        yield expr.head
        expr = expr.tail


def split_list(expr: Expr) -> tuple[list[Expr], Expr]:
    """Return the heads of a Cons chain and the terminating tail
    (Nil for a proper list)."""
    items: list[Expr] = []
    while isinstance(expr, Cons):
        items.append(expr.head)
        expr = expr.tail
    return items, expr
