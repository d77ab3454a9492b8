"""Callable values: closures built by `lambda` and macros built by `defmacro`."""

from __future__ import annotations

from pyrsistent import PMap

from minilisp import Expr
from minilisp.types.expr import is_equal


class Lambda:
    """A closure: parameter list, body and a snapshot of exactly the free
    bindings the body needs from its defining environment.

    `captured` is None when the body has no free identifiers. `name` is set
    for named lambdas, `(lambda name (params) body)`, so that the closure can
    refer to itself without capturing its own name.
    """

    __slots__ = ("params", "body", "captured", "name")
    __match_args__ = ("params", "body", "captured")

    def __init__(
        self,
        params: Expr,
        body: Expr,
        captured: PMap | None = None,
        name: str | None = None,
    ):
        self.params = params
        self.body = body
        self.captured: PMap | None = captured
        self.name: str | None = name

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Lambda)
            and self.name == other.name
            and is_equal(self.params, other.params)
            and is_equal(self.body, other.body)
            and self.captured == other.captured
        )

    __hash__ = None

    def __repr__(self) -> str:
        from minilisp.debug_utils.pprint import to_string
        return to_string(self)


class Macro:
    """A macro: arguments are bound unevaluated, and the value of the body
    (the expansion) is evaluated again in the caller's scope."""

    __slots__ = ("params", "body")
    __match_args__ = ("params", "body")

    def __init__(self, params: Expr, body: Expr):
        self.params = params
        self.body = body

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Macro)
            and is_equal(self.params, other.params)
            and is_equal(self.body, other.body)
        )

    __hash__ = None

    def __repr__(self) -> str:
        from minilisp.debug_utils.pprint import to_string
        return to_string(self)
