"""Evaluation context for minilisp.

A Context bundles the expression currently being reduced, a persistent
mapping from identifier names to values, and the error carried by a failed
evaluation. Contexts are values: every operation returns a new Context and
the receiver is left untouched, so any number of evaluation steps can hold
their own consistent view of the bindings.

Lookup is flat (a single mapping, no parent chain). Closures therefore
snapshot the bindings they need when they are built, see
minilisp.evaluation.special_forms.lambda_form.
"""

from __future__ import annotations

import logging
from typing import Mapping

from pyrsistent import PMap, pmap

from minilisp import Expr
from minilisp.errors import MinilispError, ReservedIdentifier, UnboundIdentifier
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident

logger = logging.getLogger(__name__)


# Names of special forms and primitives; they can never be rebound.
RESERVED_IDENTS = frozenset({
    "print-debug",
    "defmacro",
    "cons",
    "lambda",
    "eval",
    "def",
    "if",
    "+",
    "-",
    "*",
    "/",
    "=",
    "car",
    "cdr",
    "quote",
    "quasiquote",
    "unquote",
})


def is_reserved_ident(name: str) -> bool:
    return name in RESERVED_IDENTS


def _key(name: str | Ident) -> str:
    return name.name if isinstance(name, Ident) else name


class Context:
    """Current expression + bindings + error state."""

    __slots__ = ("expr", "env", "error")

    def __init__(
        self,
        expr: Expr = Nil,
        env: PMap | None = None,
        error: MinilispError | None = None,
    ):
        self.expr: Expr = expr
        self.env: PMap = env if env is not None else pmap()
        self.error: MinilispError | None = error

    @classmethod
    def new(cls) -> Context:
        return cls()

    @property
    def has_error(self) -> bool:
        return self.error is not None

    # --- Pure transformations ---

    def set_expr(self, expr: Expr) -> Context:
        """Same bindings and error state, different current expression."""
        return Context(expr, self.env, self.error)

    def with_env(self, env: PMap) -> Context:
        return Context(self.expr, env, self.error)

    def merge(self, bindings: Mapping[str, Expr] | None) -> Context:
        """Overlay `bindings` on the environment; they shadow existing names."""
        if not bindings:
            return self
        return Context(self.expr, self.env.update(bindings), self.error)

    def clear_error(self) -> Context:
        if self.error is None:
            return self
        return Context(self.expr, self.env, None)

    def with_error(self, error: MinilispError) -> Context:
        """The error sentinel (expr = Nil, error set) without logging.

        Used to carry an error that was already reported into another context.
        """
        return Context(Nil, self.env, error)

    def fail(self, error: MinilispError) -> Context:
        """Report `error` and return the error sentinel."""
        logger.error("%s", error)
        return self.with_error(error)

    def lookup(self, name: str | Ident) -> Context:
        key = _key(name)
        if key not in self.env:
            return self.fail(
                UnboundIdentifier(f"Lookup: variable {key} not found in environment")
            )
        return Context(self.env[key], self.env, self.error)

    def bind(self, name: str | Ident, value: Expr) -> Context:
        """Add `name -> value`; rebinding an existing name shadows it."""
        key = _key(name)
        if is_reserved_ident(key):
            return self.fail(ReservedIdentifier(f"Keyword {key} is reserved"))
        return Context(self.expr, self.env.set(key, value), self.error)

    def is_bound(self, name: str | Ident) -> bool:
        return _key(name) in self.env

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error

    def __repr__(self) -> str:
        from minilisp.debug_utils.pprint import to_string
        state = f", error={self.error!r}" if self.error is not None else ""
        names = " ".join(sorted(self.env.keys()))
        return f"<Context expr={to_string(self.expr)} env=[{names}]{state}>"
