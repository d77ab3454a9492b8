"""Initial bindings for a fresh minilisp context."""
from __future__ import annotations

from minilisp.types.context import Context
from minilisp.types.symbol import T


def register(context: Context) -> Context:
    """Return `context` with the builtin constants bound.

    `t`, the value predicates return for true, evaluates to itself.
    """
    return context.bind(T, T)


def initial_context() -> Context:
    return register(Context.new())
