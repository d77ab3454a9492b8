from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal

from minilisp import Expr
from minilisp.builtin.env_builtin import register
from minilisp.errors import MinilispError
from minilisp.evaluation.evaluator import evaluate_expression, raise_recursion_limit
from minilisp.reader.parser import lex, TokenStream
from minilisp.types.context import Context
from minilisp.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    A streaming interpreter for minilisp source.
    Reads and evaluates code form by form, keeping one Context across calls.

    A failing top-level form does not stop the forms after it; bindings made
    before the failure stay. With strict=True the carried error is raised
    instead, once the context has been updated.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto', strict: bool = False):
        self.context: Context = register(Context.new())
        self.last_context: Context = self.context
        self.strict = strict
        self.failures: list[MinilispError] = []
        raise_recursion_limit()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import to avoid circular imports
                from minilisp.modules.prelude_loader import load_prelude
                load_prelude(self)
            except FileNotFoundError as err:
                # Be permissive: no prelude found -> proceed
                logger.warning("%s", err)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        self.eval(code)

    def eval_form(self, expr: Expr) -> Context:
        """Evaluate one top-level expression and record the resulting context."""
        result = evaluate_expression(self.context.clear_error(), expr)
        self.context = result
        self.last_context = result
        if result.has_error:
            self.failures.append(result.error)
            if self.strict:
                result.raise_for_error()
        return result

    def eval_forms(self, exprs: Iterable[Expr]) -> Expr:
        value = Nil
        for expr in exprs:
            value = self.eval_form(expr).expr
        return value

    def eval(self, code: str) -> Expr:
        """Read and evaluate every form in `code`; return the value of the last
        one (nil when there is none). ReaderError propagates before anything
        is evaluated."""
        exprs = list(TokenStream(lex(code)).parse_all())
        return self.eval_forms(exprs)

    def eval_file(self, path: str | Path) -> Expr:
        return self.eval(Path(path).read_text(encoding="utf-8"))
