"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy parsing
- Builds the expression tree consumed by the evaluator:

    - nil, () -> Nil
    - lists -> Cons chains ending in Nil
    - dotted lists (a . b) -> Cons chains ending in b
    - identifiers -> Ident
    - strings -> str (escapes: \\\\ \\" \\n)
    - numbers -> int/float
    - 'x and \\x -> Quote(x)
    - `x -> Quasiquote(x)
    - ,x -> Unquote(x)

Every tokenization or parse failure raises ReaderError before any expression
reaches the evaluator.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from minilisp import Expr
from minilisp.errors import IncompleteInput, ReaderError
from minilisp.types.expr import Cons, Quasiquote, Quote, Unquote
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<quote>['\\])"  # ' and \
    r"|(?P<quasiquote>`)"  # `
    r"|(?P<unquote>,)"  # ,
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<open_string>")'  # string missing its closing quote
    r'|(?P<symbol>[^\s()\'`,";\\]+)'  # fallback: numbers and identifiers
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?\d+[eE][+-]?\d+")
# Anything starting like a number must be a well-formed number
NUMBER_START_RE = re.compile(r"[+-]?\.?\d")

STRING_ESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
}

QUOTE_NODES = {
    "quote": Quote,
    "quasiquote": Quasiquote,
    "unquote": Unquote,
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    depth = 0
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            if source[pos:].strip():
                raise ReaderError(f"Unexpected char at {pos}: {source[pos]!r}")
            break
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            if m.group(nm) is None:
                continue
            if nm == "comment":
                break
            if nm == "open_string":
                raise IncompleteInput("Lexer error: can't find closing quote")
            if nm == "lparen":
                depth += 1
            elif nm == "rparen":
                if depth == 0:
                    raise ReaderError("Mismatched parenthesis: too many )s")
                depth -= 1
            yield nm, m.group(nm)
            break


def paren_depth(source: str) -> int:
    """Number of parentheses left open at the end of `source`.

    Unterminated strings count as an open expression; unbalanced closing
    parentheses are reported by lex().
    """
    depth = 0
    try:
        for tok_type, _ in lex(source):
            if tok_type == "lparen":
                depth += 1
            elif tok_type == "rparen":
                depth -= 1
    except IncompleteInput:
        return depth + 1
    return depth


def _read_string(token: str) -> str:
    body = token[1:-1]
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            esc = body[i + 1]
            if esc not in STRING_ESCAPES:
                raise ReaderError(f"Unrecognized escape character \\{esc}")
            out.append(STRING_ESCAPES[esc])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _read_atom(token: str) -> Expr:
    if token.lower() == "nil":
        return Nil
    if INT_RE.fullmatch(token):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if NUMBER_START_RE.match(token):
        raise ReaderError(f"Lexer: Invalid number: {token}")
    return Ident(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Expr | None:
        """Read one expression; None at end of input."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return _read_atom(tok_val)

        if tok_type == "string":
            self.advance()
            return _read_string(tok_val)

        # Quote forms
        if tok_type in QUOTE_NODES:
            self.advance()
            expr = self.parse_expr()
            if expr is None:
                raise IncompleteInput(f"Unexpected end of input after {tok_val!r}")
            return QUOTE_NODES[tok_type](expr)

        # List or dotted list
        if tok_type == "lparen":
            self.advance()
            items = []
            tail = Nil
            while True:
                nxt_type, nxt_val = self.peek()
                if nxt_type == "rparen":
                    self.advance()
                    break
                if nxt_type is None:
                    raise IncompleteInput("Unmatched '('")
                if nxt_type == "symbol" and nxt_val == "." and items:
                    self.advance()
                    tail = self.parse_expr()
                    if tail is None or self.peek()[0] is None:
                        raise IncompleteInput("Unmatched '('")
                    if self.peek()[0] != "rparen":
                        raise ReaderError("Expected ')' after dotted cdr")
                    self.advance()
                    break
                items.append(self.parse_expr())
            result = tail
            for item in reversed(items):
                result = Cons(item, result)
            return result

        if tok_type == "rparen":
            raise ReaderError("Mismatched parenthesis: too many )s")

        raise ReaderError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[Expr]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read_all(source: str) -> list[Expr]:
    """Read every top-level expression of `source`."""
    return list(TokenStream(lex(source)).parse_all())
