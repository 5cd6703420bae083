"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy parsing: one top-level form at a time
- Emits runtime values directly, since code is data:

    - lists -> List (fresh cons cells)
    - integers / floats -> int / float
    - T, F, #t, #f -> bool
    - strings -> str
    - everything else -> Symbol (including `nil`, which the default
      environment binds to NIL)
    - 'x -> (quote x)
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional, Union

from conslisp import SExpression
from conslisp.errors import LispSyntaxError
from conslisp.types.cons_list import List, NIL
from conslisp.types.symbol import Symbol

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # quote shorthand
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s()\'";]+)'  # fallback: atoms
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"[+-]?\d+\Z")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?\Z")
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

BOOLEANS: dict[str, bool] = {
    "T": True,
    "F": False,
    "#t": True,
    "#f": False,
}

QUOTE = Symbol("quote")


def lex(source: str) -> Iterator[tuple[str, str, int]]:
    """Token generator: yields (token_type, token_value, position) tuples.

    Comments are dropped. An unreadable character raises LispSyntaxError,
    which ends the token stream.
    """
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos] == '"':
                raise LispSyntaxError(f"Unterminated string starting at {pos}", position=pos)
            raise LispSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}", position=pos)
        start = m.start(1)
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in ("quote", "lparen", "rparen", "string", "symbol"):
            if m.group(nm) is not None:
                yield nm, m.group(nm), start
                break


def read_atom(text: str) -> SExpression:
    if text in BOOLEANS:
        return BOOLEANS[text]
    if INT_RE.match(text):
        return int(text)
    if FLOAT_RE.match(text):
        return float(text)
    return Symbol(text)


def read_string(token: str) -> str:
    return ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(1)), token[1:-1])


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str, int]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str, int]] = []

    def peek(self) -> tuple[Optional[str], Optional[str], int]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, -1
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], int]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, -1))

    def parse_expr(self) -> SExpression:
        tok_type, tok_val, pos = self.advance()

        if tok_type is None:
            raise LispSyntaxError("Unexpected end of input")

        if tok_type == "symbol":
            return read_atom(tok_val)

        if tok_type == "string":
            return read_string(tok_val)

        # Quote shorthand
        if tok_type == "quote":
            if self.peek()[0] is None:
                raise LispSyntaxError("Expected an expression after quote", position=pos)
            return List.from_iterable([QUOTE, self.parse_expr()])

        if tok_type == "lparen":
            items = []
            while True:
                next_type = self.peek()[0]
                if next_type == "rparen":
                    self.advance()
                    break
                if next_type is None:
                    raise LispSyntaxError(f"Unmatched '(' at {pos}", position=pos)
                items.append(self.parse_expr())
            return List.from_iterable(items) if items else NIL

        if tok_type == "rparen":
            raise LispSyntaxError(f"Unexpected ')' at {pos}", position=pos)

        raise LispSyntaxError(f"Unknown token: {tok_type} {tok_val}", position=pos)

    def parse_all(self) -> Iterator[SExpression]:
        """Yield every remaining form, raising on the first syntax error."""
        while self.peek()[0] is not None:
            yield self.parse_expr()


def parse(source: str) -> Iterator[Union[SExpression, LispSyntaxError]]:
    """Lazily read `source`, yielding one result per top-level form.

    Each result is either the parsed value or the LispSyntaxError describing
    why that form could not be read; errors are yielded, not raised, so the
    caller decides whether to skip them. Reading continues after a stray ')'
    and stops after an unterminated list or an unreadable character.
    """
    stream = TokenStream(lex(source))
    while True:
        try:
            if stream.peek()[0] is None:
                return
            expr = stream.parse_expr()
        except LispSyntaxError as e:
            logger.debug("parse error: %s", e)
            yield e
            continue
        yield expr
