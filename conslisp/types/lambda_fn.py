"""Closure representation for conslisp: Lambda and its syntactic sibling Macro."""

from __future__ import annotations

from io import StringIO
from typing import Iterable

from conslisp import SExpression
from conslisp.types.cons_list import values_equal
from conslisp.types.environment import Environment
from conslisp.types.symbol import Symbol


class Lambda:
    """A Lisp function defined in Lisp.

    Holds a reference to (not a copy of) the environment it was created in,
    so mutations of that scope made after creation are seen by every call.
    """

    __slots__ = ("closure", "argnames", "body")

    def __init__(self, closure: Environment, argnames: Iterable[Symbol], body: SExpression):
        self.closure: Environment = closure
        self.argnames: tuple[Symbol, ...] = tuple(argnames)
        self.body: SExpression = body

    @property
    def arity(self) -> int:
        return len(self.argnames)

    def __eq__(self, other: object) -> bool:
        # Closures are compared by identity: two frames with the same contents
        # are still different scopes.
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.closure is other.closure
            and self.argnames == other.argnames
            and values_equal(self.body, other.body)
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, id(self.closure), self.argnames, self.body))

    def __str__(self) -> str:
        from conslisp.types.cons_list import List
        from conslisp.types.value import to_string

        body_str = to_string(self.body)
        if isinstance(self.body, List) and self.body:
            body_str = body_str[1:-1]
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(" ".join(str(a) for a in self.argnames))
            buffer.write(") ")
            buffer.write(body_str)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class Macro(Lambda):
    """A Lisp macro: applied to unevaluated forms, returns a form to evaluate."""

    __slots__ = ()
