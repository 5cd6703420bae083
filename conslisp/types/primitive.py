from __future__ import annotations

from typing import Callable

from conslisp import LispValue
from conslisp.types.environment import Environment

PrimitiveFn = Callable[[Environment, list[LispValue]], LispValue]


class Primitive:
    """A host-provided procedure with a name.

    The wrapped function is called as fn(env, args) with the already evaluated
    arguments and the environment of the call site.
    """

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: PrimitiveFn):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        return self.fn(env, args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Primitive):
            return NotImplemented
        return self.name == other.name and self.fn is other.fn

    def __hash__(self) -> int:
        return hash(("primitive", self.name, id(self.fn)))

    def __str__(self) -> str:
        return f"<primitive {self.name}>"

    __repr__ = __str__
