"""Operations over the closed set of runtime value variants.

Variants and their Python types: NIL and List (`List`), Boolean (`bool`),
Integer (`int`), Float (`float`), String (`str`), Symbol (`Symbol`), Lambda
and Macro (`Lambda`, `Macro`) and Primitive (`Primitive`).
"""

from __future__ import annotations

from itertools import zip_longest

from conslisp import LispValue
from conslisp.types.cons_list import List, values_equal
from conslisp.types.lambda_fn import Lambda, Macro
from conslisp.types.primitive import Primitive
from conslisp.types.symbol import Symbol

__all__ = ["values_equal", "deep_equal", "is_truthy", "to_string", "type_name", "is_callable"]

_MISSING = object()


def deep_equal(a: LispValue, b: LispValue) -> bool:
    """Element-wise equality that, unlike `values_equal`, also compares tails."""
    if isinstance(a, List) and isinstance(b, List):
        if a.is_same(b):
            return True
        for x, y in zip_longest(a, b, fillvalue=_MISSING):
            if x is _MISSING or y is _MISSING:
                return False
            if not deep_equal(x, y):
                return False
        return True
    return values_equal(a, b)


def is_truthy(value: LispValue) -> bool:
    """Only F and NIL are false."""
    if value is False:
        return False
    return not (isinstance(value, List) and not value)


def is_callable(value: LispValue) -> bool:
    return isinstance(value, (Lambda, Primitive)) and not isinstance(value, Macro)


# Backslash first so later escapes are not doubled; mirrors the reader's ESCAPES.
_ESCAPES = (("\\", "\\\\"), ('"', '\\"'), ("\n", "\\n"), ("\r", "\\r"), ("\t", "\\t"))


def _escape(text: str) -> str:
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def to_string(value: LispValue, readable: bool = True) -> str:
    """Canonical textual rendering of a value.

    With `readable=False` strings are written raw, as `print` shows them.
    """
    match value:
        case bool():
            return "T" if value else "F"
        case str():
            return f'"{_escape(value)}"' if readable else value
        case List() | Symbol() | Lambda() | Primitive():
            return str(value)
        case int() | float():
            return repr(value)
        case _:
            return str(value)


def type_name(value: LispValue) -> str:
    match value:
        case bool():
            return "boolean"
        case int():
            return "integer"
        case float():
            return "float"
        case str():
            return "string"
        case Symbol():
            return "symbol"
        case List() if not value:
            return "nil"
        case List():
            return "list"
        case Macro():
            return "macro"
        case Lambda():
            return "lambda"
        case Primitive():
            return "primitive"
        case _:
            return type(value).__name__
