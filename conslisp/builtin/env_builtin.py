"""Built-in primitives for the conslisp runtime environment.

This module defines core arithmetic, comparison, list processing (including
the destructive set-car!/set-cdr!), predicates, application helpers and the
registration utilities that build a default root environment.
Every primitive is called as fn(env, args) with already evaluated arguments.
"""
from __future__ import annotations

import sys
from functools import cmp_to_key
from typing import Callable

from conslisp import LispValue
from conslisp.errors import LispArityError, LispTypeError
from conslisp.types.cons_list import List, NIL
from conslisp.types.environment import Environment
from conslisp.types.lambda_fn import Lambda, Macro
from conslisp.types.primitive import Primitive
from conslisp.types.symbol import Symbol
from conslisp.types.value import deep_equal, is_callable, is_truthy, to_string, type_name, values_equal
from conslisp.evaluation.apply import apply as apply_engine
from conslisp.evaluation.evaluator import evaluate


def _require(name: str, args: list[LispValue], count: int) -> None:
    if len(args) != count:
        raise LispArityError(
            f"{name} requires exactly {count} argument{'s' if count != 1 else ''}, got {len(args)}",
            expected=count,
            actual=len(args),
        )


def _require_at_least(name: str, args: list[LispValue], count: int) -> None:
    if len(args) < count:
        raise LispArityError(
            f"{name} requires at least {count} argument{'s' if count != 1 else ''}, got {len(args)}",
            expected=count,
            actual=len(args),
        )


def _is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _numbers(name: str, args: list[LispValue]) -> list[LispValue]:
    for x in args:
        if not _is_number(x):
            raise LispTypeError(f"All arguments to {name} must be numbers, got {type_name(x)} {to_string(x)}")
    return args


def _list_arg(name: str, x: LispValue) -> List:
    if not isinstance(x, List):
        raise LispTypeError(f"{name} expects a list, got {type_name(x)} {to_string(x)}")
    return x


def _int_arg(name: str, x: LispValue) -> int:
    if not isinstance(x, int) or isinstance(x, bool):
        raise LispTypeError(f"{name} expects an integer, got {type_name(x)} {to_string(x)}")
    return x


def _procedure_arg(name: str, x: LispValue) -> LispValue:
    if not is_callable(x):
        raise LispTypeError(f"{name} expects a procedure, got {type_name(x)} {to_string(x)}")
    return x


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments (0 with none)."""
    return sum(_numbers("+", args))


def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _require_at_least("-", args, 1)
    first, *rest = _numbers("-", args)
    if not rest:
        return -first
    for x in rest:
        first -= x
    return first


def mul(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the product of all arguments (1 with none)."""
    result = 1
    for x in _numbers("*", args):
        result *= x
    return result


def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Divide left-to-right. Integers divide exactly when they can, else give a float."""
    _require_at_least("/", args, 1)
    first, *rest = _numbers("/", args)
    if not rest:
        first, rest = 1, [first]
    for x in rest:
        if x == 0:
            raise LispTypeError("Division by zero")
        if isinstance(first, int) and isinstance(x, int) and first % x == 0:
            first //= x
        else:
            first /= x
    return first


def truncate(env: Environment, args: list[LispValue]) -> LispValue:
    """(truncate a b) -> integer quotient rounded towards zero."""
    _require("truncate", args, 2)
    a, b = _numbers("truncate", args)
    if b == 0:
        raise LispTypeError("Division by zero")
    if isinstance(a, int) and isinstance(b, int):
        q = abs(a) // abs(b)
        return q if (a >= 0) == (b >= 0) else -q
    return int(a / b)


def mod(env: Environment, args: list[LispValue]) -> LispValue:
    """(mod n d) => n % d. Exactly 2 integer arguments."""
    _require("mod", args, 2)
    n, d = (_int_arg("mod", x) for x in args)
    if d == 0:
        raise LispTypeError("Modulo by zero")
    return n % d


# -------------------------------
# Comparison and logic
# -------------------------------
def _chain(name: str, test: Callable[[LispValue, LispValue], bool]) -> Callable:
    def compare(env: Environment, args: list[LispValue]) -> bool:
        _numbers(name, args)
        return all(test(a, b) for a, b in zip(args, args[1:]))

    compare.__doc__ = f"Chainable {name}: T if it holds for every adjacent pair."
    return compare


def equals(env: Environment, args: list[LispValue]) -> bool:
    """T if all arguments are equal (or zero/one arg), else F."""
    return all(values_equal(args[0], other) for other in args[1:])


def not_equals(env: Environment, args: list[LispValue]) -> bool:
    return not equals(env, args)


def logical_not(env: Environment, args: list[LispValue]) -> bool:
    """Logical NOT for a single value; only F and NIL are considered falsey."""
    _require("not", args, 1)
    return not is_truthy(args[0])


def eq(env: Environment, args: list[LispValue]) -> bool:
    """(eq? a b) -> identity; two lists are eq? only if they share a head cell."""
    _require("eq?", args, 2)
    a, b = args
    if isinstance(a, List) and isinstance(b, List):
        return a.is_same(b)
    if isinstance(a, (List, Lambda, Primitive)) or isinstance(b, (List, Lambda, Primitive)):
        return a is b
    return values_equal(a, b)


def equal(env: Environment, args: list[LispValue]) -> bool:
    """(equal? a b) -> full structural comparison, tails included."""
    _require("equal?", args, 2)
    return deep_equal(*args)


# -------------------------------
# Lists
# -------------------------------
def cons(env: Environment, args: list[LispValue]) -> List:
    """(cons x xs) -> new head cell holding x in front of the (shared) list xs."""
    _require("cons", args, 2)
    head, tail = args
    return _list_arg("cons", tail).cons(head)


def car(env: Environment, args: list[LispValue]) -> LispValue:
    _require("car", args, 1)
    return _list_arg("car", args[0]).car()


def cdr(env: Environment, args: list[LispValue]) -> List:
    _require("cdr", args, 1)
    return _list_arg("cdr", args[0]).cdr()


def set_car(env: Environment, args: list[LispValue]) -> LispValue:
    """(set-car! xs v) rewrites the head item of xs in place; returns v."""
    _require("set-car!", args, 2)
    xs, value = args
    _list_arg("set-car!", xs).set_car(value)
    return value


def set_cdr(env: Environment, args: list[LispValue]) -> List:
    """(set-cdr! xs ys) relinks the head cell of xs to ys in place; returns xs.

    Every list sharing that cell observes the change.
    """
    _require("set-cdr!", args, 2)
    xs, ys = args
    _list_arg("set-cdr!", xs).set_cdr(_list_arg("set-cdr!", ys))
    return xs


def list_builtin(env: Environment, args: list[LispValue]) -> List:
    """Construct a list from the provided arguments."""
    return List.from_iterable(args)


def length(env: Environment, args: list[LispValue]) -> int:
    _require("length", args, 1)
    return len(_list_arg("length", args[0]))


def nth(env: Environment, args: list[LispValue]) -> LispValue:
    """(nth i xs) -> the i-th item (zero based), NIL past the end."""
    _require("nth", args, 2)
    index = _int_arg("nth", args[0])
    for i, item in enumerate(_list_arg("nth", args[1])):
        if i == index:
            return item
    return NIL


def reverse(env: Environment, args: list[LispValue]) -> List:
    _require("reverse", args, 1)
    result = NIL
    for item in _list_arg("reverse", args[0]):
        result = result.cons(item)
    return result


def append(env: Environment, args: list[LispValue]) -> List:
    """Concatenate lists. All but the last are copied; the last is shared."""
    if not args:
        return NIL
    *init, last = args
    items = [item for xs in init for item in _list_arg("append", xs)]
    result = _list_arg("append", last)
    for item in reversed(items):
        result = result.cons(item)
    return result


def map_builtin(env: Environment, args: list[LispValue]) -> List:
    """(map f xs) -> list of (f x) for every x."""
    _require("map", args, 2)
    fn = _procedure_arg("map", args[0])
    return List.from_iterable(
        apply_engine(fn, [item], env, evaluate) for item in _list_arg("map", args[1])
    )


def filter_builtin(env: Environment, args: list[LispValue]) -> List:
    """(filter pred xs) -> the items for which (pred x) is truthy."""
    _require("filter", args, 2)
    fn = _procedure_arg("filter", args[0])
    return List.from_iterable(
        item
        for item in _list_arg("filter", args[1])
        if is_truthy(apply_engine(fn, [item], env, evaluate))
    )


def range_builtin(env: Environment, args: list[LispValue]) -> List:
    """(range start end) -> integers from start up to, not including, end."""
    _require("range", args, 2)
    start, end = (_int_arg("range", x) for x in args)
    return List.from_iterable(range(start, end))


def sort_builtin(env: Environment, args: list[LispValue]) -> List:
    """(sort xs) sorts numbers or strings ascending; (sort xs less?) uses a predicate."""
    if len(args) not in (1, 2):
        raise LispArityError(f"sort requires 1 or 2 arguments, got {len(args)}", actual=len(args))
    items = list(_list_arg("sort", args[0]))
    if len(args) == 2:
        less = _procedure_arg("sort", args[1])

        def compare(a: LispValue, b: LispValue) -> int:
            if is_truthy(apply_engine(less, [a, b], env, evaluate)):
                return -1
            if is_truthy(apply_engine(less, [b, a], env, evaluate)):
                return 1
            return 0

        return List.from_iterable(sorted(items, key=cmp_to_key(compare)))
    try:
        return List.from_iterable(sorted(items))
    except TypeError:
        raise LispTypeError("sort without a predicate needs numbers or strings of one kind")


# -------------------------------
# Predicates
# -------------------------------
def _predicate(name: str, test: Callable[[LispValue], bool]) -> Callable:
    def check(env: Environment, args: list[LispValue]) -> bool:
        _require(name, args, 1)
        return test(args[0])

    return check


PREDICATES: dict[str, Callable[[LispValue], bool]] = {
    "null?": lambda x: isinstance(x, List) and not x,
    "number?": _is_number,
    "integer?": lambda x: isinstance(x, int) and not isinstance(x, bool),
    "float?": lambda x: isinstance(x, float),
    "string?": lambda x: isinstance(x, str),
    "symbol?": lambda x: isinstance(x, Symbol),
    "boolean?": lambda x: isinstance(x, bool),
    "list?": lambda x: isinstance(x, List),
    "procedure?": is_callable,
    "macro?": lambda x: isinstance(x, Macro),
}


# -------------------------------
# I/O and meta
# -------------------------------
def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Print space-separated renderings of args followed by newline; returns the last arg."""
    sys.stdout.write(" ".join(to_string(a, readable=False) for a in args) + "\n")
    return args[-1] if args else NIL


def eval_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(eval form) evaluates a data value as code in the caller's environment."""
    _require("eval", args, 1)
    return evaluate(args[0], env)


def apply_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(apply f xs) calls f with the items of xs as arguments."""
    _require("apply", args, 2)
    fn, xs = args
    return apply_engine(fn, list(_list_arg("apply", xs)), env, evaluate)


PRIMITIVES: dict[str, Callable[[Environment, list[LispValue]], LispValue]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "truncate": truncate,
    "mod": mod,
    "==": equals,
    "=": equals,
    "!=": not_equals,
    "<": _chain("<", lambda a, b: a < b),
    "<=": _chain("<=", lambda a, b: a <= b),
    ">": _chain(">", lambda a, b: a > b),
    ">=": _chain(">=", lambda a, b: a >= b),
    "not": logical_not,
    "eq?": eq,
    "equal?": equal,
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "set-car!": set_car,
    "set-cdr!": set_cdr,
    "list": list_builtin,
    "length": length,
    "nth": nth,
    "reverse": reverse,
    "append": append,
    "map": map_builtin,
    "filter": filter_builtin,
    "range": range_builtin,
    "sort": sort_builtin,
    "print": print_builtin,
    "eval": eval_builtin,
    "apply": apply_builtin,
    **{name: _predicate(name, test) for name, test in PREDICATES.items()},
}


def register(env: Environment) -> None:
    """Register all builtin primitives and constants into the given environment."""
    env.update({Symbol(name): Primitive(name, fn) for name, fn in PRIMITIVES.items()})
    env.define(Symbol("nil"), NIL)
    env.define(Symbol("NIL"), NIL)


def default_env() -> Environment:
    """Return a fresh root environment populated with the builtins."""
    env = Environment()
    register(env)
    return env
