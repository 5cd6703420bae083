"""Application engine for conslisp.

This module centralizes function application semantics for the interpreter:
- Lambdas: fixed arity, a fresh frame whose parent is the *captured*
  environment (lexical scoping), body evaluated in that frame.
- Macros: the same binding rules applied to unevaluated argument forms.
- Primitives: called with the evaluated arguments and the caller's env.

Keeping this logic in one place prevents duplication between the evaluator
and builtins such as `apply`.
"""

from __future__ import annotations

from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispArityError, LispNotCallableError
from conslisp.types.environment import Environment
from conslisp.types.lambda_fn import Lambda, Macro
from conslisp.types.primitive import Primitive
from conslisp.types.value import to_string


def bind_arguments(fn: Lambda, args: list[LispValue]) -> Environment:
    """Check arity and bind `args` to the formals of `fn` in a new frame.

    The new frame's parent is the closure's captured environment, never the
    caller's.
    """
    expected = len(fn.argnames)
    actual = len(args)
    if actual != expected:
        raise LispArityError(
            f"Expected {expected} argument{'s' if expected != 1 else ''}, got {actual}",
            expected=expected,
            actual=actual,
        )
    frame = fn.closure.child()
    frame.update(dict(zip(fn.argnames, args)))
    return frame


def apply_lambda(fn: Lambda, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply a Lisp Lambda value to already-evaluated arguments."""
    return evaluate_fn(fn.body, bind_arguments(fn, args))


def expand_macro(macro: Macro, forms: list[SExpression], evaluate_fn: EvaluatorFn) -> SExpression:
    """Run a macro body over unevaluated `forms`, returning the expansion."""
    return evaluate_fn(macro.body, bind_arguments(macro, forms))


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Primitive.

    - For Lambda, defer to apply_lambda.
    - For Primitive, invoke with the runtime env and list of args.
    - Otherwise, raise LispNotCallableError.
    """
    if isinstance(head, Lambda) and not isinstance(head, Macro):
        return apply_lambda(head, args, evaluate_fn)
    if isinstance(head, Primitive):
        return head(env, args)
    raise LispNotCallableError(f"{to_string(head)} is not callable")
