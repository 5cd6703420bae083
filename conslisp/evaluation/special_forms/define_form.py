from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispMalformedFormError
from conslisp.types.cons_list import NIL
from conslisp.types.environment import Environment
from conslisp.types.lambda_fn import Lambda, Macro
from conslisp.types.symbol import Symbol
from conslisp.evaluation.special_forms.lambda_form import make_procedure


def define_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """
    (define name value)
    Binds in the current frame only; an existing binding there is overwritten.
    """
    if len(tail) != 2:
        raise LispMalformedFormError("define requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise LispMalformedFormError(f"define expects a symbol name, got {name}")
    env.define(name, evaluate_fn(val_expr, env))
    return NIL


def _define_procedure(cls: type[Lambda], form_name: str, tail: list[SExpression], env: Environment) -> LispValue:
    if len(tail) < 2:
        raise LispMalformedFormError(f"{form_name} requires a name and a parameter list")
    name = tail[0]
    if not isinstance(name, Symbol):
        raise LispMalformedFormError(f"{form_name} expects a symbol name, got {name}")
    env.define(name, make_procedure(cls, form_name, tail[1:], env))
    return NIL


def defun_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(defun name (params...) body...) is (define name (lambda (params...) body...))."""
    return _define_procedure(Lambda, "defun", tail, env)


def defmacro_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """
    (defmacro name (params...) body...)
    The body runs over the unevaluated argument forms and must return the form
    that replaces the macro call.
    """
    return _define_procedure(Macro, "defmacro", tail, env)
