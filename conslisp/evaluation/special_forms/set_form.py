from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispMalformedFormError
from conslisp.types.environment import Environment
from conslisp.types.symbol import Symbol


def set_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 2:
        raise LispMalformedFormError("set requires exactly 2 arguments: (set var value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise LispMalformedFormError(f"set first argument must be a symbol, got {var_sym}")
    value = evaluate_fn(val_expr, env)
    env.set(var_sym, value)
    return value
