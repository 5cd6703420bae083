from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispMalformedFormError
from conslisp.types.cons_list import NIL
from conslisp.types.environment import Environment
from conslisp.types.value import is_truthy


def if_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(if test then [else]); without an else branch a false test yields NIL."""
    if len(tail) not in (2, 3):
        raise LispMalformedFormError("if requires a condition, a then-expression and an optional else-expression")

    if is_truthy(evaluate_fn(tail[0], env)):
        return evaluate_fn(tail[1], env)
    if len(tail) == 3:
        return evaluate_fn(tail[2], env)
    return NIL
