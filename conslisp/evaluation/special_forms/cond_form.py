from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispMalformedFormError
from conslisp.types.cons_list import List, NIL
from conslisp.types.environment import Environment
from conslisp.types.symbol import Symbol
from conslisp.types.value import is_truthy
from conslisp.evaluation.special_forms.progn_form import progn_form

ELSE = Symbol("else")


def cond_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """
    (cond (test body...) ...)
    Runs the body of the first clause whose test is truthy. A clause without a
    body yields its test value; `else` as a test always matches. NIL if no
    clause matches.
    """
    for clause in tail:
        if not isinstance(clause, List) or not clause:
            raise LispMalformedFormError(f"cond clause must be a non-empty list, got {clause}")
        test, *body = clause
        value = True if test == ELSE else evaluate_fn(test, env)
        if is_truthy(value):
            return progn_form(body, env, evaluate_fn) if body else value
    return NIL
