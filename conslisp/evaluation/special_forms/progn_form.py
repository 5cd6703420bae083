from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.types.cons_list import NIL
from conslisp.types.environment import Environment


def progn_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    result: LispValue = NIL
    for e in tail:
        result = evaluate_fn(e, env)
    return result
