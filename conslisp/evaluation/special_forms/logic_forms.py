from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.types.environment import Environment
from conslisp.types.value import is_truthy


def and_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right until a falsey value
    (F or NIL) is found, which is returned immediately. If all operands are
    truthy, returns the value of the last operand. With zero operands, returns T.
    """
    result: LispValue = True
    for expr in tail:
        result = evaluate_fn(expr, env)
        if not is_truthy(result):
            return result
    return result


def or_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns the first
    truthy value. If none are truthy, returns F. With zero operands, returns F.
    """
    for expr in tail:
        val = evaluate_fn(expr, env)
        if is_truthy(val):
            return val
    return False
