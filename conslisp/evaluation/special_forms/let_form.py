from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispMalformedFormError
from conslisp.types.cons_list import List
from conslisp.types.environment import Environment
from conslisp.types.symbol import Symbol
from conslisp.evaluation.special_forms.progn_form import progn_form


def let_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """
    (let ((name expr) ...) body...)
    Binding expressions are evaluated in the enclosing environment, then bound
    together in one child frame in which the body runs.
    """
    if not tail or not isinstance(tail[0], List):
        raise LispMalformedFormError("let requires a list of bindings")

    bindings: dict[Symbol, LispValue] = {}
    for binding in tail[0]:
        if not isinstance(binding, List) or len(binding) != 2:
            raise LispMalformedFormError(f"let binding must be (name value), got {binding}")
        name, val_expr = binding
        if not isinstance(name, Symbol):
            raise LispMalformedFormError(f"let binding name must be a symbol, got {name}")
        bindings[name] = evaluate_fn(val_expr, env)

    frame = env.child()
    frame.update(bindings)
    return progn_form(tail[1:], frame, evaluate_fn)
