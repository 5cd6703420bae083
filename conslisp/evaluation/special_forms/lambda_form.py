from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispMalformedFormError
from conslisp.types.cons_list import List
from conslisp.types.environment import Environment
from conslisp.types.lambda_fn import Lambda
from conslisp.types.symbol import Symbol

BEGIN = Symbol("begin")


def parse_params(form_name: str, params: SExpression) -> list[Symbol]:
    """Validate a parameter list form and return its symbols."""
    if not isinstance(params, List):
        raise LispMalformedFormError(f"{form_name} expects a parameter list, got {params}")
    argnames = list(params)
    for name in argnames:
        if not isinstance(name, Symbol):
            raise LispMalformedFormError(f"{form_name} parameters must be symbols, got {name}")
    return argnames


def make_body(body_forms: list[SExpression]) -> SExpression:
    # Zero or several body forms become an implicit (begin ...)
    if len(body_forms) == 1:
        return body_forms[0]
    return List.from_iterable([BEGIN, *body_forms])


def make_procedure(
    cls: type[Lambda], form_name: str, tail: list[SExpression], env: Environment
) -> Lambda:
    """Build a Lambda (or Macro) from `((params...) body...)`, capturing `env`."""
    if not tail:
        raise LispMalformedFormError(f"{form_name} requires at least a parameter list")
    argnames = parse_params(form_name, tail[0])
    return cls(env, argnames, make_body(tail[1:]))


def lambda_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    return make_procedure(Lambda, "lambda", tail, env)
