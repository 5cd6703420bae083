"""Core evaluator for the conslisp interpreter.

Interprets a Value as code against an Environment: symbols are looked up,
lists are special forms or applications, everything else evaluates to
itself. Evaluation is plain recursion; errors are LispError exceptions and
propagate to the caller untouched.
"""

from __future__ import annotations

import logging
from typing import Iterable

from conslisp import SExpression, LispValue
from conslisp.errors import LispEmptyListError
from conslisp.types.cons_list import List, NIL
from conslisp.types.environment import Environment
from conslisp.types.lambda_fn import Macro
from conslisp.types.symbol import Symbol
from conslisp.evaluation.apply import apply, expand_macro
from conslisp.evaluation.special_forms import SPECIAL_FORMS

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate a single form in `env` and return its value."""
    match expr:
        case Symbol():
            return env.lookup(expr)

        case List() if not expr:
            raise LispEmptyListError("Attempted to apply nil")

        case List():
            head = expr.car()
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](list(expr.cdr()), env, evaluate)

            fn = evaluate(head, env)

            # Macros receive their argument forms unevaluated; the form they
            # return is evaluated where the macro was used.
            if isinstance(fn, Macro):
                expansion = expand_macro(fn, list(expr.cdr()), evaluate)
                logger.debug("macro %s expanded to %s", head, expansion)
                return evaluate(expansion, env)

            args = [evaluate(arg, env) for arg in expr.cdr()]
            return apply(fn, args, env, evaluate)

    # --- Atoms return as-is ---
    return expr


def eval_block(env: Environment, exprs: Iterable[SExpression]) -> LispValue:
    """Evaluate forms in order in one environment and return the last value.

    The first error aborts the block; later forms are not evaluated. An
    empty block evaluates to NIL.
    """
    result: LispValue = NIL
    for expr in exprs:
        logger.debug("eval_block form: %s", expr)
        result = evaluate(expr, env)
    return result
