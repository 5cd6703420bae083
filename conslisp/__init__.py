# Core type aliases for the conslisp data model.
# Runtime values are a closed set of Python types: NIL / List (shared cons cells),
# bool, int, float, str, Symbol, Lambda, Macro and Primitive. Code is data: a
# parsed form is just a Value, usually a List.
#
# Naming guidance:
# - SExpression: Use in reader/special-form code to denote unevaluated forms.
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
LispValue = Any
# Forms alias (code-as-data, same representation as values)
SExpression = LispValue

# Evaluator function type passed into special forms
EvaluatorFn = Callable[..., LispValue]
