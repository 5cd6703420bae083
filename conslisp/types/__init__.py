from conslisp.types.symbol import Symbol
from conslisp.types.cons_list import ConsCell, List, NIL, cons, car, cdr
from conslisp.types.environment import Environment
from conslisp.types.lambda_fn import Lambda, Macro
from conslisp.types.primitive import Primitive
from conslisp.types.value import values_equal, deep_equal, is_truthy, to_string, type_name

__all__ = [
    "Symbol",
    "ConsCell",
    "List",
    "NIL",
    "cons",
    "car",
    "cdr",
    "Environment",
    "Lambda",
    "Macro",
    "Primitive",
    "values_equal",
    "deep_equal",
    "is_truthy",
    "to_string",
    "type_name",
]
