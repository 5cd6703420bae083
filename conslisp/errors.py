from __future__ import annotations


class LispError(Exception):
    """ Base class for all conslisp errors"""

    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class LispEmptyListError(LispError):
    """ Raised when car is taken of, or NIL is applied as, the empty list"""

    kind = "EmptyListAccess"


class LispUnboundSymbolError(LispError):
    """ Raised when a symbol is looked up or set before it is bound"""

    kind = "UnboundSymbol"

    def __init__(self, message: str, symbol=None):
        super().__init__(message)
        self.symbol = symbol


class LispArityError(LispError):
    """ Raised when the number of arguments passed to a function is incorrect"""

    kind = "ArityMismatch"

    def __init__(self, message: str, expected: int | None = None, actual: int | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class LispNotCallableError(LispError):
    """ Raised when the head of an application is not a procedure"""

    kind = "NotCallable"


class LispMalformedFormError(LispError):
    """ Raised when a special form does not have the expected shape"""

    kind = "MalformedSpecialForm"


class LispTypeError(LispError):
    """ Raised when the types of arguments passed to a primitive are incorrect"""

    kind = "TypeError"


class LispSyntaxError(LispError):
    """ Raised (or yielded) by the reader when source text cannot be parsed"""

    kind = "ParseError"

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position
