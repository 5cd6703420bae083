from __future__ import annotations

import logging
from typing import Iterable, Iterator, Literal, Union

from conslisp import SExpression, LispValue
from conslisp.errors import LispSyntaxError
from conslisp.reader.parser import parse
from conslisp.types.environment import Environment
from conslisp.builtin.env_builtin import default_env
from conslisp.evaluation.evaluator import eval_block

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating conslisp code.
    Maintains one root Environment across calls.

    Parse errors are dropped by default and only the forms that parsed are
    evaluated; pass skip_parse_errors=False to raise the first one instead.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        skip_parse_errors: bool = True,
        env: Environment | None = None,
    ):
        self.skip_parse_errors = skip_parse_errors
        self.env: Environment = env if env is not None else default_env()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import to avoid circular imports
                from conslisp.modules.prelude_loader import load_prelude
                load_prelude(self)
            except FileNotFoundError:
                logger.warning("No prelude found, starting with builtins only")
        elif prelude:
            self.eval_prelude(prelude)

    def read(self, code: str) -> Iterator[SExpression]:
        """Parse `code`, applying this interpreter's parse-error policy."""
        return filter_parse_errors(parse(code), skip=self.skip_parse_errors)

    def eval_prelude(self, code: str) -> None:
        # Prelude code is trusted: syntax errors in it are always raised.
        eval_block(self.env, filter_parse_errors(parse(code), skip=False))

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code` and return the value of the last one."""
        return eval_block(self.env, self.read(code))


def filter_parse_errors(
    results: Iterable[Union[SExpression, LispSyntaxError]], skip: bool = True
) -> Iterator[SExpression]:
    """Turn the reader's value-or-error stream into plain values.

    With `skip` errors are logged and dropped, otherwise the first is raised.
    """
    for result in results:
        if isinstance(result, LispSyntaxError):
            if not skip:
                raise result
            logger.debug("skipping unparsable form: %s", result)
            continue
        yield result
