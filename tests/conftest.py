import logging

import pytest

from conslisp.builtin.env_builtin import default_env
from conslisp.interpreter import Interpreter


@pytest.fixture(autouse=True)
def reset_conslisp_logging():
    """Drop handlers the CLI installs so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("conslisp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def env():
    """A fresh root environment with the builtins registered."""
    return default_env()


@pytest.fixture
def interp():
    """An interpreter without the Lisp prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def interp_with_prelude():
    return Interpreter()
