"""Logging setup for the conslisp command line.

Only the `conslisp` logger tree is configured; the root logger is left to the
embedding application.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Send conslisp log records to `log_file`, or to stderr so they never mix
    with evaluation results on stdout. Calling it again replaces the handler.
    """
    global _handler
    logger = logging.getLogger("conslisp")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)

    logger.info("Logging initialized at %s level", logging.getLevelName(logger.level))
    return logger
