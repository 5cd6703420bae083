"""Command line entry point: one-shot evaluation or a minimal read-eval-print loop."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from conslisp import __version__
from conslisp.config import get_log_level, get_recursion_limit
from conslisp.errors import LispError
from conslisp.interpreter import Interpreter
from conslisp.logging_config import setup_logging
from conslisp.types.value import to_string

logger = logging.getLogger(__name__)

PROMPT = "> "
RECURSION_MESSAGE = "RecursionError: maximum recursion depth exceeded"


def format_error(err: LispError) -> str:
    return f"{err.kind}: {err.message}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="conslisp", description="A small Lisp interpreter.")
    parser.add_argument("code", nargs="?", help="evaluate CODE and print the result; omit for a REPL")
    parser.add_argument("--log-level", default=None, help="logging level (default: $CONSLISP_LOG_LEVEL or WARNING)")
    parser.add_argument("--log-file", default=None, help="write logs to this file instead of stderr")
    parser.add_argument("--no-prelude", action="store_true", help="start with builtins only")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def repl(interp: Interpreter) -> None:
    """Read lines until EOF, printing each result or error."""
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return
        except KeyboardInterrupt:
            print()
            continue
        if not line.strip():
            continue
        try:
            print(to_string(interp.eval(line)))
        except LispError as e:
            print(format_error(e))
        except RecursionError:
            print(RECURSION_MESSAGE)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or get_log_level(), args.log_file)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    interp = Interpreter(prelude=None if args.no_prelude else 'auto')

    if args.code is None:
        logger.info("Starting REPL")
        repl(interp)
        return 0

    try:
        print(to_string(interp.eval(args.code)))
    except LispError as e:
        print(format_error(e), file=sys.stderr)
        return 1
    except RecursionError:
        print(RECURSION_MESSAGE, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
