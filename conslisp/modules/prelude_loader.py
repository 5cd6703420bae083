from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from conslisp.config import get_prelude_root

logger = logging.getLogger(__name__)

PRELUDE_FILES = ('core.lisp',)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def prelude_files() -> list[Path]:
    root = get_prelude_root()
    return [root / name for name in PRELUDE_FILES if (root / name).is_file()]


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Evaluate the prelude files found under the configured prelude root.

    Raises FileNotFoundError when none exist.
    """
    files = prelude_files()
    if not files:
        raise FileNotFoundError(f"No prelude found in {get_prelude_root()}")
    for path in files:
        logger.info("Loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding='utf-8'))
