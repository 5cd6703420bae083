from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (conslisp package directory)
_CONSLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _CONSLISP_DIR / 'prelude'
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_RECURSION_LIMIT = 10000


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('CONSLISP_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; a file path resolves to its parent
    p = roots[0]
    return p.parent if p.is_file() else p


def get_log_level() -> str:
    return os.environ.get('CONSLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_recursion_limit() -> int:
    raw = os.environ.get('CONSLISP_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"CONSLISP_RECURSION_LIMIT must be an integer, got {raw!r}") from None
