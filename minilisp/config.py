from __future__ import annotations
import os
from pathlib import Path


# Resolve installation dir (minilisp package directory)
_MINILISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _MINILISP_DIR / 'prelude' / 'core.lisp'
_DEFAULT_LOG_LEVEL = 'ERROR'
# Each minilisp call level takes roughly 14 Python frames
_DEFAULT_RECURSION_LIMIT = 10000


def path_from_env(var: str, default: Path) -> Path:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip())


def get_prelude_path() -> Path:
    # a directory means <dir>/core.lisp
    p = path_from_env('MINILISP_PRELUDE_PATH', _DEFAULT_PRELUDE)
    return p / 'core.lisp' if p.is_dir() else p


def get_log_level() -> str:
    return os.environ.get('MINILISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper() or _DEFAULT_LOG_LEVEL


def get_recursion_limit() -> int:
    raw = os.environ.get('MINILISP_RECURSION_LIMIT', '').strip()
    return int(raw) if raw else _DEFAULT_RECURSION_LIMIT
