from __future__ import annotations
from pathlib import Path
from typing import Protocol

from minilisp.config import get_prelude_path


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def load_file(itp: _HasEvalPrelude, path: Path) -> None:
    itp.eval_prelude(path.read_text(encoding='utf-8'))


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Evaluate the prelude (MINILISP_PRELUDE_PATH or the bundled core.lisp)."""
    path = get_prelude_path()
    if not path.is_file():
        raise FileNotFoundError(f"Cannot find prelude at '{path}'")
    load_file(itp, path)
