"""Command line entry point: run minilisp files, or start a REPL.

    python -m minilisp [--verbose] [--no-prelude] [FILE ...]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from minilisp import __version__
from minilisp.debug_utils.pprint import to_string
from minilisp.errors import ReaderError
from minilisp.interpreter import Interpreter
from minilisp.log import configure_logging
from minilisp.reader.parser import paren_depth

logger = logging.getLogger(__name__)

PROMPT = "minilisp> "
CONTINUATION_PROMPT = "... "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minilisp", description="A small Lisp with minimal closure capture and macros"
    )
    parser.add_argument("files", nargs="*", help="source files to evaluate in order")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug diagnostics")
    parser.add_argument("--no-prelude", action="store_true", help="do not load the core prelude")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_files(interp: Interpreter, paths: Sequence[str]) -> int:
    """Evaluate each file; 1 if any form failed or a file could not be read."""
    status = 0
    for path in paths:
        before = len(interp.failures)
        try:
            interp.eval_file(path)
        except (OSError, ReaderError) as err:
            logger.error("%s: %s", path, err)
            status = 1
            continue
        if len(interp.failures) > before:
            status = 1
    return status


def repl(interp: Interpreter, stdin=None, stdout=None) -> int:
    """Read-eval-print loop. Lines are buffered until parentheses balance."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    buffer = ""
    while True:
        stdout.write(CONTINUATION_PROMPT if buffer else PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return 0
        buffer += line
        if not buffer.strip():
            buffer = ""
            continue
        try:
            if paren_depth(buffer) > 0:
                continue
            value = interp.eval(buffer)
        except ReaderError as err:
            logger.error("%s", err)
            buffer = ""
            continue
        buffer = ""
        if not interp.last_context.has_error:
            stdout.write(to_string(value) + "\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    interp = Interpreter(prelude=None if args.no_prelude else 'auto')
    if args.files:
        return run_files(interp, args.files)
    return repl(interp)


if __name__ == "__main__":
    sys.exit(main())
