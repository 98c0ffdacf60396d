from __future__ import annotations
import os
import sys
from typing import Callable

PROG = "gist"


def report(msg: str) -> None:
    """Print a diagnostic line to stderr, prefixed with the program name."""
    print(f"{PROG}: {msg}", file=sys.stderr)


def make_debug_logger(name: str) -> Callable[[str], None]:
    """Build a per-component tracer that is silent unless DEBUG=1.

    Traces go to stderr as `[debug::<name>] ...` so they never mix with
    the URL printed on stdout.
    """
    enabled = os.environ.get('DEBUG') == '1'
    if not enabled:
        def _noop(msg: str) -> None:
            return
        return _noop

    def _dbg(msg: str) -> None:
        print(f"[debug::{name}] {msg}", file=sys.stderr)

    return _dbg
