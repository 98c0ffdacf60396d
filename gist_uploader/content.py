from __future__ import annotations

import sys
from typing import BinaryIO, Dict, List, Optional
import aiofiles

from .debug import report, make_debug_logger
from .errors import InputError, EmptyInputError
from .models import STDIN_NAME

_dbg = make_debug_logger("content")


def _decode(data: bytes) -> str:
    # The API only carries text; invalid sequences become U+FFFD.
    return data.decode("utf-8", errors="replace")


def read_stdin(stream: Optional[BinaryIO] = None) -> Dict[str, str]:
    """Read all of standard input as a single file named <stdin>."""
    if stream is None:
        if sys.stdin is None:
            raise InputError(f"{STDIN_NAME}: standard input is closed")
        stream = sys.stdin.buffer
    try:
        data = stream.read()
    except (OSError, ValueError) as e:
        raise InputError(f"{STDIN_NAME}: {e}") from e
    _dbg(f"read {len(data)} bytes from {STDIN_NAME}")
    return {STDIN_NAME: _decode(data)}


async def read_file(path: str) -> str:
    async with aiofiles.open(path, "rb") as f:
        return _decode(await f.read())


async def read_files(paths: List[str]) -> Dict[str, str]:
    """Read every named file, keyed by the path exactly as given.

    A file that cannot be read is reported and skipped. Raises
    EmptyInputError when no file could be read at all.
    """
    contents: Dict[str, str] = {}
    for path in paths:
        try:
            contents[path] = await read_file(path)
        except OSError as e:
            report(f"{path}: {e.strerror or e}")
            continue
        _dbg(f"read {path}")
    if not contents:
        raise EmptyInputError("no files to upload")
    return contents


async def collect_content(paths: List[str], stdin: Optional[BinaryIO] = None) -> Dict[str, str]:
    """Gather the name -> text mapping for one gist: stdin when no paths are given."""
    if not paths:
        return read_stdin(stdin)
    return await read_files(paths)
