# utils/emitter.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Renders walk output lines

from typing import List, Optional, TextIO, Tuple

from core.walker import Walker
from model.cursor import Cursor
from model.exceptions import OutputClosedError
from model.object_id import ObjectId
from utils.logger import get_logger


def format_line(cursor: Cursor, oid: ObjectId) -> str:
    """Render one output line: ``<root-hex>+<offset>  <record-hex>``."""
    return f"{cursor}  {oid.hex()}\n"


def _write(out: TextIO, text: str) -> None:
    try:
        out.write(text)
    except BrokenPipeError as e:
        raise OutputClosedError("Output closed by reader") from e


def emit_walk(
    walker: Walker,
    out: TextIO,
    skip: int = 0,
    collect: Optional[List[Tuple[Cursor, ObjectId]]] = None,
) -> int:
    """Drive `walker` to exhaustion, writing one line per emitted record.

    The first `skip` emissions are discarded before anything is written.
    Each line carries the cursor read before the advance that produced
    its record.

    Args:
        walker: Walker positioned at the start of the walk
        out: Stream receiving output lines
        skip: Number of leading emissions to discard
        collect: Optional list receiving every written ``(cursor, id)`` pair

    Returns:
        Number of lines written

    Raises:
        OutputClosedError: If writing to `out` fails with a broken pipe
    """
    if skip:
        walker.skip(skip)

    emitted = 0
    for cursor, oid in walker:
        _write(out, format_line(cursor, oid))
        if collect is not None:
            collect.append((cursor, oid))
        emitted += 1

    try:
        out.flush()
    except BrokenPipeError as e:
        raise OutputClosedError("Output closed by reader") from e
    get_logger().walk_complete(emitted)
    return emitted
