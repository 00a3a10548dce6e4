# core/__init__.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Core module public API for commit history walking

"""Core components for resumable commit history walking.

This module provides the traversal engine: a walker that linearizes a
commit graph newest-first and keeps a compact cursor from which a later
process can resume the same walk without replaying it.

Primary Components:
    Walker: Frontier heap, seen set and cursor over a node store
    Cursor: Resumable ``(root, offset)`` position printed with each record
    Record: Immutable commit graph node handed out by node stores
    ObjectId: Fixed-width, byte-ordered record identifier

Example:
    >>> from core import Walker
    >>> from store import open_store
    >>> with open_store(".git") as store:
    ...     for cursor, oid in Walker.start(store, "HEAD"):
    ...         print(cursor, oid)
"""

from model.cursor import Cursor
from model.exceptions import (
    CursorLogError,
    ConfigurationError,
    CursorFormatError,
    OutputClosedError,
    RecordLookupError,
    ResolutionError,
    UsageError,
)
from model.object_id import ObjectId
from model.record import Record
from .walker import Walker

__all__ = [
    "Walker",
    "Cursor",
    "Record",
    "ObjectId",
    "CursorLogError",
    "ConfigurationError",
    "CursorFormatError",
    "OutputClosedError",
    "RecordLookupError",
    "ResolutionError",
    "UsageError",
]

__version__ = "1.0.0"
__description__ = "Resumable reverse-chronological commit history walker"
