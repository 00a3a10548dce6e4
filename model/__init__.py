# model/__init__.py

"""
Domain objects for commit history walking: object identifiers, graph
records, resumable cursors and the shared exception hierarchy. These types
carry no traversal or storage logic.
"""

from .object_id import ObjectId
from .record import Record
from .cursor import Cursor
from .exceptions import (
    CursorLogError,
    UsageError,
    ConfigurationError,
    ResolutionError,
    RecordLookupError,
    GraphFormatError,
    CursorFormatError,
    OutputClosedError,
)

__all__ = [
    "ObjectId",
    "Record",
    "Cursor",
    "CursorLogError",
    "UsageError",
    "ConfigurationError",
    "ResolutionError",
    "RecordLookupError",
    "GraphFormatError",
    "CursorFormatError",
    "OutputClosedError",
]
