# model/exceptions.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Exception hierarchy shared by the walker, the node stores and the CLI

"""Domain-specific exceptions for commit history walking.

Every failure the tool can report derives from CursorLogError so the
command-line driver can turn any of them into a failure exit status in a
single place. The walker itself never catches these; a lookup failure in
the middle of a walk propagates out of ``Walker.advance``.
"""


class CursorLogError(RuntimeError):
    """Base class for all errors raised by cursorlog."""

    pass


class UsageError(CursorLogError):
    """Raised when the command line is missing or has invalid arguments."""

    pass


class ConfigurationError(CursorLogError):
    """Raised when the backing store location is unset or unusable."""

    pass


class ResolutionError(CursorLogError):
    """Raised when a reference does not name a record in the store."""

    pass


class RecordLookupError(CursorLogError, LookupError):
    """Raised when a record cannot be fetched by its identifier.

    Also a LookupError so callers treating the store like a mapping can
    catch it the usual way.
    """

    pass


class GraphFormatError(CursorLogError):
    """Raised when a graph file contains invalid format or data."""

    pass


class CursorFormatError(CursorLogError, ValueError):
    """Raised when a printed cursor cannot be parsed back."""

    pass


class OutputClosedError(CursorLogError):
    """Raised when the reader of the walk output goes away mid-walk.

    Not a failure of the walk itself: the command-line driver ends with a
    success status, since the reader already has every line it asked for.
    """

    pass
