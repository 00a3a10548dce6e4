# store/__init__.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Node store implementations and location-based store selection

"""Record stores the walker can read from.

``open_store`` picks an implementation from the configured location: a
directory is treated as a git repository, a regular file as a CSV graph
file.
"""

from pathlib import Path
from typing import Union

from model.exceptions import ConfigurationError

from .base import NodeStore
from .git_store import GitNodeStore, parse_commit
from .graph_file import GraphFileStore, read_graph, read_refs
from .memory import MemoryNodeStore


def open_store(location: Union[str, Path]) -> NodeStore:
    """Open the node store at `location`.

    Raises:
        ConfigurationError: If nothing usable exists at `location`
        GraphFormatError: If `location` is a malformed graph file
    """
    path = Path(location)
    if path.is_dir():
        return GitNodeStore(path)
    if path.is_file():
        return GraphFileStore(path)
    raise ConfigurationError(f"Record store not found: {location}")


__all__ = [
    "NodeStore",
    "GitNodeStore",
    "GraphFileStore",
    "MemoryNodeStore",
    "open_store",
    "parse_commit",
    "read_graph",
    "read_refs",
]
