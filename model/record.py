# model/record.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Immutable commit graph record

"""
Record
======

A node of the commit graph as handed out by a node store: its own
identifier, a timestamp in seconds, and the ordered identifiers of its
parents. No parents marks a root record, two or more a merge.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from .object_id import ObjectId


@dataclass(frozen=True, slots=True)
class Record:
    id: ObjectId
    timestamp: int
    parents: Tuple[ObjectId, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # callers commonly pass lists; keep the record hashable
        if not isinstance(self.parents, tuple):
            object.__setattr__(self, "parents", tuple(self.parents))

    @property
    def parent_count(self) -> int:
        return len(self.parents)

    def is_root(self) -> bool:
        """True if this record has no parents."""
        return not self.parents

    def is_merge(self) -> bool:
        """True if this record has two or more parents."""
        return len(self.parents) > 1

    def __str__(self) -> str:
        parents = ",".join(p.short() for p in self.parents)
        return f"{self.id.short()}@{self.timestamp}[{parents}]"
