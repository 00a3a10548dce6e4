# core/walker.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Reverse-chronological, resumable traversal of a commit graph

from __future__ import annotations
import heapq
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Set, Tuple

from model.cursor import Cursor
from model.object_id import ObjectId
from model.record import Record
from utils.logger import get_logger

if TYPE_CHECKING:
    from store.base import NodeStore


@dataclass(frozen=True, order=True)
class _FrontierEntry:
    """Heap entry ordering records by newest timestamp, then smallest id.

    heapq is a min-heap, so the timestamp is stored negated. The record
    itself takes no part in comparisons.
    """

    neg_timestamp: int
    oid: bytes
    record: Record = field(compare=False)

    @classmethod
    def wrap(cls, record: Record) -> _FrontierEntry:
        return cls(-record.timestamp, record.id.raw, record)


class Walker:
    """Walks a commit graph newest-first and tracks a resumable cursor.

    The frontier is a max-priority heap over pending records keyed on
    timestamp, so branches of the graph are interleaved by recency rather
    than visited one at a time. Every identifier discovered as a parent is
    remembered in a seen set and never pushed twice, which makes records
    reachable along several paths (merge convergence) emit exactly once.

    Ties between equal timestamps are broken by identifier, smaller first,
    so two walks over the same graph always produce the same order.

    After each pop the cursor either rolls its root forward to the popped
    record's only parent, when that parent is the unambiguous next record
    (single parent, nothing else pending), or counts one more emission
    from the current root. Reading ``cursor`` before ``advance()`` gives the
    position to print next to the record that call returns.

    Example:
        >>> walker = Walker(store, store.fetch(store.resolve("main")))
        >>> while walker.has_next():
        ...     cursor = walker.cursor
        ...     print(f"{cursor}  {walker.advance()}")
    """

    def __init__(self, store: NodeStore, start: Record) -> None:
        """Initialize a walk from an already fetched start record.

        Args:
            store: Node store used to fetch parents as they are discovered
            start: Record the walk begins at (emitted first)
        """
        self._store = store
        self._frontier: List[_FrontierEntry] = [_FrontierEntry.wrap(start)]
        self._seen: Set[ObjectId] = set()
        self._cursor = Cursor(start.id, 0)

        self._logger = get_logger()
        self._logger.walk_start(str(start.id), str(self._cursor))

    @classmethod
    def start(cls, store: NodeStore, reference: str) -> Walker:
        """Resolve `reference` in `store` and start a walk at that record.

        Raises:
            ResolutionError: If the reference does not name a record
            RecordLookupError: If the resolved record cannot be fetched
        """
        return cls(store, store.fetch(store.resolve(reference)))

    @classmethod
    def resume(cls, store: NodeStore, cursor: Cursor) -> Walker:
        """Rebuild the walker state a previously printed cursor describes.

        The returned walker's next emission is the record the cursor was
        printed next to. A cursor with an offset beyond the end of history
        yields an exhausted walker.
        """
        walker = cls(store, store.fetch(cursor.root))
        walker.skip(cursor.offset)
        return walker

    @property
    def cursor(self) -> Cursor:
        """Position to print alongside the record the next advance returns."""
        return self._cursor

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    @property
    def seen_count(self) -> int:
        return len(self._seen)

    def has_next(self) -> bool:
        """True while records remain to be emitted."""
        return bool(self._frontier)

    def advance(self) -> ObjectId:
        """Emit the newest pending record and expand its parents.

        Returns:
            Identifier of the emitted record

        Raises:
            IndexError: If the walk is already exhausted
            RecordLookupError: If a newly discovered parent cannot be
                fetched; the walk cannot continue correctly past this point
        """
        if not self._frontier:
            raise IndexError("advance() on an exhausted walk")

        current = heapq.heappop(self._frontier).record

        self._cursor = self._cursor.advanced(current, not self._frontier)
        self._logger.record_popped(
            str(current), current.parent_count, str(self._cursor), len(self._frontier)
        )

        for parent_id in current.parents:
            if parent_id in self._seen:
                self._logger.parent_already_seen(parent_id.short(), current.id.short())
                continue

            parent = self._store.fetch(parent_id)
            heapq.heappush(self._frontier, _FrontierEntry.wrap(parent))
            self._seen.add(parent_id)
            self._logger.parent_discovered(parent_id.short(), current.id.short())

        return current.id

    def skip(self, count: int) -> int:
        """Advance up to `count` times, discarding the emitted identifiers.

        Returns:
            Number of records actually skipped; less than `count` only when
            history runs out first
        """
        if count < 0:
            raise ValueError(f"Skip count must be non-negative: {count}")

        skipped = 0
        while skipped < count and self.has_next():
            self.advance()
            skipped += 1

        self._logger.skip_complete(count, skipped)
        return skipped

    def __iter__(self) -> Iterator[Tuple[Cursor, ObjectId]]:
        """Yield ``(cursor, id)`` pairs, capturing the cursor before each advance."""
        while self.has_next():
            cursor = self._cursor
            yield cursor, self.advance()
