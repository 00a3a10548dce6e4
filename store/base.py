# store/base.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Abstract node store interface consumed by the walker

"""Record lookup interface between the walker and a backing store.

A node store turns human-facing references into identifiers and hands
out immutable records by identifier. The walker only ever calls
``fetch``; ``resolve`` is used once by the driver to find the start
record.
"""

from abc import ABC, abstractmethod

from model.object_id import ObjectId
from model.record import Record


class NodeStore(ABC):
    """Base class for record stores.

    Stores are context managers so that implementations holding external
    resources (child processes, open files) release them deterministically.
    """

    @abstractmethod
    def resolve(self, reference: str) -> ObjectId:
        """Resolve a reference to the identifier of a record.

        Args:
            reference: Store-specific reference (name, hex id, ...)

        Returns:
            Identifier of the named record

        Raises:
            ResolutionError: If the reference does not name a record
        """

    @abstractmethod
    def fetch(self, oid: ObjectId) -> Record:
        """Fetch the record with identifier `oid`.

        Raises:
            RecordLookupError: If no such record exists
        """

    def close(self) -> None:
        """Release any resources held by the store."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
