# store/memory.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Dictionary-backed node store

from typing import Dict, Iterable, Mapping, Optional

from model.exceptions import RecordLookupError, ResolutionError
from model.object_id import ObjectId
from model.record import Record

from .base import NodeStore


class MemoryNodeStore(NodeStore):
    """Node store holding every record in memory.

    References resolve through the optional `refs` mapping first, then as
    the full hex form of a stored identifier.
    """

    def __init__(
        self,
        records: Iterable[Record] = (),
        refs: Optional[Mapping[str, ObjectId]] = None,
    ):
        self._records: Dict[ObjectId, Record] = {}
        for record in records:
            self.add(record)
        self._refs: Dict[str, ObjectId] = dict(refs or {})
        self.fetch_count = 0

    def add(self, record: Record) -> None:
        self._records[record.id] = record

    def set_ref(self, name: str, oid: ObjectId) -> None:
        self._refs[name] = oid

    def resolve(self, reference: str) -> ObjectId:
        if reference in self._refs:
            return self._refs[reference]
        try:
            oid = ObjectId.from_hex(reference)
        except ValueError:
            raise ResolutionError(f"Unknown reference: {reference}")
        if oid not in self._records:
            raise ResolutionError(f"Unknown reference: {reference}")
        return oid

    def fetch(self, oid: ObjectId) -> Record:
        self.fetch_count += 1
        try:
            return self._records[oid]
        except KeyError:
            raise RecordLookupError(f"No record with id {oid}")

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, oid: object) -> bool:
        return oid in self._records
