# tests/conftest.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for cursorlog tests.

This module puts the project root on the import path and provides small
commit graphs used across the walker, emitter and CLI tests. Record ids
are 20-byte identifiers whose value is the record number, so byte-wise
order matches numeric order.
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Test modules share the graph helpers below via "from conftest import ..."
tests_root = Path(__file__).parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from model.object_id import ObjectId
from model.record import Record
from store.memory import MemoryNodeStore


def oid(n: int) -> ObjectId:
    """20-byte identifier whose big-endian value is `n`."""
    return ObjectId(n.to_bytes(20, "big"))


def R(n: int, timestamp: int, parents=()) -> Record:
    """Factory for Record objects addressed by number."""
    return Record(oid(n), timestamp, tuple(oid(p) for p in parents))


@pytest.fixture
def linear_store():
    """D(4) -> C(3) -> B(2) -> A(1), strictly decreasing timestamps."""
    return MemoryNodeStore(
        [R(4, 400, [3]), R(3, 300, [2]), R(2, 200, [1]), R(1, 100)],
        refs={"main": oid(4)},
    )


@pytest.fixture
def merge_store():
    """D(4) merges B(2) and C(3); both descend from A(1)."""
    return MemoryNodeStore(
        [R(4, 400, [2, 3]), R(2, 300, [1]), R(3, 200, [1]), R(1, 100)],
        refs={"main": oid(4)},
    )


@pytest.fixture
def dense_store():
    """Thirty-one records with several merges converging on shared ancestors.

    Record i has parent i-1, plus i-3 when i is a multiple of 5 and i-6
    when i is a multiple of 7. Timestamps grow with i, so every parent is
    strictly older than its children.
    """
    records = [R(0, 0)]
    for i in range(1, 31):
        parents = [i - 1]
        if i % 5 == 0:
            parents.append(i - 3)
        if i % 7 == 0:
            parents.append(i - 6)
        records.append(R(i, i * 10, parents))
    return MemoryNodeStore(records, refs={"main": oid(30)})
