# model/cursor.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Resumable position marker printed alongside each walked record

"""
Cursor
======

A compact ``(root, offset)`` position in a walk. Starting a fresh walk at
``root`` and discarding ``offset`` emissions puts the walker exactly where
the cursor was taken, so a cursor printed next to a record lets a later
process pick the history up again without replaying it.

The textual form is ``<root-hex>+<offset>``.
"""

from __future__ import annotations
from dataclasses import dataclass

from .exceptions import CursorFormatError
from .object_id import ObjectId
from .record import Record


@dataclass(frozen=True, slots=True)
class Cursor:
    root: ObjectId
    offset: int = 0

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise CursorFormatError(f"Cursor offset must be non-negative: {self.offset}")

    def advanced(self, popped: Record, frontier_empty: bool) -> Cursor:
        """
        Return the cursor that follows popping `popped`.

        When the popped record has exactly one parent and nothing else is
        pending, the walk continues unambiguously at that parent, so the
        root rolls forward to it with offset 0. Any other shape (root
        record, merge, or other frontier entries pending) keeps the root and
        counts one more emission.
        """
        if popped.parent_count == 1 and frontier_empty:
            return Cursor(popped.parents[0], 0)
        return Cursor(self.root, self.offset + 1)

    @classmethod
    def parse(cls, text: str) -> Cursor:
        """Parse the ``<root-hex>+<offset>`` form printed by the emitter."""
        root_text, sep, offset_text = text.strip().partition("+")
        if not sep:
            raise CursorFormatError(f"Cursor must look like <root>+<offset>: {text!r}")
        if not (offset_text.isascii() and offset_text.isdigit()):
            raise CursorFormatError(f"Invalid cursor offset: {offset_text!r}")
        try:
            root = ObjectId.from_hex(root_text)
        except ValueError as e:
            raise CursorFormatError(f"Invalid cursor root: {e}")
        return cls(root, int(offset_text))

    def __str__(self) -> str:
        return f"{self.root.hex()}+{self.offset}"
