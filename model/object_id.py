# model/object_id.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Fixed-width object identifiers for records in a commit graph

"""
ObjectId
========

Opaque, fixed-width identifier of a record. Identifiers are compared
byte-wise, which gives the total order used to break timestamp ties in
the walk frontier, and are rendered as lowercase hexadecimal.
"""

from __future__ import annotations
from dataclasses import dataclass

_HEX_DIGITS = "0123456789abcdefABCDEF"


@dataclass(frozen=True, order=True, slots=True)
class ObjectId:
    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, bytes) or not self.raw:
            raise ValueError("ObjectId requires a non-empty bytes value")

    @classmethod
    def from_hex(cls, text: str) -> ObjectId:
        """
        Parse a hexadecimal identifier. Both cases are accepted; the
        text must have an even, non-zero number of digits.
        """
        text = text.strip()
        if not text or len(text) % 2 or text.strip(_HEX_DIGITS):
            raise ValueError(f"Invalid object id: {text!r}")
        return cls(bytes.fromhex(text))

    @property
    def width(self) -> int:
        """Number of bytes in this identifier."""
        return len(self.raw)

    def hex(self) -> str:
        return self.raw.hex()

    def short(self, length: int = 7) -> str:
        """Abbreviated hex form for diagnostics."""
        return self.raw.hex()[:length]

    def __str__(self) -> str:
        return self.raw.hex()

    def __repr__(self) -> str:
        return f"ObjectId({self.raw.hex()})"
