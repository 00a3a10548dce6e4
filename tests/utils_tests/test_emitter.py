# tests/utils_tests/test_emitter.py

"""Output line rendering and the emit loop."""

import io

import pytest

from conftest import oid
from core.walker import Walker
from model.cursor import Cursor
from model.exceptions import OutputClosedError
from utils.emitter import emit_walk, format_line


def test_format_line_layout():
    line = format_line(Cursor(oid(4), 2), oid(3))
    assert line == f"{oid(4).hex()}+2  {oid(3).hex()}\n"
    root, rest = line.split("+", 1)
    assert len(root) == 40
    offset, record = rest.rstrip("\n").split("  ")
    assert offset == "2"
    assert record == oid(3).hex()


def test_emit_walk_writes_one_line_per_record(merge_store):
    out = io.StringIO()
    count = emit_walk(Walker.start(merge_store, "main"), out)

    lines = out.getvalue().splitlines()
    assert count == len(lines) == 4
    assert lines[0] == f"{oid(4).hex()}+0  {oid(4).hex()}"
    assert lines[-1] == f"{oid(4).hex()}+3  {oid(1).hex()}"


def test_emit_walk_skip_suppresses_leading_lines(dense_store):
    full = io.StringIO()
    emit_walk(Walker.start(dense_store, "main"), full)

    skipped = io.StringIO()
    count = emit_walk(Walker.start(dense_store, "main"), skipped, skip=7)

    assert count == 24
    assert skipped.getvalue().splitlines() == full.getvalue().splitlines()[7:]


def test_emit_walk_collects_pairs(linear_store):
    collected = []
    emit_walk(Walker.start(linear_store, "main"), io.StringIO(), skip=1, collect=collected)

    assert collected == [(Cursor(oid(3), 0), oid(3)), (Cursor(oid(2), 0), oid(2)), (Cursor(oid(1), 0), oid(1))]


class ClosedPipe(io.StringIO):
    """Stream whose reader has gone away after `limit` writes."""

    def __init__(self, limit):
        super().__init__()
        self.limit = limit

    def write(self, text):
        if self.limit == 0:
            raise BrokenPipeError("reader closed")
        self.limit -= 1
        return super().write(text)


def test_emit_walk_closed_output_raises_output_closed(linear_store):
    out = ClosedPipe(limit=2)

    with pytest.raises(OutputClosedError):
        emit_walk(Walker.start(linear_store, "main"), out)
    assert len(out.getvalue().splitlines()) == 2


def test_emit_walk_leaves_store_broken_pipe_alone(linear_store, monkeypatch):
    """A broken pipe raised while walking is not mistaken for a closed output."""

    def broken_fetch(oid):
        raise BrokenPipeError("store pipe")

    walker = Walker.start(linear_store, "main")
    monkeypatch.setattr(linear_store, "fetch", broken_fetch)

    with pytest.raises(BrokenPipeError):
        emit_walk(walker, io.StringIO())
