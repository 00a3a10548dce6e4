# tests/store_tests/test_graph_file_store.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Test suite for the CSV graph file node store

"""Graph file store: parsing, refs directive, resolution and lookup."""

import pytest

from conftest import oid
from model.exceptions import GraphFormatError, RecordLookupError, ResolutionError
from model.object_id import ObjectId
from store import open_store
from store.graph_file import GraphFileStore, read_graph, read_refs


def H(n: int) -> str:
    return oid(n).hex()


def write_graph(tmp_path, rows, refs=None, header="id,timestamp,parents"):
    lines = []
    if refs is not None:
        lines.append("# refs: " + "|".join(f"{k}={v}" for k, v in refs.items()))
    lines.append(header)
    lines.extend(rows)
    path = tmp_path / "graph.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def graph_path(tmp_path):
    return write_graph(
        tmp_path,
        [
            f"{H(4)},400,{H(2)}|{H(3)}",
            f"{H(3)},300,{H(1)}",
            f"{H(2)},200,{H(1)}",
            f"{H(1)},100,",
        ],
        refs={"main": H(4), "topic": H(3)},
    )


class TestGraphFileStore:

    def test_read_graph_preserves_rows_and_parent_order(self, graph_path):
        records = list(read_graph(graph_path))

        assert [r.id for r in records] == [oid(4), oid(3), oid(2), oid(1)]
        assert records[0].parents == (oid(2), oid(3))
        assert records[0].timestamp == 400
        assert records[-1].is_root()

    def test_read_refs_directive(self, graph_path):
        assert read_refs(graph_path) == {"main": oid(4), "topic": oid(3)}

    def test_refs_directive_is_optional(self, tmp_path):
        path = write_graph(tmp_path, [f"{H(1)},100,"])

        assert read_refs(path) == {}
        assert len(GraphFileStore(path)) == 1

    def test_resolve_ref_name(self, graph_path):
        store = GraphFileStore(graph_path)
        assert store.resolve("main") == oid(4)
        assert store.resolve("topic") == oid(3)

    def test_resolve_full_hex_and_unique_prefix(self, tmp_path):
        path = write_graph(
            tmp_path,
            ["ab" * 20 + ",200,", "ac" * 20 + ",100,"],
        )
        store = GraphFileStore(path)

        assert store.resolve("ab" * 20) == ObjectId.from_hex("ab" * 20)
        assert store.resolve("ACAC") == ObjectId.from_hex("ac" * 20)

    def test_resolve_ambiguous_prefix(self, tmp_path):
        path = write_graph(
            tmp_path,
            ["abcd" + "12" * 18 + ",200,", "abcd" + "34" * 18 + ",100,"],
        )
        store = GraphFileStore(path)

        with pytest.raises(ResolutionError, match="Ambiguous"):
            store.resolve("abcd")
        assert store.resolve("abcd34").hex().endswith("34")

    def test_resolve_unknown(self, graph_path):
        store = GraphFileStore(graph_path)
        for reference in ["nope", "ff" * 20, "12", ""]:
            with pytest.raises(ResolutionError):
                store.resolve(reference)

    def test_fetch_missing_parent_raises_lookup_error(self, tmp_path):
        path = write_graph(tmp_path, [f"{H(2)},200,{H(1)}"])
        store = GraphFileStore(path)

        assert store.fetch(oid(2)).parents == (oid(1),)
        with pytest.raises(RecordLookupError):
            store.fetch(oid(1))
        with pytest.raises(LookupError):
            store.fetch(oid(1))

    def test_missing_headers(self, tmp_path):
        path = write_graph(tmp_path, [f"{H(1)},100"], header="id,timestamp")

        with pytest.raises(GraphFormatError, match="Missing required headers"):
            GraphFileStore(path)

    @pytest.mark.parametrize(
        "row",
        [
            "xyz,100,",
            f"{oid(1).hex()},soon,",
            f"{oid(1).hex()},100,{oid(2).hex()}|nothex",
        ],
    )
    def test_malformed_rows(self, tmp_path, row):
        path = write_graph(tmp_path, [row])

        with pytest.raises(GraphFormatError, match="row 2"):
            GraphFileStore(path)

    def test_duplicate_ids(self, tmp_path):
        path = write_graph(tmp_path, [f"{H(1)},100,", f"{H(1)},200,"])

        with pytest.raises(GraphFormatError, match="Duplicate"):
            GraphFileStore(path)

    def test_mixed_id_widths(self, tmp_path):
        path = write_graph(tmp_path, [f"{H(2)},200,{'ab' * 32}"])

        with pytest.raises(GraphFormatError, match="20-byte"):
            GraphFileStore(path)

    def test_malformed_refs_directive(self, tmp_path):
        path = write_graph(tmp_path, [f"{H(1)},100,"], refs={"main": "zz"})

        with pytest.raises(GraphFormatError):
            GraphFileStore(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphFormatError, match="not found"):
            list(read_graph(tmp_path / "absent.csv"))

    def test_open_store_picks_graph_file(self, graph_path):
        with open_store(graph_path) as store:
            assert isinstance(store, GraphFileStore)
            assert store.fetch(store.resolve("main")).id == oid(4)
