# store/graph_file.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# CSV graph file reader for commit graphs kept outside a repository

import csv
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from model.exceptions import GraphFormatError, RecordLookupError, ResolutionError
from model.object_id import ObjectId
from model.record import Record
from utils.logger import get_logger

from .base import NodeStore

REFS_DIRECTIVE = "# refs:"
MIN_PREFIX_LENGTH = 4


def read_graph(filepath: Union[str, Path]) -> Iterator[Record]:
    """Read records from a CSV graph file.

    Each row describes one record: its hex identifier, an integer
    timestamp, and its parents as pipe-separated hex identifiers in
    order. The first line may carry a refs directive naming records.

    Expected CSV format:
        # refs: main=<hex>|topic=<hex>
        id,timestamp,parents
        <hex>,1700000200,<hex>|<hex>
        <hex>,1700000100,

    Args:
        filepath: Path to the CSV graph file

    Yields:
        Record: Parsed records in file order

    Raises:
        GraphFormatError: If file format is invalid or a row cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise GraphFormatError(f"Graph file not found: {filepath}")

    logger.debug(f"Reading graph file: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            first_line = file.readline().strip()
            if not first_line.startswith(REFS_DIRECTIVE):
                file.seek(0)

            reader = csv.DictReader(file)

            required_headers = {"id", "timestamp", "parents"}
            if not required_headers.issubset(set(reader.fieldnames or [])):
                missing = required_headers - set(reader.fieldnames or [])
                raise GraphFormatError(f"Missing required headers: {sorted(missing)}")

            for row_num, row in enumerate(reader, start=2):
                try:
                    yield _parse_record_row(row)
                except (ValueError, TypeError, AttributeError) as e:
                    raise GraphFormatError(f"Error parsing row {row_num}: {e}")

    except OSError as e:
        raise GraphFormatError(f"Cannot read graph file {filepath}: {e}")


def read_refs(filepath: Union[str, Path]) -> Dict[str, ObjectId]:
    """Extract named references from the graph file's refs directive.

    Returns:
        Mapping of ref name to identifier, empty if no directive is present

    Raises:
        GraphFormatError: If the directive is malformed
    """
    path = Path(filepath)

    with open(path, "r", encoding="utf-8") as file:
        first_line = file.readline().strip()

    if not first_line.startswith(REFS_DIRECTIVE):
        return {}

    refs: Dict[str, ObjectId] = {}
    for entry in first_line[len(REFS_DIRECTIVE):].split("|"):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, target = entry.partition("=")
        if not sep or not name.strip():
            raise GraphFormatError(f"Invalid refs directive entry: {entry}")
        try:
            refs[name.strip()] = ObjectId.from_hex(target)
        except ValueError as e:
            raise GraphFormatError(f"Invalid refs directive entry {entry}: {e}")
    return refs


def _parse_record_row(row: dict) -> Record:
    """Parse a single CSV row into a Record."""
    return Record(
        id=ObjectId.from_hex(row["id"]),
        timestamp=int(row["timestamp"].strip()),
        parents=_parse_parents(row["parents"] or ""),
    )


def _parse_parents(parents_str: str) -> Tuple[ObjectId, ...]:
    """Parse a pipe-separated, ordered parent list; empty means a root record."""
    return tuple(
        ObjectId.from_hex(p) for p in parents_str.split("|") if p.strip()
    )


class GraphFileStore(NodeStore):
    """Node store loaded from a CSV graph file.

    The whole file is read and validated up front. Parents that name
    identifiers absent from the file are accepted at load time and fail
    only if the walk reaches them.
    """

    def __init__(self, filepath: Union[str, Path]):
        self.path = Path(filepath)
        self._records: Dict[ObjectId, Record] = {}
        width = None

        for record in read_graph(self.path):
            if width is None:
                width = record.id.width
            if record.id.width != width or any(p.width != width for p in record.parents):
                raise GraphFormatError(
                    f"Record {record.id} does not use {width}-byte identifiers"
                )
            if record.id in self._records:
                raise GraphFormatError(f"Duplicate record id: {record.id}")
            self._records[record.id] = record

        self._refs = read_refs(self.path)
        get_logger().debug(
            f"Loaded {len(self._records)} records and {len(self._refs)} refs from {self.path}"
        )

    def resolve(self, reference: str) -> ObjectId:
        """Resolve a ref name, a full hex id, or a unique hex prefix."""
        if reference in self._refs:
            return self._refs[reference]

        text = reference.strip().lower()
        if len(text) < MIN_PREFIX_LENGTH or any(c not in "0123456789abcdef" for c in text):
            raise ResolutionError(f"Unknown reference: {reference}")

        matches: List[ObjectId] = [oid for oid in self._records if oid.hex().startswith(text)]
        if not matches:
            raise ResolutionError(f"Unknown reference: {reference}")
        if len(matches) > 1:
            raise ResolutionError(
                f"Ambiguous reference {reference}: matches {len(matches)} records"
            )
        return matches[0]

    def fetch(self, oid: ObjectId) -> Record:
        try:
            return self._records[oid]
        except KeyError:
            raise RecordLookupError(f"No record with id {oid} in {self.path}")

    def __len__(self) -> int:
        return len(self._records)
