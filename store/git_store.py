# store/git_store.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Node store reading commits from a git repository through the git binary

import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from model.exceptions import ConfigurationError, RecordLookupError, ResolutionError
from model.object_id import ObjectId
from model.record import Record
from utils.logger import get_logger

from .base import NodeStore

# Variables that would override the repository chosen explicitly below
_GIT_LOCATION_VARS = ("GIT_DIR", "GIT_WORK_TREE", "GIT_COMMON_DIR", "GIT_INDEX_FILE")


def _git_environment() -> Dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _GIT_LOCATION_VARS}


def parse_commit(oid: ObjectId, body: bytes) -> Record:
    """Build a Record from a raw commit object.

    Only the header block is read: parent lines in order, and the
    committer line whose second to last field is the commit time in
    seconds since the epoch.

    Raises:
        RecordLookupError: If a parent line is malformed or the commit has
            no parseable committer line
    """
    parents: List[ObjectId] = []
    timestamp: Optional[int] = None

    for line in body.split(b"\n"):
        if not line:
            break
        if line.startswith(b"parent "):
            try:
                parents.append(ObjectId.from_hex(line[7:].decode("ascii")))
            except ValueError:
                raise RecordLookupError(f"Malformed parent line in commit {oid}")
        elif line.startswith(b"committer "):
            fields = line.rsplit(b" ", 2)
            try:
                timestamp = int(fields[1])
            except (IndexError, ValueError):
                raise RecordLookupError(f"Malformed committer line in commit {oid}")

    if timestamp is None:
        raise RecordLookupError(f"Commit {oid} has no committer")

    return Record(oid, timestamp, tuple(parents))


class GitNodeStore(NodeStore):
    """Node store backed by a git repository.

    References are resolved with ``git rev-parse``; commits are read through
    one long-running ``git cat-file --batch`` process that is started on the
    first fetch and stopped by ``close()``.
    """

    def __init__(self, location: Union[str, Path], git: str = "git"):
        self._git = git
        self._env = _git_environment()
        self._batch: Optional[subprocess.Popen] = None
        self._logger = get_logger()

        try:
            result = subprocess.run(
                [git, "-C", str(location), "rev-parse", "--absolute-git-dir"],
                capture_output=True,
                env=self._env,
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot run {git}: {e}")

        if result.returncode != 0:
            message = result.stderr.decode("utf-8", "replace").strip()
            raise ConfigurationError(f"Not a git repository: {location}: {message}")

        self.git_dir = Path(result.stdout.decode("utf-8").strip())
        self._logger.debug(f"Opened git repository {self.git_dir}")

    def _command(self, *args: str) -> List[str]:
        return [self._git, f"--git-dir={self.git_dir}", *args]

    def resolve(self, reference: str) -> ObjectId:
        if not reference or reference.startswith("-"):
            raise ResolutionError(f"Invalid reference: {reference!r}")

        result = subprocess.run(
            self._command("rev-parse", "--verify", "--quiet", f"{reference}^{{commit}}"),
            capture_output=True,
            env=self._env,
        )
        if result.returncode != 0:
            raise ResolutionError(f"Cannot resolve {reference} to a commit")

        return ObjectId.from_hex(result.stdout.decode("ascii").strip())

    def _batch_process(self) -> subprocess.Popen:
        if self._batch is None:
            self._batch = subprocess.Popen(
                self._command("cat-file", "--batch"),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                env=self._env,
            )
        return self._batch

    def _read_object(self, oid: ObjectId) -> Tuple[bytes, bytes]:
        proc = self._batch_process()
        try:
            proc.stdin.write(oid.hex().encode("ascii") + b"\n")
            proc.stdin.flush()
            header = proc.stdout.readline()
        except OSError as e:
            self._stop_batch(kill=True)
            raise RecordLookupError(f"git cat-file exited while reading {oid}") from e

        if not header:
            self._stop_batch(kill=True)
            raise RecordLookupError(f"git cat-file exited while reading {oid}")

        fields = header.split()
        if len(fields) != 3:
            raise RecordLookupError(f"No object with id {oid}")

        _, obj_type, size = fields
        body = proc.stdout.read(int(size))
        proc.stdout.read(1)  # trailing newline
        if len(body) != int(size):
            self._stop_batch(kill=True)
            raise RecordLookupError(f"git cat-file exited while reading {oid}")
        return obj_type, body

    def fetch(self, oid: ObjectId) -> Record:
        obj_type, body = self._read_object(oid)
        if obj_type != b"commit":
            raise RecordLookupError(
                f"Object {oid} is a {obj_type.decode('ascii', 'replace')}, not a commit"
            )
        return parse_commit(oid, body)

    def _stop_batch(self, kill: bool = False) -> None:
        proc, self._batch = self._batch, None
        if proc is None:
            return
        if kill:
            proc.kill()
        try:
            proc.stdin.close()
        except BrokenPipeError:
            # Child already gone; a request left in the buffer has no reader
            pass
        proc.wait()
        proc.stdout.close()

    def close(self) -> None:
        self._stop_batch()
