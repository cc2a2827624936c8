"""Shared machinery for the JSON-file-backed repositories.

Each repository keeps one JSON array per aggregate.  A compare-and-swap
is a read, an equality check against the caller's snapshot and a full
rewrite, all under an exclusive ``flock`` on a ``.lock`` sidecar file.
The lock is taken by every process and thread that touches the file, so
separate CLI invocations against one data directory serialize their
writes.  Rewrites land through a uniquely named temp file and
``os.replace``, so readers never see a half-written array.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from itam.domain.exceptions import ValidationError
from itam.domain.repository.invariant_store import InvariantStore

_LOCK_SUFFIX = ".lock"


@contextmanager
def _locked_file(path: Path) -> Iterator[None]:
    """Hold an exclusive lock on *path*'s sidecar for the context."""
    lock_path = path.with_suffix(path.suffix + _LOCK_SUFFIX)
    with lock_path.open("a+", encoding="utf-8") as lock_handle:
        fcntl.flock(lock_handle.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_handle.fileno(), fcntl.LOCK_UN)


class JsonStore(InvariantStore):
    """Subclasses supply ``_to_raw`` and ``_to_domain``."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._ensure_file()

    # --- InvariantStore interface ---------------------------------------------

    def get(self, entity_id: str):
        with _locked_file(self._file_path):
            for raw in self._load_raw():
                if raw["id"] == entity_id:
                    return self._to_domain(raw)
        return None

    def list_all(self) -> list:
        with _locked_file(self._file_path):
            return [self._to_domain(raw) for raw in self._load_raw()]

    def add(self, entity) -> None:
        with _locked_file(self._file_path):
            records = self._load_raw()
            if any(raw["id"] == entity.id for raw in records):
                raise ValidationError(f"'{entity.id}' already exists")
            records.append(self._to_raw(entity))
            self._persist_raw(records)

    def compare_and_swap(self, entity_id: str, expected, new) -> bool:
        with _locked_file(self._file_path):
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == entity_id:
                    if self._to_domain(raw) != expected:
                        return False
                    records[i] = self._to_raw(new)
                    self._persist_raw(records)
                    return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entity) -> dict:
        raise NotImplementedError

    @staticmethod
    def _to_domain(raw: dict):
        raise NotImplementedError

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        # Caller holds the file lock
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self._file_path.parent),
            prefix=f".{self._file_path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(records, indent=2) + "\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with _locked_file(self._file_path):
            if not self._file_path.exists():
                self._persist_raw([])
