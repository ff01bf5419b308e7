"""Single-file JSON document store.

The whole data set (products and orders) lives in one document, so a
commit is one atomic file replace: the new document is written to a
temporary file next to the target and moved over it with ``os.replace``.

Units of work on the same file are serialized for their whole duration
by two locks: a per-file re-entrant lock for threads of this process and
an OS-level lock on a ``<data file>.lock`` sidecar for other processes
(every ``checkout`` CLI invocation is its own process).
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from filelock import FileLock

from checkout.domain.exceptions import StorageFailure, ValidationError

logger = structlog.get_logger(__name__)

SECTIONS = ("products", "orders")

# What a malformed record can raise while being turned back into a model.
_DECODE_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError, ValidationError)

_locks: dict[Path, tuple[threading.RLock, FileLock]] = {}
_locks_guard = threading.Lock()


def _locks_for(path: Path) -> tuple[threading.RLock, FileLock]:
    with _locks_guard:
        if path not in _locks:
            _locks[path] = (
                threading.RLock(),
                FileLock(f"{path}.lock", thread_local=False),
            )
        return _locks[path]


@contextmanager
def decoding(kind: str, record_id: str) -> Iterator[None]:
    """Report a stored record that cannot be decoded as a StorageFailure."""
    try:
        yield
    except _DECODE_ERRORS as exc:
        raise StorageFailure(f"Malformed {kind} record {record_id!r}: {exc!r}") from exc


class JsonDocumentStore:

    def __init__(self, file_path: Path, lock_timeout: float = -1) -> None:
        self._file_path = file_path.resolve()
        self._lock_timeout = lock_timeout
        self.lock, self._file_lock = _locks_for(self._file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self.exclusive():
            self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the store against other threads and other processes.

        A negative ``lock_timeout`` waits forever.
        """
        with self.lock:
            try:
                self._file_lock.acquire(timeout=self._lock_timeout)
            except OSError as exc:
                raise StorageFailure(f"Cannot lock {self._file_path}: {exc}") from exc
            try:
                yield
            finally:
                self._file_lock.release()

    def read(self) -> dict[str, dict[str, dict]]:
        """Load a fresh copy of the whole document."""
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageFailure(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(document, dict):
            raise StorageFailure(f"Cannot read {self._file_path}: not a JSON object")

        for section in SECTIONS:
            document.setdefault(section, {})
            if not isinstance(document[section], dict):
                raise StorageFailure(
                    f"Cannot read {self._file_path}: '{section}' is not a JSON object"
                )
        return document

    def write(self, document: dict[str, dict[str, dict]]) -> None:
        """Atomically replace the document on disk."""
        payload = json.dumps(document, indent=2, sort_keys=True) + "\n"
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageFailure(f"Cannot write {self._file_path}: {exc}") from exc

        logger.debug("Document committed", path=str(self._file_path), bytes=len(payload))

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self.write({section: {} for section in SECTIONS})
