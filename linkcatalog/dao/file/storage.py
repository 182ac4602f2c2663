"""Whole-document JSON file storage for the file-backed link store.

The link collection is persisted as one JSON array. Every write replaces the
whole document atomically: the new content goes to a temporary file in the
same directory, is flushed to disk and then renamed over the old file. Readers
therefore observe either the previous or the new document, never a partial one.

Writers serialize through an exclusive advisory lock on a sidecar lock file
(`<file>.lock`). The lock is taken per open file description, so it serializes
threads, DAO instances and processes sharing the same link file alike.

Classes:
    JSONFileStorage:
        exists(), read(), write() and exclusive() over a single JSON document.

Example:
    >>> storage = JSONFileStorage('data/links.json')
    >>> with storage.exclusive():
    ...     records = storage.read() if storage.exists() else []
    ...     records.append({'title': 'Zoom Meeting', 'url': 'https://zoom.us'})
    ...     storage.write(records)
"""

import os
import json
import fcntl
import tempfile
import contextlib
from pathlib import Path
from typing import Any
from collections.abc import Iterator

from linkcatalog.dao.exceptions import DataStoreError
from linkcatalog.dao.file.helpers import handle_file_storage_error


class JSONFileStorage:
    """Read and atomically rewrite a JSON array stored in a single file.

    Attributes:
        path (Path):
            Location of the JSON document.
        lock_path (Path):
            Sidecar file used for the exclusive writer lock.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self.lock_path = self.path.with_name(f'{self.path.name}.lock')

    def __repr__(self) -> str:
        return f'JSONFileStorage({str(self.path)!r})'

    def exists(self) -> bool:
        return self.path.exists()

    @handle_file_storage_error
    def read(self) -> list[dict[str, Any]]:
        """Load the whole JSON document

        Returns:
            list[dict[str, Any]]: stored records, in stored order.

        Raises:
            DataStoreError:
                If the file is missing, unreadable, not JSON or not a JSON array.
        """
        with open(self.path, encoding='utf-8') as f:
            records = json.load(f)

        if not isinstance(records, list):
            raise DataStoreError(f'Link storage at {self.path} must contain a JSON array.')
        return records

    @handle_file_storage_error
    def write(self, records: list[dict[str, Any]]) -> None:
        """Replace the whole JSON document atomically

        Args:
            records (list[dict[str, Any]]):
                Complete collection to persist.

        Raises:
            DataStoreError:
                If the temporary file can't be written or moved into place.
                The previous document is left untouched in that case.
        """
        content = json.dumps(records, indent=2, ensure_ascii=False)

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_path)
            raise

    @contextlib.contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the exclusive writer lock for a load-modify-save cycle

        Raises:
            DataStoreError:
                If the lock file can't be opened.
        """
        try:
            lock = open(self.lock_path, 'a')
        except OSError as e:
            raise DataStoreError(f"Can't open lock file {self.lock_path}.") from e

        with lock:
            fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock.fileno(), fcntl.LOCK_UN)
