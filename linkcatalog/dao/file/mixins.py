"""File storage mixin providing shared storage initialization and health checks.

Responsibilities:
    - Initialize JSON file storage
    - Healthcheck the storage location

Classes:
    - JSONFileStorageMixin: Base mixin to inject file storage setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class LinkJSONFileDAO(JSONFileStorageMixin, LinkBaseDAO):
        ...     pass
        ...
        >>> dao = LinkJSONFileDAO(file_path='data/links.json')
        >>> dao._healthcheck()
        True
"""

import os
import logging
from typing import Optional

from linkcatalog.dao.exceptions import DataStoreError
from linkcatalog.dao.file.storage import JSONFileStorage


logger = logging.getLogger(__name__)


class JSONFileStorageMixin:
    """Mixin JSON file storage setup and health check for file-backed DAOs.

    Attributes:
        storage (JSONFileStorage):
            Whole-document JSON storage used by subclasses.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Verify the storage directory is writable and an existing link file is readable.
            Optionally raise a DataStoreError if not.
    """

    def __init__(
        self,
        file_path: Optional[str | os.PathLike] = None,
        file_storage: Optional[JSONFileStorage] = None,
    ):
        """Initialize a file-based DAO

        The option is given to either use an existing JSONFileStorage instance or
        create one from a file path.

        Args:
            file_path (Optional[str | os.PathLike]):
                Location of the JSON link file. Ignored if file_storage is given.

            file_storage (Optional[JSONFileStorage]):
                Pre-initialized storage. If None, one is created for file_path.

        Raises:
            ValueError:
                If neither file_path nor file_storage is provided.

            DataStoreError:
                If the storage healthcheck fails.
        """
        if file_storage is None:
            if file_path is None:
                raise ValueError('Either file_path or file_storage must be provided.')
            file_storage = JSONFileStorage(file_path)

        self.storage = file_storage

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Check that the link file can be read and rewritten

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if the storage is usable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If the storage is unusable and raise_error=True.
        """
        directory = self.storage.path.parent
        try:
            if not directory.is_dir() or not os.access(directory, os.W_OK):
                raise DataStoreError(f"Link storage directory {directory} doesn't exist or isn't writable.")
            if self.storage.exists():
                self.storage.read()
        except DataStoreError:
            if raise_error:
                raise
            logger.warning('Link storage healthcheck failed.', extra={'path': str(self.storage.path)})
            return False
        else:
            return True
