import json
import functools
from typing import TypeVar, Any
from collections.abc import Callable

from linkcatalog.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_file_storage_error[F](method: F) -> F:
    """Wrap file-interacting storage methods to handle I/O and decoding errors

    Args:
        method (Callable[..., Any]):
            JSONFileStorage method performing file operations which may raise
            OSError or json.JSONDecodeError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError when the link file can't be
            read, written or decoded.

    Example:
        >>> @handle_file_storage_error
        ... def read(self):
        ...     return json.loads(self.path.read_text())
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except json.JSONDecodeError as e:
            raise DataStoreError(f'Link storage at {self.path} is not valid JSON.') from e
        except OSError as e:
            raise DataStoreError(f"Can't access link storage at {self.path}.") from e

    return wrapper
