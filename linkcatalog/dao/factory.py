"""Construction of the process-wide link store.

Functions:
    build_link_dao(app_config: dict) -> LinkBaseDAO
        Create the link store for the active backend configuration.

    get_link_dao(function_name: str) -> LinkBaseDAO
        Return the link store owned by this process, creating and seeding it
        on first use (i.e. on a Lambda cold start).

Example:
    >>> dao = build_link_dao({'json_file': {'path': 'data/links.json'}})
    >>> type(dao).__name__
    'LinkJSONFileDAO'
"""

import logging
import functools
from pathlib import Path
from typing import Any

from linkcatalog.constants import Backend, LINKS_API_FUNCTION
from linkcatalog.exceptions import BadConfigurationError
from linkcatalog.types import AppConfig
from linkcatalog.dao.base import LinkBaseDAO
from linkcatalog.dao.file import LinkJSONFileDAO
from linkcatalog.dao.redis import LinkRedisDAO
from linkcatalog.dao.exceptions import DataStoreError
from linkcatalog.utils.config import load_config, app_prefix, project_root


logger = logging.getLogger(__name__)


def _json_file_path(options: dict[str, Any]) -> Path:
    try:
        path = Path(options['path'])
    except (KeyError, TypeError) as e:
        raise BadConfigurationError("The 'json_file' backend requires a 'path' option.") from e

    if not path.is_absolute():
        path = project_root() / path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DataStoreError(f"Can't create link storage directory {path.parent}.") from e
    return path


def build_link_dao(app_config: AppConfig) -> LinkBaseDAO:
    """Create the link store for the active backend

    Args:
        app_config (AppConfig):
            `{<backend>: {<options>}}` as returned by load_config().
            Relative json_file paths resolve against the project root.

    Returns:
        LinkBaseDAO: LinkJSONFileDAO or LinkRedisDAO.

    Raises:
        BadConfigurationError:
            If the backend is unknown or its options are incomplete.
        DataStoreError:
            If the backend fails its startup healthcheck.
    """
    if len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one active backend, got {sorted(app_config)}.')

    ((backend, options),) = app_config.items()
    options = options or {}

    if backend == Backend.JSON_FILE:
        return LinkJSONFileDAO(file_path=_json_file_path(options))
    elif backend == Backend.REDIS:
        redis_config = {f'redis_{k}': v for k, v in options.items()}
        return LinkRedisDAO(**redis_config, prefix=app_prefix())
    else:
        raise BadConfigurationError(f"Unknown link store backend '{backend}'.")


@functools.cache
def get_link_dao(function_name: str = LINKS_API_FUNCTION) -> LinkBaseDAO:
    """Return this process's link store, seeding it on first use

    The store is built once per process and shared by every handler running
    in it. A failed construction isn't cached: the error propagates and the
    next call tries again.

    Args:
        function_name (str):
            Configuration section to load. Defaults to LINKS_API_FUNCTION.

    Returns:
        LinkBaseDAO: the seeded link store.

    Raises:
        ConfigurationError:
            If the configuration can't be loaded or is invalid.
        DataStoreError:
            If the backend is unreachable.
    """
    dao = build_link_dao(load_config(function_name))
    seeded = dao.seed()
    logger.info(
        'Link store ready.',
        extra={'store': type(dao).__name__, 'functionName': function_name, 'seeded': seeded},
    )
    return dao
