"""Unit tests for the link store factory.

Test coverage includes:

1. build_link_dao()
   - json_file backend creates a LinkJSONFileDAO (relative paths resolve against the project root).
   - redis backend passes redis_* options and the app prefix to LinkRedisDAO.
   - Unknown, missing or multiple backends raise BadConfigurationError.

2. get_link_dao()
   - Builds, seeds and caches one link store per process.
   - Failed construction isn't cached.
"""

from unittest.mock import MagicMock

import pytest

import linkcatalog.dao.factory as factory
from linkcatalog.constants import ENV
from linkcatalog.exceptions import BadConfigurationError
from linkcatalog.dao.file import LinkJSONFileDAO
from linkcatalog.dao.exceptions import DataStoreError
from linkcatalog.dao.factory import build_link_dao, get_link_dao


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def clear_link_dao_cache():
    get_link_dao.cache_clear()
    yield
    get_link_dao.cache_clear()


@pytest.fixture
def redis_dao_cls(monkeypatch):
    _redis_dao_cls = MagicMock()
    monkeypatch.setattr(factory, 'LinkRedisDAO', _redis_dao_cls)
    return _redis_dao_cls


# -------------------------------
# 1. build_link_dao()
# -------------------------------


def test_build_json_file_dao_absolute_path(tmp_path):
    """Ensure an absolute path is used as-is and its directory is created."""
    path = tmp_path / 'data' / 'links.json'

    dao = build_link_dao({'json_file': {'path': str(path)}})

    assert isinstance(dao, LinkJSONFileDAO)
    assert dao.storage.path == path
    assert path.parent.is_dir()


def test_build_json_file_dao_relative_path(tmp_path, monkeypatch):
    """Ensure a relative path resolves against the project root."""
    monkeypatch.setenv(ENV.App.PROJECT_ROOT, str(tmp_path))

    dao = build_link_dao({'json_file': {'path': 'data/links.json'}})

    assert dao.storage.path == tmp_path / 'data' / 'links.json'


def test_build_json_file_dao_without_path():
    """Ensure the json_file backend requires a path option."""
    with pytest.raises(BadConfigurationError, match="requires a 'path' option"):
        build_link_dao({'json_file': {}})


def test_build_redis_dao(redis_dao_cls, monkeypatch):
    """Ensure redis options are prefixed with redis_ and the app prefix is passed."""
    monkeypatch.setenv(ENV.App.APP_NAME, 'linkcatalog')
    monkeypatch.setenv(ENV.App.APP_ENV, 'dev')

    dao = build_link_dao({'redis': {'host': 'redis', 'port': 6379, 'db': 0, 'socket_timeout': 2}})

    assert dao is redis_dao_cls.return_value
    redis_dao_cls.assert_called_once_with(
        redis_host='redis',
        redis_port=6379,
        redis_db=0,
        redis_socket_timeout=2,
        prefix='linkcatalog:dev',
    )


@pytest.mark.parametrize(
    'app_config',
    [
        {'mongodb': {'uri': 'mongodb://localhost'}},
        {},
        {'json_file': {'path': 'links.json'}, 'redis': {'host': 'redis'}},
    ],
)
def test_build_with_bad_backend(app_config):
    """Ensure unknown, missing or multiple backends raise BadConfigurationError."""
    with pytest.raises(BadConfigurationError):
        build_link_dao(app_config)


# -------------------------------
# 2. get_link_dao()
# -------------------------------


def test_get_link_dao_builds_seeds_and_caches(tmp_path, monkeypatch):
    """Ensure the store is created once, seeded, and shared across calls."""
    load_config = MagicMock(return_value={'json_file': {'path': str(tmp_path / 'links.json')}})
    monkeypatch.setattr(factory, 'load_config', load_config)

    dao = get_link_dao()

    assert get_link_dao() is dao
    load_config.assert_called_once_with('links_api')
    assert dao.count() == 6


def test_get_link_dao_failure_is_not_cached(monkeypatch):
    """Ensure a failed construction is retried on the next call."""
    dao = MagicMock()
    dao.seed.return_value = 0
    build = MagicMock(side_effect=[DataStoreError("Can't connect to Redis at redis:6379/0."), dao])
    monkeypatch.setattr(factory, 'load_config', MagicMock(return_value={'redis': {}}))
    monkeypatch.setattr(factory, 'build_link_dao', build)

    with pytest.raises(DataStoreError):
        get_link_dao()

    assert get_link_dao() is dao
    assert build.call_count == 2
