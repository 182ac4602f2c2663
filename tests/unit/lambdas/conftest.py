from datetime import datetime, UTC
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkcatalog.constants import ENV
from linkcatalog.types import LambdaContext
from linkcatalog.models import LinkModel
from linkcatalog.dao.file import LinkJSONFileDAO
from linkcatalog.dao.redis import LinkRedisDAO


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    # Handlers only turn unexpected errors into 500s when deployed
    monkeypatch.setenv(ENV.App.APP_ENV, 'test')
    monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'links_api'})


@pytest.fixture
def zoom_link() -> LinkModel:
    return LinkModel(
        id='9f1c4e0b2a6d4d8c8a3e5b7f1d2c3b4a',
        title='Zoom Meeting',
        url='https://zoom.us',
        emoji='💻',
        description='Video conference',
        created_at=datetime(2025, 10, 15, 12, 30, tzinfo=UTC),
    )


@pytest.fixture
def redis_dao() -> LinkRedisDAO:
    return MagicMock(spec=LinkRedisDAO)


@pytest.fixture
def file_dao() -> LinkJSONFileDAO:
    return MagicMock(spec=LinkJSONFileDAO)
