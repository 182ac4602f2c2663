"""Unit tests for the shared behavior of LinkBaseDAO and IdentifiedLinkBaseDAO.

A minimal list-backed subclass stands in for a real data store.

Test coverage includes:

1. create()
   - Validates the candidate before reaching the data store.
   - Hands a fully defaulted LinkModel to _insert().
   - Rejects non-mapping candidates with a beartype violation.

2. seed()
   - Seeds the default links into an empty store.
   - Leaves a non-empty store untouched.

3. update()
   - Hands only validated fields to _update().
   - Invalid updates never reach the data store.

4. healthy()
   - Reports the backend healthcheck without raising.
"""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from linkcatalog.constants import DEFAULT_LINKS
from linkcatalog.models import LinkModel
from linkcatalog.dao.base import IdentifiedLinkBaseDAO
from linkcatalog.dao.exceptions import LinkValidationError


class ListLinkDAO(IdentifiedLinkBaseDAO):
    def __init__(self):
        self.links = []
        self.backend_check = MagicMock(return_value=True)

    def all(self, **kwargs):
        return list(self.links)

    def delete(self, link_id, **kwargs):
        return self.links.pop(int(link_id))

    def count(self, **kwargs):
        return len(self.links)

    def _healthcheck(self, raise_error=True):
        return self.backend_check(raise_error=raise_error)

    def _insert(self, link, **kwargs):
        stored = replace(link, id=str(len(self.links)))
        self.links.append(stored)
        return stored

    def _update(self, link_id, fields, **kwargs):
        position = int(link_id)
        self.links[position] = replace(self.links[position], **fields)
        return self.links[position]


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao():
    return ListLinkDAO()


# -------------------------------
# 1. create()
# -------------------------------


def test_create_applies_defaults(dao):
    """Ensure create() stores a defaulted link and returns it with identity."""
    link = dao.create({'title': 'Zoom Meeting', 'url': 'https://zoom.us'})

    assert link == LinkModel(title='Zoom Meeting', url='https://zoom.us', id='0')
    assert dao.all() == [link]


def test_create_invalid_candidate_stores_nothing(dao):
    """Ensure an invalid candidate raises before anything is stored."""
    with pytest.raises(LinkValidationError):
        dao.create({'url': 'https://zoom.us'})

    assert dao.count() == 0


def test_create_with_invalid_type(dao):
    """Ensure non-mapping candidates raise a beartype violation."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.create(['Zoom Meeting', 'https://zoom.us'])


# -------------------------------
# 2. seed()
# -------------------------------


def test_seed_empty_store(dao):
    """Ensure an empty store receives exactly the six default links."""
    seeded = dao.seed()

    assert seeded == 6
    assert [link.to_record() for link in dao.all()] == [dict(link) for link in DEFAULT_LINKS]


def test_seed_non_empty_store(dao):
    """Ensure seeding leaves a store with links untouched."""
    dao.create({'title': 'Zoom Meeting', 'url': 'https://zoom.us'})

    assert dao.seed() == 0
    assert dao.count() == 1


# -------------------------------
# 3. update()
# -------------------------------


def test_update_overwrites_only_supplied_fields(dao):
    """Ensure update() changes only the supplied fields."""
    dao.create({'title': 'Zoom Meeting', 'url': 'https://zoom.us', 'emoji': '💻'})

    link = dao.update('0', {'description': 'Video conference'})

    assert link == LinkModel(title='Zoom Meeting', url='https://zoom.us', emoji='💻', description='Video conference', id='0')


def test_update_invalid_fields_never_reach_store(dao):
    """Ensure invalid updates raise before _update() is called."""
    dao.create({'title': 'Zoom Meeting', 'url': 'https://zoom.us'})
    dao._update = MagicMock()

    with pytest.raises(LinkValidationError):
        dao.update('0', {'title': ''})

    dao._update.assert_not_called()


# -------------------------------
# 4. healthy()
# -------------------------------


def test_healthy_never_raises(dao):
    """Ensure healthy() asks the backend check not to raise."""
    dao.backend_check.return_value = False

    assert dao.healthy() is False
    dao.backend_check.assert_called_once_with(raise_error=False)
