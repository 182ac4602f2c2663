"""Unit tests for the LinkModel dataclass in models.py.

Test coverage includes:

1. Model creation and defaults
   - Ensures emoji and description default to the placeholder glyph and ''.
   - Ensures id and created_at default to None.

2. Serialization
   - to_record() returns only the persisted fields.
   - to_dict() adds id and createdAt only when set.

3. Immutability
   - Verifies that fields are frozen after creation.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, UTC

import pytest

from linkcatalog.constants import DEFAULT_EMOJI
from linkcatalog.models import LinkModel


# -------------------------------
# 1. Model creation and defaults
# -------------------------------


def test_link_model_defaults():
    """Ensure optional fields fall back to their defaults."""
    link = LinkModel(title='Zoom Meeting', url='https://zoom.us')

    assert link.emoji == DEFAULT_EMOJI == '🔗'
    assert link.description == ''
    assert link.id is None
    assert link.created_at is None


# -------------------------------
# 2. Serialization
# -------------------------------


def test_to_record_excludes_identity():
    """Ensure to_record() returns exactly the persisted field set."""
    link = LinkModel(title='Quizizz', url='https://quizizz.com', emoji='🎮', description='Kuis interaktif', id='5')

    assert link.to_record() == {
        'title': 'Quizizz',
        'url': 'https://quizizz.com',
        'emoji': '🎮',
        'description': 'Kuis interaktif',
    }


def test_to_dict_without_identity():
    """Ensure to_dict() omits id and createdAt for unsaved links."""
    link = LinkModel(title='Quizizz', url='https://quizizz.com')

    assert link.to_dict() == {'title': 'Quizizz', 'url': 'https://quizizz.com', 'emoji': '🔗', 'description': ''}


def test_to_dict_with_identity_and_timestamp():
    """Ensure to_dict() includes id and a UTC ISO-8601 createdAt."""
    created_at = datetime(2025, 10, 15, 12, 30, 0, 123456, tzinfo=UTC)
    link = LinkModel(title='Quizizz', url='https://quizizz.com', id='abc', created_at=created_at)

    data = link.to_dict()

    assert data['id'] == 'abc'
    assert data['createdAt'] == '2025-10-15T12:30:00.123Z'
    assert list(data) == ['id', 'title', 'url', 'emoji', 'description', 'createdAt']


# -------------------------------
# 3. Immutability
# -------------------------------


def test_link_model_is_frozen():
    """Ensure LinkModel fields can't be reassigned."""
    link = LinkModel(title='Zoom Meeting', url='https://zoom.us')

    with pytest.raises(FrozenInstanceError):
        link.title = 'Teams'
