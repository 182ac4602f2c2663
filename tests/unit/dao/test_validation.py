"""Unit tests for link validation and default substitution.

Test coverage includes:

1. link_from_candidate()
   - Missing, empty, whitespace-only or non-string title/url raise LinkValidationError.
   - Omitted, None or empty emoji becomes the placeholder glyph.
   - Omitted or None description becomes ''.
   - Supplied optional fields are kept, unknown keys ignored.
   - Non-string optional fields raise LinkValidationError.

2. link_update_fields()
   - Only supplied known fields are returned.
   - Empty updates raise LinkValidationError.
   - Emptied title/url raise LinkValidationError.
   - Emptied emoji goes back to the placeholder glyph.
"""

import pytest

from linkcatalog.constants import DEFAULT_EMOJI
from linkcatalog.models import LinkModel
from linkcatalog.dao.validation import link_from_candidate, link_update_fields
from linkcatalog.dao.exceptions import LinkValidationError


# -------------------------------
# 1. link_from_candidate()
# -------------------------------


@pytest.mark.parametrize(
    'candidate',
    [
        {'url': 'https://zoom.us'},
        {'title': 'Zoom Meeting'},
        {'title': '', 'url': 'https://zoom.us'},
        {'title': 'Zoom Meeting', 'url': ''},
        {'title': '   ', 'url': 'https://zoom.us'},
        {'title': None, 'url': 'https://zoom.us'},
        {'title': 42, 'url': 'https://zoom.us'},
        {},
    ],
)
def test_candidate_missing_required_field(candidate):
    """Ensure a missing or empty title/url is rejected."""
    with pytest.raises(LinkValidationError):
        link_from_candidate(candidate)


def test_candidate_defaults():
    """Ensure omitted optional fields are materialized to their defaults."""
    link = link_from_candidate({'title': 'Zoom Meeting', 'url': 'https://zoom.us'})

    assert link == LinkModel(title='Zoom Meeting', url='https://zoom.us', emoji=DEFAULT_EMOJI, description='')


@pytest.mark.parametrize('emoji', [None, ''])
def test_candidate_empty_emoji_uses_placeholder(emoji):
    """Ensure a null or empty emoji is replaced by the placeholder glyph."""
    link = link_from_candidate({'title': 'Zoom Meeting', 'url': 'https://zoom.us', 'emoji': emoji, 'description': None})

    assert link.emoji == DEFAULT_EMOJI
    assert link.description == ''


def test_candidate_keeps_supplied_fields_and_ignores_unknown_keys():
    """Ensure supplied optional fields survive and unknown keys are dropped."""
    link = link_from_candidate(
        {'title': 'Zoom Meeting', 'url': 'zoom', 'emoji': '💻', 'description': 'Video conference', 'id': '7', 'clicks': 3}
    )

    assert link == LinkModel(title='Zoom Meeting', url='zoom', emoji='💻', description='Video conference')


@pytest.mark.parametrize('field', ['emoji', 'description'])
def test_candidate_non_string_optional_field(field):
    """Ensure optional fields must be strings when supplied."""
    with pytest.raises(LinkValidationError, match=field):
        link_from_candidate({'title': 'Zoom Meeting', 'url': 'https://zoom.us', field: ['not', 'a', 'string']})


# -------------------------------
# 2. link_update_fields()
# -------------------------------


def test_update_fields_keeps_only_supplied_fields():
    """Ensure absent and None fields are left out of the update."""
    update = link_update_fields({'description': 'Kelas online', 'title': None, 'clicks': 3})

    assert update == {'description': 'Kelas online'}


def test_update_fields_allows_empty_description():
    """Ensure the description can be cleared."""
    assert link_update_fields({'description': ''}) == {'description': ''}


@pytest.mark.parametrize('fields', [{}, {'clicks': 3}, {'title': None}])
def test_update_fields_without_known_fields(fields):
    """Ensure an update must supply at least one known field."""
    with pytest.raises(LinkValidationError, match='No fields to update'):
        link_update_fields(fields)


@pytest.mark.parametrize('fields', [{'title': ''}, {'url': '  '}, {'url': 5}])
def test_update_fields_rejects_empty_required_fields(fields):
    """Ensure title and url can't be emptied by an update."""
    with pytest.raises(LinkValidationError):
        link_update_fields(fields)


def test_update_fields_emptied_emoji_uses_placeholder():
    """Ensure an emptied emoji goes back to the placeholder glyph."""
    assert link_update_fields({'emoji': ''}) == {'emoji': DEFAULT_EMOJI}
