"""Validation and default substitution for link store input.

Every write path of every link store goes through these two functions, so the
required-field rules and the default values live in one place.

Rules:
    - `title` and `url` must be non-empty strings (whitespace only counts as empty).
    - `emoji` falls back to DEFAULT_EMOJI when absent, None or empty (an update
      setting it to an empty string restores the placeholder).
    - `description` falls back to an empty string when absent or None.
    - Optional fields, when supplied, must be strings.
    - Unknown keys are ignored.

Functions:
    link_from_candidate(candidate: Mapping) -> LinkModel
        Validate a create payload and materialize defaults.

    link_update_fields(fields: Mapping) -> dict[str, str]
        Validate a partial update payload and keep only supplied known fields.

Example:
    >>> link_from_candidate({'title': 'Quizizz', 'url': 'https://quizizz.com'})
    LinkModel(title='Quizizz', url='https://quizizz.com', emoji='🔗', description='', id=None, created_at=None)

    >>> link_update_fields({'description': 'Kuis interaktif', 'clicks': 3})
    {'description': 'Kuis interaktif'}
"""

from collections.abc import Mapping
from typing import Any

from linkcatalog.constants import DEFAULT_EMOJI
from linkcatalog.models import LinkModel, RECORD_FIELDS
from linkcatalog.dao.exceptions import LinkValidationError


REQUIRED_FIELDS = ('title', 'url')


def _required(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise LinkValidationError(f"Field '{field}' is required and must be a non-empty string.")
    return value


def _optional(payload: Mapping[str, Any], field: str) -> str | None:
    value = payload.get(field)
    if value is not None and not isinstance(value, str):
        raise LinkValidationError(f"Field '{field}' must be a string.")
    return value


def link_from_candidate(candidate: Mapping[str, Any]) -> LinkModel:
    """Build a storable LinkModel from a create payload

    Args:
        candidate (Mapping[str, Any]):
            Caller-supplied fields: title, url, emoji (optional), description (optional).

    Returns:
        LinkModel:
            Link without identity, with defaults applied to omitted optional fields.

    Raises:
        LinkValidationError:
            If title or url is missing or empty, or an optional field is not a string.
    """
    title = _required(candidate, 'title')
    url = _required(candidate, 'url')
    emoji = _optional(candidate, 'emoji')
    description = _optional(candidate, 'description')

    return LinkModel(
        title=title,
        url=url,
        emoji=emoji or DEFAULT_EMOJI,
        description=description if description is not None else '',
    )


def link_update_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    """Select the fields a partial update overwrites

    Fields absent from the payload (or explicitly None) are left untouched by
    the update, they are not reset to their defaults.

    Args:
        fields (Mapping[str, Any]):
            Caller-supplied partial link.

    Returns:
        dict[str, str]:
            Known, supplied fields in record order.

    Raises:
        LinkValidationError:
            If no known field is supplied, a supplied title or url is empty,
            or a supplied field is not a string.
    """
    update = {}
    for field in RECORD_FIELDS:
        if fields.get(field) is None:
            continue
        update[field] = _required(fields, field) if field in REQUIRED_FIELDS else _optional(fields, field)

    # an emptied emoji goes back to the placeholder, same as on create
    if update.get('emoji') == '':
        update['emoji'] = DEFAULT_EMOJI

    if not update:
        raise LinkValidationError(f'No fields to update (expected any of: {", ".join(RECORD_FIELDS)}).')
    return update
