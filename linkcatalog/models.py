from dataclasses import dataclass
from datetime import datetime
from typing import Any

from linkcatalog.constants import DEFAULT_EMOJI


RECORD_FIELDS = ('title', 'url', 'emoji', 'description')


# fmt: off
@dataclass(frozen=True)
class LinkModel:
    """Represent one bookmarked link.

    Attributes:
        title (str):
            Display title, never empty.
        url (str):
            Target URL, never empty. The format is not validated.
        emoji (str):
            Glyph shown next to the link. Defaults to DEFAULT_EMOJI.
        description (str):
            Free-form description. Defaults to an empty string.
        id (str | None):
            Identity assigned by the link store. For index-addressed stores this
            is the record's current position, for identifier-addressed stores a
            unique token which never changes. None until the link is stored.
        created_at (datetime | None):
            Creation time (UTC). Only set by identifier-addressed stores.

    Example:
        >>> link = LinkModel(title='Zoom Meeting', url='https://zoom.us')
        >>> link.emoji
        '🔗'
        >>> link.to_record()
        {'title': 'Zoom Meeting', 'url': 'https://zoom.us', 'emoji': '🔗', 'description': ''}
    """
    title: str                          # Display title
    url: str                            # Target URL
    emoji: str = DEFAULT_EMOJI          # Placeholder glyph when omitted
    description: str = ''               # Empty when omitted
    id: str | None = None               # Position or generated identifier
    created_at: datetime | None = None  # Creation timestamp (identifier-addressed only)
    # fmt: on

    def to_record(self) -> dict[str, str]:
        """Return the persisted field set (no identity, no timestamp)."""
        return {field: getattr(self, field) for field in RECORD_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable API representation."""
        data: dict[str, Any] = {}
        if self.id is not None:
            data['id'] = self.id
        data.update(self.to_record())
        if self.created_at is not None:
            data['createdAt'] = self.created_at.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
        return data
