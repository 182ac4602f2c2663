"""Data Access Object (DAO) implementation for links stored in a JSON file

This module provides an index-addressed implementation of LinkBaseDAO which
keeps the whole collection in a single JSON array on local storage.

Responsibilities:
    - List, create and delete links by position;
    - Seed the default links when the link file doesn't exist yet;
    - Serialize every load-modify-save cycle behind one exclusive lock;
    - Raise appropriate DAO exceptions.

Classes:
    LinkJSONFileDAO:
        DAO for storing and retrieving LinkModel in a JSON file.

NOTE:
    A link's id is its position in the stored array. Deleting a link shifts
    every later link down by one, so ids are only meaningful until the next
    deletion. Partial updates are not offered by this store.

Example:
    >>> dao = LinkJSONFileDAO(file_path='data/links.json')
    >>> dao.seed()
    6
    >>> dao.create({'title': 'Python', 'url': 'https://python.org'}).id
    '6'
    >>> dao.delete('0').title
    'LMS Kampus'
    >>> dao.all()[0].title
    'Google Classroom'
"""

import re
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from beartype import beartype

from linkcatalog.constants import DEFAULT_EMOJI, DEFAULT_LINKS
from linkcatalog.models import LinkModel
from linkcatalog.dao.base import LinkBaseDAO
from linkcatalog.dao.file.mixins import JSONFileStorageMixin
from linkcatalog.dao.validation import link_from_candidate
from linkcatalog.dao.exceptions import DataStoreError, LinkNotFoundError


logger = logging.getLogger(__name__)

# ids are ASCII decimal positions; int() alone also accepts underscores and padding
POSITION_PATTERN = re.compile(r'-?[0-9]+')


class LinkJSONFileDAO(JSONFileStorageMixin, LinkBaseDAO):
    """JSON file-based Data Access Object (DAO) for managing links

    This class implements the LinkBaseDAO interface using a JSON array on disk.

    Attributes (see JSONFileStorageMixin):
        storage (JSONFileStorage):
            Whole-document storage for the link file.

    Methods:
        all(**kwargs) -> list[LinkModel]:
            Return links in stored order, each with its position as id.

        create(candidate: Mapping, **kwargs) -> LinkModel:
            Validate and append a link. Its id is the new last position.

        delete(link_id: str | int, **kwargs) -> LinkModel:
            Remove the link at a position and return it.
            Raises LinkNotFoundError for non-integer or out-of-range positions.

        count(**kwargs) -> int:
            Number of stored links.

        seed(links: Iterable[Mapping]) -> int:
            Write the default links if the link file doesn't exist.
    """

    @beartype
    def all(self, **kwargs) -> list[LinkModel]:
        """Return every link in stored order

        Reads don't take the writer lock: writes replace the file atomically.

        Raises:
            DataStoreError:
                If the link file can't be read or is malformed.
        """
        return [self._from_record(record, position) for position, record in enumerate(self.storage.read())]

    @beartype
    def delete(self, link_id: str | int, **kwargs) -> LinkModel:
        """Remove the link at a position

        Args:
            link_id (str | int):
                Position of the link, as returned in its id.

        Returns:
            LinkModel: the removed link, carrying the position it had.

        Raises:
            LinkNotFoundError:
                If link_id isn't an integer or is out of range. Nothing is written.
            DataStoreError:
                If the link file can't be read or written.

        Example:
            >>> dao.delete('2')
            LinkModel(title='Zoom Meeting', url='https://zoom.us', emoji='💻', ...)
        """
        if not POSITION_PATTERN.fullmatch(str(link_id)):
            raise LinkNotFoundError(f"Link with id '{link_id}' not found.")
        position = int(link_id)

        with self.storage.exclusive():
            records = self.storage.read()
            if not 0 <= position < len(records):
                raise LinkNotFoundError(f"Link with id '{link_id}' not found.")

            removed = self._from_record(records[position], position)
            del records[position]
            self.storage.write(records)

        logger.debug('Deleted link at position %s.', position, extra={'path': str(self.storage.path)})
        return removed

    @beartype
    def count(self, **kwargs) -> int:
        return len(self.storage.read())

    @beartype
    def seed(self, links: Iterable[Mapping[str, Any]] = DEFAULT_LINKS) -> int:
        """Write the default links if the link file doesn't exist yet

        An existing file is never touched, even if it holds an empty array.

        Returns:
            int: number of links written (0 if the file already existed).
        """
        with self.storage.exclusive():
            if self.storage.exists():
                return 0
            records = [link_from_candidate(candidate).to_record() for candidate in links]
            self.storage.write(records)

        logger.info('Seeded missing link file with %s default links.', len(records), extra={'path': str(self.storage.path)})
        return len(records)

    def _insert(self, link: LinkModel, **kwargs) -> LinkModel:
        with self.storage.exclusive():
            records = self.storage.read()
            records.append(link.to_record())
            self.storage.write(records)
            position = len(records) - 1

        logger.debug('Appended link at position %s.', position, extra={'path': str(self.storage.path)})
        return replace(link, id=str(position))

    def _from_record(self, record: Any, position: int) -> LinkModel:
        if (
            not isinstance(record, dict)
            or not _is_text(record.get('title'))
            or not _is_text(record.get('url'))
            or any(not isinstance(record.get(field), str | None) for field in ('emoji', 'description'))
        ):
            raise DataStoreError(f'Malformed link record at position {position} in {self.storage.path}.')

        return LinkModel(
            id=str(position),
            title=record['title'],
            url=record['url'],
            emoji=record.get('emoji') or DEFAULT_EMOJI,
            description=record.get('description') or '',
        )


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
