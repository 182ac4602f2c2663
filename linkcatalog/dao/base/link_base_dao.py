"""Abstract base classes for link store data access objects (DAOs).

This interface establishes a consistent contract for every link store,
regardless of the underlying storage mechanism (e.g., a JSON file or Redis).

Responsibilities:
    - Provide List, Create and Delete operations over the link collection
      (and Update for identifier-addressed stores).
    - Route every create/update through the shared validation and default rules.
    - Seed an empty store with the default link set.
    - Standardize error handling across data store implementations.

Addressing:
    Index-addressed stores (LinkBaseDAO) name a link by its current position in
    the stored sequence. Positions shift down after a deletion, so an id read by
    a client may name a different link later on.

    Identifier-addressed stores (IdentifiedLinkBaseDAO) name a link by a unique
    generated token that never changes and is never reused.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkcatalog.dao.file import LinkJSONFileDAO

        >>> dao = LinkJSONFileDAO(file_path='data/links.json')
        >>> dao.seed()
        6

        >>> link = dao.create({'title': 'Docs', 'url': 'https://docs.python.org'})
        >>> link.id, link.emoji
        ('6', '🔗')

        >>> dao.delete('6').title
        'Docs'
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from beartype import beartype

from linkcatalog.constants import DEFAULT_LINKS
from linkcatalog.models import LinkModel
from linkcatalog.dao.validation import link_from_candidate, link_update_fields


logger = logging.getLogger(__name__)


class LinkBaseDAO(ABC):
    """Interface for link store data access objects (DAOs).

    Methods:
        all(**kwargs) -> list[LinkModel]:
            Return every stored link.
            Raises DataStoreError on read failure.

        create(candidate: Mapping, **kwargs) -> LinkModel:
            Validate, default and store a new link.
            Raises LinkValidationError if title or url is missing.
            Raises DataStoreError on read or write failure.

        delete(link_id: str | int, **kwargs) -> LinkModel:
            Remove a single link and return it.
            Raises LinkNotFoundError if link_id doesn't name a live link.
            Raises DataStoreError on read or write failure.

        count(**kwargs) -> int:
            Return the number of stored links.
            Raises DataStoreError on read failure.

        seed(links: Iterable[Mapping]) -> int:
            Populate an empty store with default links.

        healthy() -> bool:
            Return whether the data store is reachable.

    Subclassing:
        Datastore-specific implementations must implement all(), delete(),
        count() and _insert(); backend mixins provide _healthcheck(). create()
        is shared: it validates the candidate and hands a fully defaulted
        LinkModel to _insert().
    """

    @abstractmethod
    def all(self, **kwargs) -> list[LinkModel]:
        """Return every stored link.

        Args:
            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            list[LinkModel]: stored links, in the data store's listing order.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, link_id: str | int, **kwargs) -> LinkModel:
        """Remove exactly one link from the data store.

        Args:
            link_id (str | int):
                Position (index-addressed) or identifier (identifier-addressed).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: the removed link.

        Raises:
            LinkNotFoundError:
                If link_id doesn't name a live link.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of stored links.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Check that the data store is reachable (provided by the backend mixins)."""
        pass

    @abstractmethod
    def _insert(self, link: LinkModel, **kwargs) -> LinkModel:
        """Persist a validated link and assign its identity.

        Args:
            link (LinkModel):
                Validated link with defaults applied and no identity.

        Returns:
            LinkModel: the stored link including its assigned identity.
        """
        pass

    @beartype
    def create(self, candidate: Mapping[str, Any], **kwargs) -> LinkModel:
        """Validate a candidate link and store it.

        Args:
            candidate (Mapping[str, Any]):
                title, url, emoji (optional) and description (optional).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: the stored link including its assigned identity.

        Raises:
            LinkValidationError:
                If title or url is missing or empty. Nothing is stored.

            DataStoreError:
                If there is an error in the data store.
        """
        link = link_from_candidate(candidate)
        return self._insert(link, **kwargs)

    def healthy(self) -> bool:
        """Return True if the data store is currently reachable and usable."""
        return self._healthcheck(raise_error=False)

    def seed(self, links: Iterable[Mapping[str, Any]] = DEFAULT_LINKS) -> int:
        """Populate an empty data store with a default link set

        The default implementation seeds when count() is 0 and is not atomic.
        Both concrete stores override it: the file store seeds only when its
        file doesn't exist yet, the Redis store seeds in one server-side script.

        Args:
            links (Iterable[Mapping[str, Any]]):
                Links to create, in creation order. Defaults to DEFAULT_LINKS.

        Returns:
            int: number of links written (0 if the store wasn't empty).
        """
        if self.count() > 0:
            return 0

        seeded = 0
        for candidate in links:
            self.create(candidate)
            seeded += 1

        logger.info('Seeded empty link store with %s default links.', seeded, extra={'store': type(self).__name__})
        return seeded


class IdentifiedLinkBaseDAO(LinkBaseDAO):
    """Interface for identifier-addressed link stores.

    Adds partial in-place updates on top of LinkBaseDAO. Every link carries a
    generated identifier and a creation timestamp.

    Methods:
        update(link_id: str, fields: Mapping, **kwargs) -> LinkModel:
            Overwrite only the supplied fields of a stored link.
            Raises LinkValidationError on an empty or invalid update.
            Raises LinkNotFoundError if link_id doesn't name a live link.
            Raises DataStoreError on read or write failure.
    """

    @abstractmethod
    def _update(self, link_id: str, fields: dict[str, str], **kwargs) -> LinkModel:
        """Overwrite validated fields of a stored link atomically.

        Returns:
            LinkModel: the link after the update.

        Raises:
            LinkNotFoundError:
                If link_id doesn't name a live link.
        """
        pass

    @beartype
    def update(self, link_id: str, fields: Mapping[str, Any], **kwargs) -> LinkModel:
        """Partially update a stored link.

        Fields absent from `fields` keep their stored value.

        Args:
            link_id (str):
                Identifier of the link.

            fields (Mapping[str, Any]):
                Partial link: any of title, url, emoji, description.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: the link after the update.

        Raises:
            LinkValidationError:
                If no known field is supplied or a supplied title/url is empty.

            LinkNotFoundError:
                If link_id doesn't name a live link.

            DataStoreError:
                If there is an error in the data store.
        """
        update = link_update_fields(fields)
        return self._update(link_id, update, **kwargs)
