"""Data Access Object (DAO) implementation for managing links in Redis

This module provides a Redis-based, identifier-addressed implementation of
IdentifiedLinkBaseDAO. Each link is one Redis hash (the link document) and a
sorted set indexes all live link ids by creation time.

Responsibilities:
    - Insert, list, update and delete link documents;
    - Generate unique link ids and creation timestamps;
    - Keep every mutation atomic on the Redis server (no client-side read-modify-write);
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving LinkModel in a Redis datastore.

Example:
    >>> from linkcatalog.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix="linkcatalog:dev")

    >>> link = dao.create({'title': 'Zoom Meeting', 'url': 'https://zoom.us'})
    >>> link.id
    '9f1c4e0b2a6d4d8c8a3e5b7f1d2c3b4a'

    >>> dao.update(link.id, {'description': 'Video conference'}).description
    'Video conference'

    >>> dao.delete(link.id).title
    'Zoom Meeting'
"""

import uuid
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta, UTC
from typing import Any

from beartype import beartype

from linkcatalog.constants import DEFAULT_LINKS
from linkcatalog.models import LinkModel
from linkcatalog.dao.base import IdentifiedLinkBaseDAO
from linkcatalog.dao.redis.mixins import RedisClientMixin
from linkcatalog.dao.redis.helpers import handle_redis_connection_error
from linkcatalog.dao.validation import link_from_candidate
from linkcatalog.dao.exceptions import LinkNotFoundError


logger = logging.getLogger(__name__)


# Redis runs Lua 5.1 (global unpack), other embeddings only ship table.unpack.
# KEYS[1] = link document key, ARGV = field/value pairs to overwrite.
# Returns nil for a missing document, otherwise the document after the update.
UPDATE_LINK_SCRIPT = """
local unpack = table.unpack or unpack
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
redis.call('HSET', KEYS[1], unpack(ARGV))
return redis.call('HGETALL', KEYS[1])
"""

# KEYS[1] = links index, KEYS[2..n] = link document keys.
# ARGV = per link: id, score, number of field/value items, field/value items.
# Writes nothing and returns 0 if the index isn't empty, else the number of links written.
SEED_LINKS_SCRIPT = """
local unpack = table.unpack or unpack
if redis.call('ZCARD', KEYS[1]) > 0 then
    return 0
end
local i = 1
for k = 2, #KEYS do
    local items = tonumber(ARGV[i + 2])
    redis.call('HSET', KEYS[k], unpack(ARGV, i + 3, i + 2 + items))
    redis.call('ZADD', KEYS[1], ARGV[i + 1], ARGV[i])
    i = i + 3 + items
end
return #KEYS - 1
"""


class LinkRedisDAO(RedisClientMixin, IdentifiedLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing links

    This class implements the IdentifiedLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        all(**kwargs) -> list[LinkModel]:
            Return all links, newest first.

        create(candidate: Mapping, **kwargs) -> LinkModel:
            Validate and insert a link with a generated id and creation time.

        update(link_id: str, fields: Mapping, **kwargs) -> LinkModel:
            Overwrite the supplied fields of a link.
            Raises LinkNotFoundError when the id doesn't exist.

        delete(link_id: str, **kwargs) -> LinkModel:
            Remove a link and return it.
            Raises LinkNotFoundError when the id doesn't exist.

        count(**kwargs) -> int:
            Number of live links.

        seed(links: Iterable[Mapping]) -> int:
            Write the default links if the index is empty, atomically.

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._update_script = self.redis.register_script(UPDATE_LINK_SCRIPT)
        self._seed_script = self.redis.register_script(SEED_LINKS_SCRIPT)

    @handle_redis_connection_error
    @beartype
    def all(self, **kwargs) -> list[LinkModel]:
        """Return all links ordered by descending creation time

        The id index and the documents are read in two round trips. A link
        deleted in between is skipped rather than returned half-empty.

        Example:
            >>> [link.title for link in dao.all()]
            ['Quizizz', 'Google Drive', ...]
        """
        link_ids = self.redis.zrevrange(self.keys.links_index_key(), 0, -1)
        if not link_ids:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for link_id in link_ids:
                pipe.hgetall(self.keys.link_key(link_id))
            documents = pipe.execute()

        return [self._from_document(document) for document in documents if document]

    @handle_redis_connection_error
    @beartype
    def delete(self, link_id: str, **kwargs) -> LinkModel:
        """Remove a link document and its index entry

        The document read, the document deletion and the index removal run in
        one Redis transaction, so a concurrent delete of the same id can't both
        report success.

        Args:
            link_id (str):
                Identifier of the link.

        Returns:
            LinkModel: the removed link.

        Raises:
            LinkNotFoundError:
                If no link with this id exists.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        link_key = self.keys.link_key(link_id)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hgetall(link_key)
            pipe.delete(link_key)
            pipe.zrem(self.keys.links_index_key(), link_id)
            document, _, _ = pipe.execute()

        if not document:
            raise LinkNotFoundError(f"Link with id '{link_id}' not found.")

        logger.debug('Deleted link document.', extra={'link_id': link_id})
        return self._from_document(document)

    @handle_redis_connection_error
    @beartype
    def count(self, **kwargs) -> int:
        return self.redis.zcard(self.keys.links_index_key())

    @handle_redis_connection_error
    @beartype
    def seed(self, links: Iterable[Mapping[str, Any]] = DEFAULT_LINKS) -> int:
        """Populate an empty index with a default link set in one server-side step

        The emptiness check and every document/index write run in a single
        script. Concurrent cold starts therefore seed at most once, and a
        seed is never left half-written.

        Args:
            links (Iterable[Mapping[str, Any]]):
                Links to create, in creation order. Defaults to DEFAULT_LINKS.

        Returns:
            int: number of links written (0 if the index wasn't empty).

        Raises:
            LinkValidationError:
                If a link is invalid. Nothing is written.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        now = datetime.now(UTC)
        keys = [self.keys.links_index_key()]
        args = []
        for position, candidate in enumerate(links):
            # one microsecond apart so creation order survives in the index
            link = replace(link_from_candidate(candidate), id=uuid.uuid4().hex, created_at=now + timedelta(microseconds=position))
            document = self._to_document(link)
            keys.append(self.keys.link_key(link.id))
            args.extend([link.id, link.created_at.timestamp(), len(document) * 2])
            args.extend(item for field_value in document.items() for item in field_value)

        seeded = self._seed_script(keys=keys, args=args)
        if seeded:
            logger.info('Seeded empty link store with %s default links.', seeded, extra={'store': self.__class__.__name__})
        return seeded

    @handle_redis_connection_error
    def _insert(self, link: LinkModel, **kwargs) -> LinkModel:
        # NOTE: ids are random UUIDs, so a deleted id is never handed out again.
        #       The document and its index entry are written in one transaction
        #       so a listing never sees an indexed id without its document.
        stored = replace(link, id=uuid.uuid4().hex, created_at=datetime.now(UTC))

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(self.keys.link_key(stored.id), mapping=self._to_document(stored))
            pipe.zadd(self.keys.links_index_key(), {stored.id: stored.created_at.timestamp()})
            pipe.execute()

        logger.debug('Inserted link document.', extra={'link_id': stored.id})
        return stored

    @handle_redis_connection_error
    def _update(self, link_id: str, fields: dict[str, str], **kwargs) -> LinkModel:
        # Existence check and overwrite run as one server-side script: a link
        # deleted concurrently is never recreated as a partial document.
        args = [item for field_value in fields.items() for item in field_value]
        reply = self._update_script(keys=[self.keys.link_key(link_id)], args=args)

        if reply is None:
            raise LinkNotFoundError(f"Link with id '{link_id}' not found.")

        logger.debug('Updated link document.', extra={'link_id': link_id, 'fields': sorted(fields)})
        return self._from_document(dict(zip(reply[::2], reply[1::2])))

    @staticmethod
    def _to_document(link: LinkModel) -> dict[str, str]:
        return {
            'id': link.id,
            **link.to_record(),
            'created_at': link.created_at.isoformat(),
        }

    @staticmethod
    def _from_document(document: dict[str, str]) -> LinkModel:
        return LinkModel(
            id=document['id'],
            title=document['title'],
            url=document['url'],
            emoji=document['emoji'],
            description=document['description'],
            created_at=datetime.fromisoformat(document['created_at']),
        )
