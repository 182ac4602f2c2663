from linkcatalog.dao.redis.redis_key_schema import RedisKeySchema
from linkcatalog.dao.redis.mixins import RedisClientMixin
from linkcatalog.dao.redis.link_redis_dao import LinkRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
]
