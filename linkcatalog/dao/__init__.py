from linkcatalog.dao.base import LinkBaseDAO, IdentifiedLinkBaseDAO
from linkcatalog.dao.file import LinkJSONFileDAO
from linkcatalog.dao.redis import LinkRedisDAO
from linkcatalog.dao.factory import build_link_dao, get_link_dao


__all__ = [
    'LinkBaseDAO',
    'IdentifiedLinkBaseDAO',
    'LinkJSONFileDAO',
    'LinkRedisDAO',
    'build_link_dao',
    'get_link_dao',
]
