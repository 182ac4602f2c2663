from linkcatalog.dao.file.storage import JSONFileStorage
from linkcatalog.dao.file.mixins import JSONFileStorageMixin
from linkcatalog.dao.file.link_json_file_dao import LinkJSONFileDAO


__all__ = [
    'JSONFileStorage',
    'JSONFileStorageMixin',
    'LinkJSONFileDAO',
]
