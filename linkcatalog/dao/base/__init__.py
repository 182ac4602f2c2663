from linkcatalog.dao.base.link_base_dao import LinkBaseDAO, IdentifiedLinkBaseDAO


__all__ = [
    'LinkBaseDAO',
    'IdentifiedLinkBaseDAO',
]
