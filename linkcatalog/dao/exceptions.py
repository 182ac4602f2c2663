"""Exceptions related to link store (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkValidationError:
        Raised when caller-supplied link data violates the required-field rules.

    LinkNotFoundError:
        Raised when an index or identifier does not name a live link.

    DataStoreError:
        Raised when the backing data store cannot be read or written.

Example:
    >>> from linkcatalog.dao.exceptions import LinkNotFoundError
    >>> raise LinkNotFoundError("Link with id '42' not found.")
    Traceback (most recent call last):
        ...
    linkcatalog.dao.exceptions.LinkNotFoundError: Link with id '42' not found.
"""

from linkcatalog.exceptions import LinkCatalogError


class DAOError(LinkCatalogError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class LinkValidationError(DAOError):
    """Raised when a link candidate or update is missing required data."""

    error_code = 'dao:link_validation_error'


class LinkNotFoundError(DAOError):
    """Raised when a link is not found in the data store."""

    error_code = 'dao:link_not_found_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, unreadable or corrupt files.
    """

    error_code = 'dao:data_store_error'
