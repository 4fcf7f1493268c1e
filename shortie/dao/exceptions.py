"""Exceptions related to Data Access Objects (DAO) operations.

Absent records and repeated creates are not errors: DAOs report them through
their return values (None, an empty mapping, or plain success). The only
failure crossing the DAO contract is DataStoreError.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues,
        timeouts, unreadable records, etc.).

Example:
    >>> from shortie.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    shortie.dao.exceptions.DataStoreError: Can't connect to Redis at localhost:6379/0.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, malformed records, etc.
    """

    pass
