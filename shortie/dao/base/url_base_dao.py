"""Abstract base class for URL record data access objects (DAOs).

Every storage backend (in-process memory, DynamoDB, Redis) implements the
same contract, so handlers never know which one they talk to:

    - absence is not an error: unknown shortcodes resolve to None, have empty
      usage, and delete successfully;
    - creating is idempotent: the first record saved under a shortcode wins;
    - resolving a link records one visit in today's usage bucket;
    - the only exception crossing the contract is DataStoreError.

Example:
    >>> from shortie.models import URLRecordModel
    >>> from shortie.dao.memory import URLMemoryDAO

    >>> dao = URLMemoryDAO()
    >>> dao.save(URLRecordModel(shortcode='4e24c46962', target='https://example.com/data/hi'))
    <URLMemoryDAO>
    >>> dao.get('4e24c46962')
    'https://example.com/data/hi'
    >>> dao.statistics('4e24c46962')
    {'1730678400': 1}
    >>> dao.get('missing') is None
    True
"""

from abc import ABC, abstractmethod

from shortie.models import URLRecordModel


class URLBaseDAO(ABC):
    """Interface for URL record DAOs.

    Every method accepts extra keyword arguments for backend-specific options
    and raises DataStoreError when the data store fails.

    NOTE:
        - Records carry an expiration timestamp, but no DAO enforces it on read.
        - Visits recorded by remote backends (DynamoDB, Redis) are written in
          the background, so `statistics()` may lag behind `get()`.
    """

    @abstractmethod
    def save(self, url_record: URLRecordModel, **kwargs) -> 'URLBaseDAO':
        """Create a URL record unless one already exists for its shortcode.

        An existing record is left untouched and the call still succeeds.

        Returns:
            URLBaseDAO: self (for method chaining)
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> str | None:
        """Resolve a shortcode to its target URL, recording one visit for today.

        Returns:
            str | None: The target URL, or None for an unknown shortcode (no visit recorded).
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, **kwargs) -> 'URLBaseDAO':
        """Delete a URL record. Deleting an unknown shortcode succeeds.

        Returns:
            URLBaseDAO: self (for method chaining)
        """
        pass

    @abstractmethod
    def statistics(self, shortcode: str, **kwargs) -> dict[str, int]:
        """Return the raw usage of a link: visits per day bucket key.

        Unknown shortcodes have empty usage.
        """
        pass

    @abstractmethod
    def peek(self, shortcode: str, **kwargs) -> URLRecordModel | None:
        """Read a URL record without recording a visit. None if unknown."""
        pass

    def close(self) -> None:
        """Release data store resources. Does nothing by default."""
        pass

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
