"""Data Access Object (DAO) keeping URL records in process memory

Records live in a dictionary owned by the DAO instance. A single lock guards
every operation, so calls on one instance never interleave: a visit recorded
by `get()` is visible to the very next `statistics()` call.

Nothing survives a process restart. Meant for local development, tests and
single-process deployments.

Example:
    >>> dao = URLMemoryDAO()
    >>> dao.save(URLRecordModel(shortcode='abc', target='http://x.com'))
    <URLMemoryDAO>
    >>> dao.get('abc')
    'http://x.com'
    >>> dao.statistics('abc')
    {'1730678400': 1}
"""

import threading
from dataclasses import replace

from beartype import beartype

from shortie.models import URLRecordModel
from shortie.dao.base import URLBaseDAO
from shortie.utils.helpers import day_bucket_key


class URLMemoryDAO(URLBaseDAO):
    """In-memory DAO for URL records, serialized by one lock

    Args:
        records (dict[str, URLRecordModel] | None):
            Initial records keyed by shortcode. The DAO takes ownership of the mapping.
    """

    def __init__(self, records: dict[str, URLRecordModel] | None = None):
        self._records: dict[str, URLRecordModel] = {} if records is None else records
        self._lock = threading.Lock()

    @beartype
    def save(self, url_record: URLRecordModel, **kwargs) -> 'URLMemoryDAO':
        with self._lock:
            self._records.setdefault(url_record.shortcode, _detached(url_record))
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> str | None:
        with self._lock:
            url_record = self._records.get(shortcode)
            if url_record is None:
                return None

            self._records[shortcode] = url_record.with_hit(day_bucket_key())
            return url_record.target

    @beartype
    def delete(self, shortcode: str, **kwargs) -> 'URLMemoryDAO':
        with self._lock:
            self._records.pop(shortcode, None)
        return self

    @beartype
    def statistics(self, shortcode: str, **kwargs) -> dict[str, int]:
        with self._lock:
            url_record = self._records.get(shortcode)
            return {} if url_record is None else dict(url_record.usage)

    @beartype
    def peek(self, shortcode: str, **kwargs) -> URLRecordModel | None:
        with self._lock:
            url_record = self._records.get(shortcode)
            return None if url_record is None else _detached(url_record)


def _detached(url_record: URLRecordModel) -> URLRecordModel:
    # usage dicts are never shared with callers
    return replace(url_record, usage=dict(url_record.usage))
