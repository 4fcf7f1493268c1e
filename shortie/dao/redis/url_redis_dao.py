"""Data Access Object (DAO) implementation for URL records in Redis

Every record is stored as one JSON document under `[<prefix>:]links:<shortcode>`:

    {"id": "4e24c46962", "url": "https://example.com/data/hi", "expiration": 0, "usage": {"1730678400": 3}}

Responsibilities:
    - Create records with SET NX, so the first writer wins;
    - Resolve shortcodes and record usage in the background;
    - Delete records and read their raw usage;
    - Raise DataStoreError on connectivity issues or unreadable documents.

Classes:
    URLRedisDAO:
        DAO for storing and retrieving URLRecordModel in a Redis datastore.

Example:
    >>> dao = URLRedisDAO(prefix='shortie:dev')
    >>> dao.save(URLRecordModel(shortcode='4e24c46962', target='https://example.com/data/hi'))
    <URLRedisDAO>
    >>> dao.get('4e24c46962')
    'https://example.com/data/hi'
"""

import json
import logging

from beartype import beartype

from shortie.models import URLRecordModel
from shortie.dao.base import URLBaseDAO
from shortie.dao.redis.mixins import RedisClientMixin
from shortie.dao.redis.helpers import handle_redis_connection_error
from shortie.dao.exceptions import DataStoreError
from shortie.utils.helpers import day_bucket_key


logger = logging.getLogger(__name__)


class URLRedisDAO(RedisClientMixin, URLBaseDAO):
    """Redis-based Data Access Object (DAO) for URL records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        usage_recorder (UsageRecorder):
            Background writer for usage increments.

    NOTE:
        Usage increments rewrite the whole document (GET, then SET in the
        background), like the DynamoDB DAO. Concurrent visits may overwrite
        each other's increment.
    """

    @handle_redis_connection_error
    @beartype
    def save(self, url_record: URLRecordModel, **kwargs) -> 'URLRedisDAO':
        """Create a URL record unless its shortcode is already taken

        SET NX is the conditional write here: Redis refuses it when the key
        exists, and a refusal counts as success.
        """
        created = self.redis.set(self.keys.link_key(url_record.shortcode), _dump(url_record), nx=True)
        if not created:
            logger.debug('URL record already exists, keeping it.', extra={'shortcode': url_record.shortcode})
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> str | None:
        url_record = self._read(shortcode)
        if url_record is None:
            return None

        self.usage_recorder.submit(self._write_hit, url_record, day_bucket_key())
        return url_record.target

    @handle_redis_connection_error
    @beartype
    def delete(self, shortcode: str, **kwargs) -> 'URLRedisDAO':
        self.redis.delete(self.keys.link_key(shortcode))
        return self

    @handle_redis_connection_error
    @beartype
    def statistics(self, shortcode: str, **kwargs) -> dict[str, int]:
        url_record = self._read(shortcode)
        return {} if url_record is None else url_record.usage

    @handle_redis_connection_error
    @beartype
    def peek(self, shortcode: str, **kwargs) -> URLRecordModel | None:
        return self._read(shortcode)

    def _read(self, shortcode: str) -> URLRecordModel | None:
        document = self.redis.get(self.keys.link_key(shortcode))
        return None if document is None else _load(document)

    def _write_hit(self, url_record: URLRecordModel, bucket: str) -> None:
        self.redis.set(self.keys.link_key(url_record.shortcode), _dump(url_record.with_hit(bucket)))
        logger.debug('Recorded link usage.', extra={'shortcode': url_record.shortcode, 'bucket': bucket})


def _dump(url_record: URLRecordModel) -> str:
    return json.dumps(url_record.to_document())


def _load(document: str | bytes) -> URLRecordModel:
    try:
        return URLRecordModel.from_document(json.loads(document))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise DataStoreError(f'Malformed URL record document in Redis: {document!r}.') from e
