"""Redis connection setup shared by Redis-backed DAOs.

`RedisClientMixin.__init__` connects (or adopts a given client), builds the
key schema, sets up the background usage recorder and pings the server, so a
DAO that can't reach Redis fails at construction rather than on first use.

Example:
    >>> class URLRedisDAO(RedisClientMixin, URLBaseDAO):
    ...     pass
    ...
    >>> dao = URLRedisDAO(redis_host='localhost', prefix='shortie:dev')
    >>> dao.keys.link_key('4e24c46962')
    'shortie:dev:links:4e24c46962'
"""

from typing import Optional

import redis

from shortie.constants import UsageTracking
from shortie.dao.background import UsageRecorder
from shortie.dao.redis.redis_key_schema import RedisKeySchema
from shortie.dao.redis.helpers import redis_address
from shortie.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Redis client, key schema and usage recorder for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Client used by the DAO.
        keys (RedisKeySchema):
            Key names, namespaced by `prefix`.
        usage_recorder (UsageRecorder):
            Background writer for usage increments.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = 5,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
        usage_recorder: Optional[UsageRecorder] = None,
        usage_workers: Optional[int] = UsageTracking.RECORDER_WORKERS,
    ):
        """Connect to Redis, or adopt `redis_client` when given

        The `redis_*` connection options are ignored when `redis_client` is
        passed. `redis_socket_timeout` bounds both connecting and every reply.
        `usage_workers` sizes the recorder created when `usage_recorder` isn't given.

        Raises:
            DataStoreError:
                If Redis doesn't answer the healthcheck PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self.usage_recorder = usage_recorder or UsageRecorder(max_workers=int(usage_workers))

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis

        Returns:
            bool: True if Redis answered. False if it didn't and `raise_error` is False.

        Raises:
            DataStoreError:
                If Redis didn't answer and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except redis.exceptions.RedisError as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_address(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True

    def close(self) -> None:
        """Finish pending usage writes, then release the connection pool."""
        self.usage_recorder.shutdown(wait=True)
        self.redis.close()
