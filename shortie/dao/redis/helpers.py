"""Redis error translation shared by the Redis mixin and DAO.

Every Redis failure leaves the DAO as a DataStoreError naming the server
(`host:port/db`) or the failed command type, never as a redis-py exception.
"""

import functools
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from shortie.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def redis_address(client: redis.Redis) -> str:
    """Return `host:port/db` of the server a client talks to"""
    options = client.connection_pool.connection_kwargs
    return f'{options.get("host")}:{options.get("port")}/{options.get("db")}'


def handle_redis_connection_error[F](method: F) -> F:
    """Decorator: translate redis-py errors of a DAO method into DataStoreError

    A ConnectionError reports the server address. Any other RedisError, e.g.
    a ResponseError from a read-only replica, reports the error type.
    Exceptions that don't come from redis-py propagate unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def delete(self, shortcode):
        ...     self.redis.delete(self.keys.link_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed ({type(e).__name__}).') from e

    return wrapper
