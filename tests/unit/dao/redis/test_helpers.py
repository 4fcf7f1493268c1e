"""Unit tests for handle_redis_connection_error decorator.

This test suite verifies that the decorator properly handles Redis
failures and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Error handling
       - Ensures Redis connection errors are converted into DataStoreError.
       - Ensures other Redis errors are converted into DataStoreError.
       - Ensures non-Redis errors pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
    4. Server address rendering
"""

from unittest.mock import MagicMock

import pytest
import redis

from shortie.dao.redis.helpers import handle_redis_connection_error, redis_address
from shortie.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }

    @handle_redis_connection_error
    def ping(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().ping() == 'OK'


# -------------------------------
# 2. Error handling
# -------------------------------


def test_decorator_transforms_redis_connection_error():
    """Ensure Redis ConnectionError is caught and re-raised as DataStoreError."""
    dao = DummyDAO(redis.exceptions.ConnectionError('Cannot connect'))

    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0."):
        dao.ping()


@pytest.mark.parametrize(
    'error, name',
    [
        (redis.exceptions.ResponseError('WRONGTYPE'), 'ResponseError'),
        (redis.exceptions.TimeoutError('Timeout reading from socket'), 'TimeoutError'),
    ],
)
def test_decorator_transforms_other_redis_errors(error, name):
    with pytest.raises(DataStoreError, match=rf'Redis command failed \({name}\)'):
        DummyDAO(error).ping()


def test_decorator_passes_other_errors_through():
    with pytest.raises(KeyError):
        DummyDAO(KeyError('links:abc')).ping()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_connection_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__


# -------------------------------
# 4. Server address rendering
# -------------------------------


def test_redis_address(redis_client):
    assert redis_address(redis_client) == 'redis:6379/0'
