"""Shared fixtures for the Redis DAO tests.

`redis_client` is a MagicMock spec'd on redis.Redis and backed by a plain
dictionary, so GET / SET [NX] / DEL behave like a tiny Redis.
"""

import threading
from unittest.mock import MagicMock

import pytest
import redis

from shortie.dao.background import UsageRecorder


class FakeKeyspace:
    def __init__(self):
        self.data: dict[str, str] = {}
        self._lock = threading.Lock()

    def set(self, name, value, nx=False, **kwargs):
        with self._lock:
            if nx and name in self.data:
                return None
            self.data[name] = value
            return True

    def get(self, name):
        with self._lock:
            return self.data.get(name)

    def delete(self, *names):
        with self._lock:
            return sum(self.data.pop(name, None) is not None for name in names)


@pytest.fixture
def keyspace():
    return FakeKeyspace()


@pytest.fixture
def redis_client(keyspace):
    _redis_client = MagicMock(
        spec=redis.Redis,
        connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0}),
    )
    _redis_client.ping.return_value = True
    _redis_client.set.side_effect = keyspace.set
    _redis_client.get.side_effect = keyspace.get
    _redis_client.delete.side_effect = keyspace.delete
    return _redis_client


@pytest.fixture
def usage_recorder():
    _recorder = UsageRecorder(max_workers=2)
    yield _recorder
    _recorder.shutdown(wait=True)
