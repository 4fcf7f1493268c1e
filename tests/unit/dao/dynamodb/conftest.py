"""Shared fixtures for the DynamoDB DAO tests.

`dynamodb_client` is a MagicMock boto3 client backed by a plain dictionary,
so DAO calls can be asserted on and still behave like a table: conditional
puts fail the way DynamoDB fails them, and reads see earlier writes.
"""

import threading
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from shortie.dao.background import UsageRecorder


def conditional_check_failed() -> ClientError:
    return ClientError(
        {'Error': {'Code': 'ConditionalCheckFailedException', 'Message': 'The conditional request failed'}},
        'PutItem',
    )


class FakeTable:
    """Items of one table keyed by their `shortID` string value."""

    def __init__(self, key_attribute: str = 'shortID'):
        self.key_attribute = key_attribute
        self.items: dict[str, dict] = {}
        self._lock = threading.Lock()

    def _key(self, key: dict) -> str:
        return key[self.key_attribute]['S']

    def put_item(self, TableName, Item, ConditionExpression=None, ExpressionAttributeNames=None):
        with self._lock:
            key = self._key(Item)
            if ConditionExpression is not None and key in self.items:
                raise conditional_check_failed()
            self.items[key] = Item
        return {}

    def get_item(self, TableName, Key):
        with self._lock:
            item = self.items.get(self._key(Key))
        return {} if item is None else {'Item': item}

    def delete_item(self, TableName, Key):
        with self._lock:
            self.items.pop(self._key(Key), None)
        return {}


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def dynamodb_client(table):
    _client = MagicMock()
    _client.describe_table.return_value = {'Table': {'TableName': 'shortie-urls', 'TableStatus': 'ACTIVE'}}
    _client.put_item.side_effect = table.put_item
    _client.get_item.side_effect = table.get_item
    _client.delete_item.side_effect = table.delete_item
    return _client


@pytest.fixture
def usage_recorder():
    _recorder = UsageRecorder(max_workers=2)
    yield _recorder
    _recorder.shutdown(wait=True)
