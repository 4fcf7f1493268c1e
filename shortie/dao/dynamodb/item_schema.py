from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from shortie.constants import DynamoDB
from shortie.models import URLRecordModel
from shortie.dao.exceptions import DataStoreError


__all__ = ['DynamoDBItemSchema']


class DynamoDBItemSchema:
    """Translate URL records to and from DynamoDB items.

    Items use the low-level attribute value format, e.g.:

        {
            "shortID":    {"S": "4e24c46962"},
            "url":        {"S": "https://example.com/data/hi"},
            "expiration": {"N": "0"},
            "usage":      {"M": {"1730678400": {"N": "3"}}}
        }
    """

    # document field -> item attribute
    ATTRIBUTES = {
        'id': DynamoDB.KEY_ATTRIBUTE,
        'url': 'url',
        'expiration': 'expiration',
        'usage': 'usage',
    }

    def __init__(self, key_attribute: str = DynamoDB.KEY_ATTRIBUTE):
        self.key_attribute = key_attribute
        self.attributes = {**self.ATTRIBUTES, 'id': key_attribute}
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def key(self, shortcode: str) -> dict[str, Any]:
        return {self.key_attribute: self._serializer.serialize(shortcode)}

    def to_item(self, url_record: URLRecordModel) -> dict[str, Any]:
        try:
            document = url_record.to_document()
            return {self.attributes[field]: self._serializer.serialize(value) for field, value in document.items()}
        except (TypeError, ValueError) as e:
            raise DataStoreError(f"Can't serialize URL record '{url_record.shortcode}' for DynamoDB.") from e

    def from_item(self, item: dict[str, Any]) -> URLRecordModel:
        try:
            document = {
                field: self._deserializer.deserialize(item[attribute])
                for field, attribute in self.attributes.items()
                if attribute in item
            }
            return URLRecordModel.from_document(document)
        except (KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f'Malformed URL record item in DynamoDB: {item!r}.') from e
