from shortie.dao.dynamodb.item_schema import DynamoDBItemSchema
from shortie.dao.dynamodb.url_dynamodb_dao import URLDynamoDBDAO
from shortie.dao.dynamodb.mixins import DynamoDBClientMixin


__all__ = [
    'DynamoDBItemSchema',
    'URLDynamoDBDAO',
    'DynamoDBClientMixin',
]
