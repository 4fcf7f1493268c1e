"""Data Access Object (DAO) implementation for URL records in DynamoDB

This module provides a DynamoDB-based implementation of URLBaseDAO.
Every record is a single item keyed by its shortcode (`shortID` hash key).

Responsibilities:
    - Create records with a conditional write, so the first writer wins;
    - Resolve shortcodes with a point read and record usage in the background;
    - Delete records and read their raw usage;
    - Raise DataStoreError on any failed DynamoDB request.

Classes:
    URLDynamoDBDAO:
        DAO for storing and retrieving URLRecordModel in a DynamoDB table.

Example:
    >>> dao = URLDynamoDBDAO(dynamodb_endpoint_url='http://localhost:8000')
    >>> dao.save(URLRecordModel(shortcode='4e24c46962', target='https://example.com/data/hi'))
    <URLDynamoDBDAO>
    >>> dao.get('4e24c46962')
    'https://example.com/data/hi'
    >>> dao.close()  # wait for the usage write
    >>> dao.statistics('4e24c46962')
    {'1730678400': 1}
"""

import logging

from beartype import beartype
from botocore.exceptions import ClientError

from shortie.models import URLRecordModel
from shortie.dao.base import URLBaseDAO
from shortie.dao.dynamodb.mixins import DynamoDBClientMixin
from shortie.dao.dynamodb.helpers import handle_dynamodb_client_error, client_error_code
from shortie.utils.helpers import day_bucket_key


logger = logging.getLogger(__name__)


class URLDynamoDBDAO(DynamoDBClientMixin, URLBaseDAO):
    """DynamoDB-based Data Access Object (DAO) for URL records

    Attributes (see DynamoDBClientMixin):
        dynamodb (DynamoDBClient):
            boto3 client used to communicate with DynamoDB.
        table_name (str):
            Table holding URL records.
        schema (DynamoDBItemSchema):
            Item (de)serialization helper.
        usage_recorder (UsageRecorder):
            Background writer for usage increments.

    NOTE:
        Usage increments are not atomic. The background write stores the whole
        record as it was read by `get()`, plus one visit. Two concurrent `get()`
        calls can both read N visits and both write N+1, so one visit is lost.
        Statistics are best-effort by design.
    """

    @handle_dynamodb_client_error
    @beartype
    def save(self, url_record: URLRecordModel, **kwargs) -> 'URLDynamoDBDAO':
        """Create a URL record unless its shortcode is already taken

        The item is written with a condition on the key attribute's absence,
        so DynamoDB itself guarantees that concurrent creates can't overwrite
        each other. A failed condition means the record exists: that's success.

        Raises:
            DataStoreError:
                If the DynamoDB request fails for any other reason.
        """
        try:
            self.dynamodb.put_item(
                TableName=self.table_name,
                Item=self.schema.to_item(url_record),
                ConditionExpression='attribute_not_exists(#shortcode)',
                ExpressionAttributeNames={'#shortcode': self.schema.key_attribute},
            )
        except ClientError as e:
            if client_error_code(e) != 'ConditionalCheckFailedException':
                raise
            logger.debug('URL record already exists, keeping it.', extra={'shortcode': url_record.shortcode})
        return self

    @handle_dynamodb_client_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> str | None:
        """Resolve a shortcode and record the visit in the background

        The target URL is returned right after the point read. The usage
        increment is handed to the usage recorder and never awaited; its
        failures are logged only.
        """
        url_record = self._read(shortcode)
        if url_record is None:
            return None

        self.usage_recorder.submit(self._write_hit, url_record, day_bucket_key())
        return url_record.target

    @handle_dynamodb_client_error
    @beartype
    def delete(self, shortcode: str, **kwargs) -> 'URLDynamoDBDAO':
        self.dynamodb.delete_item(TableName=self.table_name, Key=self.schema.key(shortcode))
        return self

    @handle_dynamodb_client_error
    @beartype
    def statistics(self, shortcode: str, **kwargs) -> dict[str, int]:
        url_record = self._read(shortcode)
        return {} if url_record is None else url_record.usage

    @handle_dynamodb_client_error
    @beartype
    def peek(self, shortcode: str, **kwargs) -> URLRecordModel | None:
        return self._read(shortcode)

    def _read(self, shortcode: str) -> URLRecordModel | None:
        response = self.dynamodb.get_item(TableName=self.table_name, Key=self.schema.key(shortcode))
        item = response.get('Item')
        return None if item is None else self.schema.from_item(item)

    def _write_hit(self, url_record: URLRecordModel, bucket: str) -> None:
        # NOTE: unconditional overwrite of the whole item. A record deleted between
        #       the read and this write is recreated.
        self.dynamodb.put_item(TableName=self.table_name, Item=self.schema.to_item(url_record.with_hit(bucket)))
        logger.debug('Recorded link usage.', extra={'shortcode': url_record.shortcode, 'bucket': bucket})
