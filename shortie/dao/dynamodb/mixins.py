"""DynamoDB mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize a DynamoDB client (or reuse a given one)
    - Healthcheck the URL records table
    - Own the background usage recorder used by the DAO

Classes:
    - DynamoDBClientMixin: Base mixin to inject DynamoDB client setup, item schema & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class URLDynamoDBDAO(DynamoDBClientMixin, URLBaseDAO):
        ...     pass
        ...
        >>> dao = URLDynamoDBDAO(dynamodb_endpoint_url='http://localhost:8000')
        >>> dao._healthcheck()
        True
"""

from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from shortie.constants import DynamoDB, UsageTracking
from shortie.types import DynamoDBClient
from shortie.dao.background import UsageRecorder
from shortie.dao.dynamodb.item_schema import DynamoDBItemSchema
from shortie.dao.dynamodb.helpers import client_error_code
from shortie.dao.exceptions import DataStoreError


class DynamoDBClientMixin:
    """Mixin DynamoDB client setup and health check for DynamoDB-backed DAOs.

    Attributes:
        dynamodb (DynamoDBClient):
            Low-level boto3 DynamoDB client used by subclasses.

        table_name (str):
            Name of the table holding URL records.

        schema (DynamoDBItemSchema):
            Helper translating URL records to and from DynamoDB items.

        usage_recorder (UsageRecorder):
            Background writer for usage increments.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Describe the table to verify connectivity.
            Optionally raise a DataStoreError if unreachable.
    """

    def __init__(
        self,
        dynamodb_table_name: Optional[str] = DynamoDB.TABLE_NAME,
        dynamodb_region: Optional[str] = None,
        dynamodb_endpoint_url: Optional[str] = None,
        dynamodb_access_key_id: Optional[str] = None,
        dynamodb_secret_access_key: Optional[str] = None,
        dynamodb_connect_timeout: Optional[float] = DynamoDB.CONNECT_TIMEOUT,
        dynamodb_read_timeout: Optional[float] = DynamoDB.READ_TIMEOUT,
        dynamodb_client: Optional[DynamoDBClient] = None,
        usage_recorder: Optional[UsageRecorder] = None,
        usage_workers: Optional[int] = UsageTracking.RECORDER_WORKERS,
    ):
        """Initialize a DynamoDB-based DAO for URL records

        The option is given to either use an existing DynamoDB client instance or
        create one via the appropriate connection parameters. Credentials and
        region fall back to boto3's default resolution when not given.

        Args:
            dynamodb_table_name (Optional[str]):
                Table holding URL records. Defaults to 'shortie-urls'.

            dynamodb_region (Optional[str]):
                AWS region of the table.

            dynamodb_endpoint_url (Optional[str]):
                Custom endpoint, e.g. DynamoDB Local at 'http://localhost:8000'.

            dynamodb_access_key_id (Optional[str]):
                AWS access key id.

            dynamodb_secret_access_key (Optional[str]):
                AWS secret access key.

            dynamodb_connect_timeout (Optional[float]):
                Seconds to wait for a connection. Defaults to 2.

            dynamodb_read_timeout (Optional[float]):
                Seconds to wait for a response. Defaults to 5.

            dynamodb_client (Optional[DynamoDBClient]):
                Pre-initialized boto3 DynamoDB client. If None, a new client is created.

            usage_recorder (Optional[UsageRecorder]):
                Background writer for usage increments. If None, a new one is created.

            usage_workers (Optional[int]):
                Worker threads of a newly created usage recorder. Defaults to 4.

        Raises:
            DataStoreError:
                If the table healthcheck fails (connectivity issues, missing table).
        """
        if dynamodb_client is None:
            dynamodb_client = boto3.client(
                'dynamodb',
                region_name=dynamodb_region,
                endpoint_url=dynamodb_endpoint_url,
                aws_access_key_id=dynamodb_access_key_id,
                aws_secret_access_key=dynamodb_secret_access_key,
                config=Config(
                    connect_timeout=dynamodb_connect_timeout,
                    read_timeout=dynamodb_read_timeout,
                    retries={'max_attempts': DynamoDB.MAX_ATTEMPTS, 'mode': 'standard'},
                ),
            )

        self.dynamodb = dynamodb_client
        self.table_name = dynamodb_table_name
        self.schema = DynamoDBItemSchema()
        self.usage_recorder = usage_recorder or UsageRecorder(max_workers=int(usage_workers))

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Describe the URL records table to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if the table is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If the table can't be described and raise_error=True.
        """
        try:
            self.dynamodb.describe_table(TableName=self.table_name)
        except ClientError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't access DynamoDB table '{self.table_name}' ({client_error_code(e)}). Check the provided configuration parameters."
                ) from e
            return False
        except BotoCoreError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to DynamoDB for table '{self.table_name}'. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True

    def close(self) -> None:
        """Drain pending usage writes and stop the usage recorder."""
        self.usage_recorder.shutdown(wait=True)
