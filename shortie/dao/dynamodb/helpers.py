import functools
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from shortie.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def client_error_code(error: ClientError) -> str:
    """Return the AWS error code of a botocore ClientError, e.g. 'ConditionalCheckFailedException'."""
    return error.response.get('Error', {}).get('Code', '')


def handle_dynamodb_client_error[F](method: F) -> F:
    """Wrap DynamoDB-interacting DAO methods to handle client errors

    Args:
        method (Callable[..., Any]):
            DAO method performing DynamoDB requests which may raise
            botocore.exceptions.ClientError or botocore.exceptions.BotoCoreError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on failed DynamoDB requests.

    Example:
        >>> @handle_dynamodb_client_error
        ... def delete(self, shortcode):
        ...     self.dynamodb.delete_item(TableName=self.table_name, Key=self.schema.key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            raise DataStoreError(f"DynamoDB request on table '{self.table_name}' failed ({client_error_code(e)}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach DynamoDB table '{self.table_name}' ({type(e).__name__}).") from e

    return wrapper
