"""Utility functions for application configuration management.

The storage backend and its connection options are read from the process
environment once, when the process builds its DAO. The resulting
configuration holds the options of exactly one backend:

    {
        "dynamodb": {
            "region": "us-east-1",
            "endpoint_url": "http://localhost:8000",
            "table_name": "shortie-urls",
            ...
        }
    }

When `STORAGE_BACKEND` isn't set, DynamoDB is used if a custom DynamoDB
endpoint is configured (`AWS_CUSTOM_DYNAMO_ENDPOINT`), and the in-memory
backend otherwise.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    storage_backend() -> Backend
        Return the configured storage backend.

    load_config() -> dict
        Load the active backend's options from the environment.

Example:
    >>> os.environ['STORAGE_BACKEND'] = 'redis'
    >>> os.environ['REDIS_HOST'] = 'redis.internal'
    >>> load_config()
    {'redis': {'host': 'redis.internal', 'port': 6379, 'db': 0, 'username': None, 'password': None}}
"""

import os
import logging
from typing import Any

from shortie.constants import ENV, Backend, DynamoDB
from shortie.exceptions import BadConfigurationError
from shortie.utils.helpers import require_environment
from shortie.types import BackendConfiguration


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortie'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortie:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def storage_backend() -> Backend:
    """Return the storage backend selected for this process

    Raises:
        BadConfigurationError:
            If `STORAGE_BACKEND` names an unknown backend.
    """
    name = os.getenv(ENV.App.STORAGE_BACKEND, '').strip().lower()
    if not name:
        return Backend.DYNAMODB if os.getenv(ENV.DynamoDB.ENDPOINT) else Backend.MEMORY

    try:
        return Backend(name)
    except ValueError as e:
        choices = ', '.join(f"'{backend}'" for backend in Backend)
        raise BadConfigurationError(f"Unknown storage backend '{name}' (choose one of {choices}).") from e


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: '{value}').") from e


def _dynamodb_config() -> dict[str, Any]:
    return {
        'table_name': os.getenv(ENV.DynamoDB.TABLE_NAME) or DynamoDB.TABLE_NAME,
        'region': os.getenv(ENV.DynamoDB.REGION) or None,
        'endpoint_url': os.getenv(ENV.DynamoDB.ENDPOINT) or None,
        'access_key_id': os.getenv(ENV.DynamoDB.ACCESS_KEY_ID) or None,
        'secret_access_key': os.getenv(ENV.DynamoDB.SECRET_ACCESS_KEY) or None,
    }


@require_environment(ENV.Redis.HOST)
def _redis_config() -> dict[str, Any]:
    return {
        'host': os.environ[ENV.Redis.HOST],
        'port': _int_env(ENV.Redis.PORT, 6379),
        'db': _int_env(ENV.Redis.DB, 0),
        'username': os.getenv(ENV.Redis.USERNAME) or None,
        'password': os.getenv(ENV.Redis.PASSWORD) or None,
    }


def load_config() -> BackendConfiguration:
    """Load the active storage backend's configuration from the environment

    Returns:
        dict: {<backend name>: {<option>: <value>}} for the active backend.
              The in-memory backend takes no options.

    Raises:
        BadConfigurationError:
            If the backend is unknown or an option is malformed.
        MissingEnvironmentVariableError:
            If the Redis backend is selected without `REDIS_HOST`.
    """
    backend = storage_backend()
    if backend is Backend.DYNAMODB:
        options = _dynamodb_config()
    elif backend is Backend.REDIS:
        options = _redis_config()
    else:
        options = {}

    logger.debug('Loaded storage configuration.', extra={'backend': str(backend)})
    return {str(backend): options}
