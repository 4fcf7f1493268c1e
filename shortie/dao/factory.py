"""Storage backend selection

The backend is chosen once per process: handlers call `url_dao()`, which
builds the configured DAO on first use and hands the same instance out
afterwards.

Functions:
    create_url_dao(config: dict, **kwargs) -> URLBaseDAO
        Build the DAO described by a backend configuration.
    url_dao() -> URLBaseDAO
        Return this process's DAO, built from the environment on first call.

Example:
    >>> create_url_dao({'memory': {}})
    <URLMemoryDAO>
    >>> create_url_dao({'redis': {'host': 'localhost', 'port': 6379}}, prefix='shortie:dev')
    <URLRedisDAO>
"""

import atexit
import functools
import logging
from typing import Any

from shortie.constants import Backend
from shortie.exceptions import BadConfigurationError
from shortie.types import BackendConfiguration
from shortie.dao.base import URLBaseDAO
from shortie.dao.memory import URLMemoryDAO
from shortie.dao.dynamodb import URLDynamoDBDAO
from shortie.dao.redis import URLRedisDAO
from shortie.utils.config import load_config, app_prefix


logger = logging.getLogger(__name__)


def create_url_dao(config: BackendConfiguration, **kwargs: Any) -> URLBaseDAO:
    """Build the DAO for a backend configuration as returned by `load_config()`

    Options are passed to the DAO with the backend's name as prefix,
    e.g. {'redis': {'host': ...}} becomes URLRedisDAO(redis_host=...).

    Args:
        config (dict):
            {<backend name>: {<option>: <value>}} with exactly one backend.
        **kwargs:
            Extra keyword arguments for the DAO constructor (e.g. prefix).

    Raises:
        BadConfigurationError:
            If the configuration doesn't name exactly one known backend.
        DataStoreError:
            If the data store can't be reached.
    """
    if len(config) != 1:
        raise BadConfigurationError(f'Expected configuration for exactly one storage backend (given: {sorted(config)}).')

    [(name, options)] = config.items()
    try:
        backend = Backend(name)
    except ValueError as e:
        raise BadConfigurationError(f"Unknown storage backend '{name}'.") from e

    logger.info('Using %s storage backend.', backend)
    if backend is Backend.MEMORY:
        return URLMemoryDAO(**kwargs)

    dao_options = {f'{backend}_{k}': v for k, v in options.items()}
    if backend is Backend.DYNAMODB:
        return URLDynamoDBDAO(**dao_options, **kwargs)
    return URLRedisDAO(**dao_options, **kwargs)


@functools.cache
def url_dao() -> URLBaseDAO:
    """Return this process's DAO, building it from the environment on first call

    The DAO is closed at interpreter exit, which drains pending usage writes.
    """
    config = load_config()
    extra = {'prefix': app_prefix()} if Backend.REDIS in config else {}
    dao = create_url_dao(config, **extra)
    atexit.register(dao.close)
    return dao
