"""Helpers shared by the shortie handlers and DAOs.

Functions:
    base_url(event) -> str
        Public base URL of the API that received an API Gateway event
    get_short_url(shortcode, event) -> str
        Public short URL of a shortcode
    beginning_of_day(moment=None) -> datetime
        UTC midnight of the day a moment (now by default) falls in
    day_bucket_key(moment=None) -> str
        Usage bucket key of the UTC day a moment falls in
    require_environment(*names) -> Callable
        Decorator: fail fast when environment variables are missing
    guarantee_500_response(handler) -> Callable
        Decorator: turn unexpected handler exceptions into 500 responses

Example:
    >>> event = {'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'}}
    >>> get_short_url('4e24c46962', event)
    'https://sho.rt/shortie/4e24c46962'
    >>> get_short_url('4e24c46962', {})
    'http://localhost:8421/shortie/4e24c46962'
    >>> day_bucket_key(datetime(2024, 11, 4, 17, 30, tzinfo=UTC))
    '1730678400'
"""

import os
import logging
import functools
from datetime import datetime, UTC
from typing import Any
from collections.abc import Callable

from shortie.constants import ShortURL, UNKNOWN_INTERNAL_SERVER_ERROR
from shortie.exceptions import MissingEnvironmentVariableError
from shortie.utils.runtime import running_locally
from shortie.utils.responses import response_500


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Return the public base URL of the API that received `event`

    API Gateway's own execute-api domains serve every stage under its name,
    so the stage is part of the base URL. Custom domains map a stage to the
    domain root. Events without a domain (local server, tests) get the local
    base URL.

    Returns:
        str: e.g. 'https://sho.rt', 'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'
             or 'http://localhost:8421'
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName')
    if not domain:
        return ShortURL.LOCAL_BASE_URL

    if 'execute-api' in domain:
        return f'https://{domain}/{request_context.get("stage", "")}'
    return f'https://{domain}'


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    return f'{base_url(event).rstrip("/")}/{ShortURL.PATH}/{shortcode}'


def beginning_of_day(moment: datetime | None = None) -> datetime:
    """Truncate a moment to the very start (00:00:00) of its day in UTC.

    Naive datetimes are interpreted as UTC.

    Args:
        moment (datetime | None):
            Moment to truncate. Defaults to now.

    Returns:
        datetime:
            UTC midnight of the day the moment falls in.

    Example:
        >>> beginning_of_day(datetime(2025, 10, 15, 13, 45, tzinfo=UTC))
        datetime.datetime(2025, 10, 15, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if moment is None:
        moment = datetime.now(UTC)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    else:
        moment = moment.astimezone(UTC)

    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def day_bucket_key(moment: datetime | None = None) -> str:
    """Return the usage bucket key for the UTC day of a moment (today by default).

    The key is the unix timestamp (seconds) of that day's UTC midnight, as a string.
    Every writer and reader of usage buckets must derive keys here.
    """
    return str(int(beginning_of_day(moment).timestamp()))


def require_environment(*names: str) -> Callable:
    """Decorator: raise before calling the function if any of `names` is unset or empty

    Raises:
        MissingEnvironmentVariableError:
            Listing every missing variable, e.g.
            "Missing required environment variables: 'REDIS_HOST'"
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.getenv(name)]
            if missing:
                listed = ', '.join(repr(str(name)) for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {listed}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 when a Lambda handler raises unexpectedly

    When running locally the exception is re-raised instead, so that SAM
    shows the traceback.
    """

    @functools.wraps(handler)
    def wrapper(event, context):
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in handler. Responding with 500.')
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
