import json
import logging

from shortie.constants import Shortcode, DATA_STORE_ERROR
from shortie.exceptions import ShortcodeCollisionError
from shortie.models import URLRecordModel
from shortie.dao import url_dao
from shortie.dao.base import URLBaseDAO
from shortie.dao.exceptions import DataStoreError
from shortie.types import LambdaEvent, LambdaContext, LambdaResponse
from shortie.utils import generate_shortcode, get_short_url, guarantee_500_response
from shortie.utils.responses import response_200, response_400, response_500
from shortie.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    INVALID_EXPIRATION,
    SHORTCODE_COLLISION,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def save_url_record(dao: URLBaseDAO, target_url: str, expiration: int = 0) -> str:
    """Store a target URL under its shortcode and return the shortcode

    Saving is idempotent, so shortening the same URL twice returns the same
    shortcode and leaves the stored record untouched. When a different URL
    already holds the shortcode, the shortcode is extended by a couple of
    characters and the save is retried.

    Raises:
        ShortcodeCollisionError:
            If every identifier length up to the maximum is taken by another URL.
        DataStoreError:
            If the data store fails.
    """
    for length in range(Shortcode.DEFAULT_LENGTH, Shortcode.MAX_LENGTH + 1, Shortcode.LENGTH_STEP):
        shortcode = generate_shortcode(target_url, length=length)
        dao.save(URLRecordModel(shortcode=shortcode, target=target_url, expiration=expiration))

        stored = dao.peek(shortcode)
        if stored is None or stored.target == target_url:
            return shortcode

        logger.warning(
            'Shortcode already holds another URL. Retrying with a longer shortcode.',
            extra={'shortcode': shortcode, 'event': SHORTCODE_COLLISION},
        )

    raise ShortcodeCollisionError(f"No free shortcode left for '{target_url}'.")


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs (POST /shortie)

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract target URL and expiration from request body
    - Step 2: Store the URL record under its shortcode (via DAO)
    - Step 3: Respond with the short URL

    HTTP responses:
        200: Successful URL shortening
            shortUrl: short url of the target
        400: Bad client request
            message: invalid JSON, missing 'url' or invalid 'expiration'
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com/data/hi"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        'http://localhost:8421/shortie/4e24c46962'
    """
    # 1- Extract target URL and expiration from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('url')
    if not target_url or not isinstance(target_url, str):
        logger.info("Missing 'url' in body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_TARGET_URL)

    expiration = request_body.get('expiration') or 0
    if not isinstance(expiration, int) or isinstance(expiration, bool):
        logger.info("Invalid 'expiration' in body. Responding with 400.", extra={'event': INVALID_EXPIRATION})
        return response_400(message="'expiration' must be a unix timestamp", error_code=INVALID_EXPIRATION)

    # 2- Store the URL record under its shortcode (via DAO)
    try:
        shortcode = save_url_record(url_dao(), target_url, expiration)
    except DataStoreError:
        logger.exception('Failed to store URL record. Responding with 500.', extra={'event': DATA_STORE_ERROR})
        return response_500(error_code=DATA_STORE_ERROR)
    except ShortcodeCollisionError as e:
        logger.error('Ran out of shortcodes for URL. Responding with 500.', extra={'event': SHORTCODE_COLLISION})
        return response_500(error_code=e.error_code)

    # 3- Respond with the short URL
    short_url = get_short_url(shortcode, event)
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    return response_200({'shortUrl': short_url})
