import logging

from shortie.constants import DATA_STORE_ERROR
from shortie.dao import url_dao
from shortie.dao.exceptions import DataStoreError
from shortie.types import LambdaEvent, LambdaContext, LambdaResponse
from shortie.utils import get_short_url, guarantee_500_response
from shortie.utils.responses import response_307, response_400, response_404, response_500
from shortie.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs (GET /shortie/{id})

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode (records the visit)
    - Step 3: Redirect client to target URL

    HTTP responses:
        307: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: shortcode doesn't exist
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'id': '4e24c46962'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        307
        >>> response['headers']['Location']
        'https://example.com/data/hi'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('id')
    if not shortcode:
        logger.info('Missing "id" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'id' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the shortcode
    try:
        target_url = url_dao().get(shortcode)
    except DataStoreError:
        logger.exception('Failed to resolve short URL. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR})
        return response_500(error_code=DATA_STORE_ERROR)

    if target_url is None:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 307.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_307(location=target_url)
