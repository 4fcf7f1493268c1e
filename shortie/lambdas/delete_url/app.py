import logging

from shortie.constants import DATA_STORE_ERROR
from shortie.dao import url_dao
from shortie.dao.exceptions import DataStoreError
from shortie.types import LambdaEvent, LambdaContext, LambdaResponse
from shortie.utils import guarantee_500_response
from shortie.utils.responses import response_200, response_400, response_500
from shortie.lambdas.delete_url.constants import MISSING_SHORTCODE, DELETE_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to delete short URLs (DELETE /shortie/{id})

    Deleting is idempotent: a shortcode that doesn't exist is deleted successfully.

    HTTP responses:
        200: URL record deleted (or never existed)
        400: Bad client request
            message: missing shortcode in path parameters
        500: Internal server error
            message: server experienced an internal error
    """
    shortcode = (event.get('pathParameters') or {}).get('id')
    if not shortcode:
        logger.info('Missing "id" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'id' in path", error_code=MISSING_SHORTCODE)

    try:
        url_dao().delete(shortcode)
    except DataStoreError:
        logger.exception('Failed to delete short URL. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR})
        return response_500(error_code=DATA_STORE_ERROR)

    logger.info('Deleted short URL. Responding with 200.', extra={'shortcode': shortcode, 'event': DELETE_SUCCESS})
    return response_200()
