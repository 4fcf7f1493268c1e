import logging

from shortie.constants import DATA_STORE_ERROR
from shortie.dao import url_dao
from shortie.dao.exceptions import DataStoreError
from shortie.types import LambdaEvent, LambdaContext, LambdaResponse
from shortie.utils import aggregate_usage, guarantee_500_response
from shortie.utils.responses import response_200, response_400, response_500
from shortie.lambdas.url_stats.constants import MISSING_SHORTCODE, STATS_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for link usage (GET /shortie/{id}/stats)

    Unknown shortcodes have no usage, so they report zeros rather than 404.

    HTTP responses:
        200: Usage statistics
            lastDay: visits today (UTC)
            lastWeek: visits today and during the 6 days before
            allTime: all recorded visits
        400: Bad client request
            message: missing shortcode in path parameters
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> response = lambda_handler({'pathParameters': {'id': '4e24c46962'}}, None)
        >>> json.loads(response['body'])
        {'lastDay': 3, 'lastWeek': 3, 'allTime': 3}
    """
    shortcode = (event.get('pathParameters') or {}).get('id')
    if not shortcode:
        logger.info('Missing "id" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'id' in path", error_code=MISSING_SHORTCODE)

    try:
        usage = url_dao().statistics(shortcode)
    except DataStoreError:
        logger.exception('Failed to read link usage. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR})
        return response_500(error_code=DATA_STORE_ERROR)

    statistics = aggregate_usage(usage)
    logger.debug('Aggregated link usage.', extra={'shortcode': shortcode, 'event': STATS_SUCCESS, **statistics.to_dict()})
    return response_200(statistics.to_dict())
