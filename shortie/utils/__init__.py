from shortie.utils.config import app_env, app_name, app_prefix, storage_backend, load_config
from shortie.utils.helpers import (
    base_url,
    get_short_url,
    beginning_of_day,
    day_bucket_key,
    require_environment,
    guarantee_500_response,
)
from shortie.utils.shortener import generate_shortcode
from shortie.utils.statistics import aggregate_usage
from shortie.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'aggregate_usage',
    'app_env',
    'app_name',
    'app_prefix',
    'storage_backend',
    'load_config',
    'base_url',
    'get_short_url',
    'beginning_of_day',
    'day_bucket_key',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
