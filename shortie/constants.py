from enum import StrEnum


class Shortcode:
    """Short identifier length settings (hex characters)."""

    DEFAULT_LENGTH = 10
    # Number of characters added to an identifier on a collision
    LENGTH_STEP = 2
    # A UUID renders to 32 hex digits, identifiers can't be longer
    MAX_LENGTH = 32


class ShortURL:
    """Public short URL layout: <base url>/shortie/<shortcode>."""

    PATH = 'shortie'
    # Base URL when the event carries no API Gateway domain (local server, tests)
    LOCAL_BASE_URL = 'http://localhost:8421'


class Backend(StrEnum):
    """Storage backends a process can be configured with."""

    MEMORY = 'memory'
    DYNAMODB = 'dynamodb'
    REDIS = 'redis'


class DynamoDB:
    """DynamoDB table layout and client defaults."""

    TABLE_NAME = 'shortie-urls'
    KEY_ATTRIBUTE = 'shortID'
    # botocore client timeouts (seconds)
    CONNECT_TIMEOUT = 2
    READ_TIMEOUT = 5
    MAX_ATTEMPTS = 3


class UsageTracking:
    """Usage statistics settings."""

    DAYS_IN_WEEK = 7
    # Worker threads recording link usage in the background
    RECORDER_WORKERS = 4


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        STORAGE_BACKEND = 'STORAGE_BACKEND'

    class DynamoDB(StrEnum):
        REGION = 'AWS_REGION'
        ACCESS_KEY_ID = 'AWS_ACCESS_KEY_ID'
        SECRET_ACCESS_KEY = 'AWS_SECRET_ACCESS_KEY'  # noqa: S105
        ENDPOINT = 'AWS_CUSTOM_DYNAMO_ENDPOINT'  # usually http://localhost:8000
        TABLE_NAME = 'DYNAMODB_TABLE_NAME'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
