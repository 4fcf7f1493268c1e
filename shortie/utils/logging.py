"""Structured (JSON) logging for the shortie handlers

`initialize_logging()` runs when a handler package is imported, so every
record emitted afterwards is one JSON object per line on stdout:

{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "shortie.lambdas.redirect_url.app",
    "message": "Redirecting client to target URL. Responding with 307.",
    "shortcode": "4e24c46962",
    "event": "REDIRECT_SUCCESS"
}

Keys passed through `extra=` become top-level fields of the object.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shortie.constants import ENV


# Attributes of a bare LogRecord. Anything else on a record came from `extra`.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

# Third-party loggers that are chatty at INFO/DEBUG
_QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3')


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render log records, including their `extra` fields, as JSON"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': _utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES)

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        # values like Decimal or datetime are rendered with str()
        return json.dumps(entry, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Send every log record to stdout as JSON

    Args:
        level (str | None):
            Root log level. Defaults to `LOG_LEVEL`, or INFO when unset.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in _QUIET_LOGGERS},
            'root': {'level': level, 'handlers': ['console']},
        }
    )
