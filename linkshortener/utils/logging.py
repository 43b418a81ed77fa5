"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the entry point before any other
logging is done.

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkshortener.services.link_service",
    "message": "Shortened URL."
}

Records go to stderr so they never interleave with console output on stdout.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and key not in log:
                log[key] = value

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Install the JSON formatter on the root logger

    Args:
        level (str | None):
            Log level name. Defaults to `LOG_LEVEL`, then `'WARNING'`.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, 'WARNING')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stderr': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stderr',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
