"""Structured JSON logging for the link catalog lambdas

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Every record is one JSON object per line on stdout, which is what CloudWatch
Logs Insights parses. Fields passed through `extra=` are emitted at top level:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkcatalog.lambdas.create_link.app",
    "message": "Created link. Responding with 201.",
    "event": "LINK_CREATED",
    "link_id": "9f1c4e0b2a6d4d8c8a3e5b7f1d2c3b4a"
}

Functions:
    initialize_logging(level: str | None = None) -> None:
        Route the root logger to stdout through JsonFormatter.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from linkcatalog.constants import ENV


# Attributes every LogRecord carries, so anything else on a record came from `extra=`
RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}

# AWS SDK loggers are chatty at INFO/DEBUG and would drown the handler logs
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')

DEFAULT_LOG_LEVEL = 'INFO'


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as a single-line JSON object

    Standard fields come first, then `extra` fields in the order they were
    passed, then `exception` and `stack` when present. Values json can't
    encode are rendered with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            'timestamp': _utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def _resolve_level(level: str | None) -> str:
    name = (level or os.getenv(ENV.App.LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    # an unknown LOG_LEVEL must not break the cold start
    return name if name in logging.getLevelNamesMapping() else DEFAULT_LOG_LEVEL


def initialize_logging(level: str | None = None) -> None:
    """Configure the root logger to emit JSON lines on stdout

    Args:
        level (str | None):
            Root log level. Defaults to the LOG_LEVEL environment variable, then INFO.
            Unknown level names fall back to INFO.
    """
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {'()': JsonFormatter},
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': _resolve_level(level),
                'handlers': ['stdout'],
            },
        }
    )
