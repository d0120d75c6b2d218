"""Structured JSON logging.

Every record is one JSON object per line; keys passed through
``logger.info(..., extra={...})`` become top-level fields.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Any

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Attributes every LogRecord carries; anything else came from ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ('httpx', 'httpcore', 'pymongo', 'LiteLLM')


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc)
        log_data: Dict[str, Any] = {
            "timestamp": timestamp.isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not callable(value)
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


def setup_structured_logging(level: str | None = None):
    """Route the root logger through JSONFormatter.

    uvicorn's access log is kept at WARNING; route handlers log requests
    themselves.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level or LOG_LEVEL)

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.handlers = [handler]
    access_logger.setLevel(logging.WARNING)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.getLogger(name).level, logging.WARNING))
