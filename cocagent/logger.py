"""
Completion event log for coc-agent.

Every client, factory and source event (``completion.start``,
``source.enable.failed`` ...) is written to stdout as one JSON object per
line, tagged with the emitting component and, when known, the request id.
"""

import json
import sys
import logging
from datetime import datetime, timezone

LOGGER_NAME = "coc-agent"

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)
handler = logging.StreamHandler(sys.stdout)
logger.addHandler(handler)

# Fields every LogRecord carries; anything else came in through ``extra``
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


def _jsonable(value):
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        # ClientError causes and similar objects
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """Render a record and its event fields as a single JSON line."""

    def format(self, record):
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        event.update(
            (key, _jsonable(value))
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        )
        return json.dumps(event)


handler.setFormatter(JsonFormatter())


def get_logger(component: str = "core"):
    return ComponentLogger(component)


class ComponentLogger:
    """Event logger bound to one component (client, factory, source ...)."""

    def __init__(self, component):
        self.component = component
        self.logger = logging.getLogger(LOGGER_NAME)

    def _log(self, level, event, request_id, fields):
        extra = {"component": self.component}
        if request_id:
            extra["request_id"] = request_id
        extra.update(fields)
        self.logger.log(level, event, extra=extra)

    def debug(self, event, request_id=None, **fields):
        self._log(logging.DEBUG, event, request_id, fields)

    def info(self, event, request_id=None, **fields):
        self._log(logging.INFO, event, request_id, fields)

    def warning(self, event, request_id=None, **fields):
        self._log(logging.WARNING, event, request_id, fields)

    def error(self, event, request_id=None, **fields):
        self._log(logging.ERROR, event, request_id, fields)
