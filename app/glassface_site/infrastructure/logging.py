from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from glassface_site.core.env import (
    GFW_LOG_CAPTURE_ROOT,
    GFW_LOG_JSON,
    GFW_LOG_LEVEL,
    get_env,
    get_env_bool,
)

APP_LOGGER_NAME = "glassface_site"
TEXT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LOGGING_CONFIGURED = False
# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, then extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=True)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)


def setup_app_logging() -> None:
    """Route ``glassface_site.*`` loggers to stdout once per process.

    ``GFW_LOG_JSON`` switches to structured lines and ``GFW_LOG_CAPTURE_ROOT``
    sends third-party loggers through the same handler.
    """
    global _LOGGING_CONFIGURED  # pylint: disable=global-statement
    if _LOGGING_CONFIGURED:
        return

    level_name = get_env(GFW_LOG_LEVEL, "INFO").upper() or "INFO"
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    use_json = get_env_bool(GFW_LOG_JSON, default=False)
    capture_root = get_env_bool(GFW_LOG_CAPTURE_ROOT, default=False)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_JsonFormatter() if use_json else logging.Formatter(TEXT_LOG_FORMAT))

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    _attach(app_logger, handler, level)
    app_logger.propagate = False
    if capture_root:
        _attach(logging.getLogger(), handler, level)

    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).info(
        "Site logging configured. level=%s json=%s capture_root=%s",
        level_name,
        str(use_json).lower(),
        str(capture_root).lower(),
        extra={"event": "logging_configured"},
    )
