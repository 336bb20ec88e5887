"""Logging setup for the rightsclaims service.

``RC_LOG_FORMAT=json`` switches the root handler to one JSON object per line;
anything else gives plain text. ``RC_LOG_LEVEL`` picks the level and falls
back to INFO when it names no level. Both are read when ``setup_logging``
runs, not at import.
"""

from __future__ import annotations

import logging
import os
import traceback
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from rightsclaims.config import configured_api_keys, settings

#: Request and verification extras; dropped from JSON output when None.
STRUCTURED_FIELDS: tuple[str, ...] = (
    "request_id",
    "path",
    "method",
    "status_code",
    "duration_ms",
    "failure",
    "jti",
    "iss",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _env_level() -> int:
    level = logging.getLevelName(os.environ.get("RC_LOG_LEVEL", settings.log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _env_wants_json() -> bool:
    return os.environ.get("RC_LOG_FORMAT", settings.log_format).strip().lower() == "json"


class StructuredJsonFormatter(JsonFormatter):
    """``JsonFormatter`` that keeps extras top-level and tracebacks structured.

    An attached exception is emitted as a ``traceback`` list of lines instead
    of a formatted text blob.
    """

    def __init__(self) -> None:
        super().__init__(fmt=_JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        if record.exc_info and record.exc_info[1] is not None:
            record.traceback = traceback.format_exception(*record.exc_info)
            record.exc_info = None
            record.exc_text = None
        return super().format(record)

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        for key in STRUCTURED_FIELDS:
            if log_record.get(key) is None:
                log_record.pop(key, None)


def setup_logging() -> None:
    """Replace the root handlers with one stream handler per the RC_LOG_* env."""
    level = _env_level()
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        StructuredJsonFormatter() if _env_wants_json() else logging.Formatter(_TEXT_FORMAT)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def log_startup_info() -> None:
    """Log the version, supported algorithms and auth mode once at startup."""
    import rightsclaims
    from rightsclaims.claims.models import Algorithm

    logging.getLogger("rightsclaims").info(
        "rightsclaims started",
        extra={
            "version": rightsclaims.__version__,
            "algorithms": [a.value for a in Algorithm],
            "auth_mode": "api_key" if configured_api_keys() else "dev",
        },
    )
