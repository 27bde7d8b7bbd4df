"""Structured Logging: JSON formatter and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - ErrorContext fields (operation, request_token, resource_id, debug_info) and the
      request keys (product_id, error_code, status_code) are surfaced when present
    - A logged StorefrontError is rendered through its own to_dict()
    - JSON format by default, human-readable with fmt="text"
"""

import json
import logging
from dataclasses import fields
from datetime import datetime, timezone

from storefront.core.errors import ErrorContext, StorefrontError

_CONTEXT_KEYS = tuple(f.name for f in fields(ErrorContext) if f.name != "timestamp")
_REQUEST_KEYS = ("product_id", "error_code", "status_code")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, keyed like ErrorContext."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in (*_CONTEXT_KEYS, *_REQUEST_KEYS):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, StorefrontError):
                log["error"] = exc.to_dict()
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure the storefront logger tree. Safe to call more than once."""
    root = logging.getLogger("storefront")
    for handler in list(root.handlers):
        if getattr(handler, "_storefront", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._storefront = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
