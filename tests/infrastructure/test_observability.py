"""Structured Logging: JSON formatter and setup_logging."""

import json
import logging
import sys

from storefront.core.errors import ErrorContext, RepositoryError
from storefront.infrastructure.observability import JSONFormatter, setup_logging


def _record(exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "storefront.services.request_runner", logging.WARNING, __file__, 1,
        "fetch_products failed: %s", ("timeout",), exc_info,
    )
    record.__dict__.update(extra)
    return record


def test_formats_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "storefront.services.request_runner"
    assert payload["message"] == "fetch_products failed: timeout"
    assert "timestamp" in payload
    assert "operation" not in payload


def test_surfaces_known_extra_fields():
    record = _record(operation="fetch_products", request_token=3, error_code="REPOSITORY_ERROR")
    payload = json.loads(JSONFormatter().format(record))
    assert payload["operation"] == "fetch_products"
    assert payload["request_token"] == 3
    assert payload["error_code"] == "REPOSITORY_ERROR"


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    logger = logging.getLogger("storefront")
    owned = [h for h in logger.handlers if getattr(h, "_storefront", False)]
    assert len(owned) == 1
    assert not isinstance(owned[0].formatter, JSONFormatter)
    assert logger.level == logging.WARNING
    logger.removeHandler(owned[0])
    logger.setLevel(logging.NOTSET)


def test_surfaces_error_context_fields():
    payload = json.loads(JSONFormatter().format(_record(resource_id="7", debug_info={"attempt": 1})))
    assert payload["resource_id"] == "7"
    assert payload["debug_info"] == {"attempt": 1}


def test_storefront_error_rendered_structurally():
    try:
        raise RepositoryError(
            "Request timed out", context=ErrorContext(operation="get_products"),
        )
    except RepositoryError:
        record = _record(exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert payload["error"]["code"] == "REPOSITORY_ERROR"
    assert payload["error"]["context"]["operation"] == "get_products"
    assert "Traceback" in payload["exception"]
