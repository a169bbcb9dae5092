import json
import logging

import pytest

from vibe_lister.observability import (
    JsonFormatter,
    RequestContextFilter,
    configure_logging,
    request_id_var,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _record(msg="hello"):
    return logging.LogRecord("vibe_lister.test", logging.WARNING, __file__, 1, msg, None, None)


@pytest.mark.unit
def test_filter_attaches_current_request_id():
    record = _record()
    token = request_id_var.set("rid-42")
    try:
        RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "rid-42"

    outside = _record()
    RequestContextFilter().filter(outside)
    assert outside.request_id == "-"


@pytest.mark.unit
def test_json_formatter_payload():
    record = _record("Spotify search failed for: x")
    record.request_id = "rid-1"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "vibe_lister.test"
    assert payload["message"] == "Spotify search failed for: x"
    assert payload["request_id"] == "rid-1"


@pytest.mark.unit
def test_configure_logging_does_not_stack_handlers(restore_root_logger):
    configure_logging("DEBUG", "json")
    configure_logging("INFO", "text")

    ours = [
        h for h in restore_root_logger.handlers
        if any(isinstance(f, RequestContextFilter) for f in h.filters)
    ]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JsonFormatter)
    assert restore_root_logger.level == logging.INFO


@pytest.mark.unit
def test_text_format_carries_request_id(restore_root_logger):
    configure_logging("INFO", "text")
    (handler,) = [
        h for h in restore_root_logger.handlers
        if any(isinstance(f, RequestContextFilter) for f in h.filters)
    ]
    record = _record("hello")
    token = request_id_var.set("rid-7")
    try:
        handler.filter(record)
    finally:
        request_id_var.reset(token)

    line = handler.formatter.format(record)
    assert line.endswith(" - vibe_lister.test - WARNING - [rid-7] hello")
