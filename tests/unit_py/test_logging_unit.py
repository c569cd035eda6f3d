from __future__ import annotations

import json
import logging

import pytest

pytestmark = pytest.mark.unit


def test_formatter_emits_json_with_context():
    from release_bump.logging import _JsonFormatter

    record = logging.LogRecord("release_bump.release", logging.INFO, __file__, 1, "starting %s", ("release",), None)
    record.version = "1.2.3"
    record.step = "open"
    payload = json.loads(_JsonFormatter().format(record))
    assert payload["msg"] == "starting release"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "release_bump.release"
    assert payload["version"] == "1.2.3"
    assert payload["step"] == "open"
    assert "ts" in payload


def test_formatter_includes_exception_text():
    from release_bump.logging import _JsonFormatter

    try:
        raise ValueError("bad")
    except ValueError:
        import sys

        record = logging.LogRecord("release_bump", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    payload = json.loads(_JsonFormatter().format(record))
    assert "ValueError: bad" in payload["exc"]


def test_log_event_attaches_payload(caplog):
    from release_bump.logging import get_logger, log_event

    logger = get_logger("tests")
    with caplog.at_level(logging.INFO, logger="release_bump"):
        log_event(logger, "release_completed", {"tag": "1.2.3"})
    record = caplog.records[-1]
    assert record.event == "release_completed"
    assert record.payload == {"tag": "1.2.3"}


def test_set_level_changes_package_logger():
    from release_bump.logging import get_logger, is_debug_enabled, set_level

    set_level("DEBUG")
    try:
        assert is_debug_enabled()
        assert get_logger("release").isEnabledFor(logging.DEBUG)
    finally:
        set_level("INFO")
    assert not is_debug_enabled()
