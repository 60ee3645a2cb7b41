"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, context propagation and event construction.
"""

from __future__ import annotations

import logging

import pytest

from lib_dataclass_flags import get_logger
from lib_dataclass_flags.observability import log_debug, log_error, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert logger.name == "lib_dataclass_flags"
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_context_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs carry their keyword fields under ``context``."""

    caplog.set_level(logging.INFO, logger="lib_dataclass_flags")
    log_info("flags_registered", flag=None, field="Options", count=3)
    record = caplog.records[-1]
    assert record.getMessage() == "flags_registered"
    assert getattr(record, "context") == {"flag": None, "field": "Options", "count": 3}


def test_levels_follow_helpers(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_dataclass_flags")
    log_debug("a")
    log_error("b")
    assert [record.levelno for record in caplog.records[-2:]] == [logging.DEBUG, logging.ERROR]


def test_make_event_merges_optional_payload() -> None:
    """make_event should merge optional metadata alongside the base keys."""

    event = make_event("port", "Listen.port", {"default": "8080"})
    assert event == {"flag": "port", "field": "Listen.port", "default": "8080"}
    assert make_event(None, None) == {"flag": None, "field": None}
