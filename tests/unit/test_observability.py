"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, trace binding, and event construction behaviour
promised to downstream consumers.
"""

from __future__ import annotations

import logging

import pytest

from lib_coded_errors import bind_trace_id, define_variant, get_logger
from lib_coded_errors.observability import TRACE_ID, log_debug, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.DEBUG, logger="lib_coded_errors")
    bind_trace_id("trace-123")
    try:
        log_debug("variant_defined", code="E_FOO", name="FooError")
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "code": "E_FOO", "name": "FooError"}


def test_bind_trace_id_clears_context() -> None:
    """Clearing the trace ID should reset the context variable to None."""

    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    """make_event should merge optional metadata without mutating base keys."""

    event = make_event("E_FOO", "FooError", {"parent": "CodedError"})
    assert event == {"code": "E_FOO", "name": "FooError", "parent": "CodedError"}
    assert make_event("E_FOO", "FooError") == {"code": "E_FOO", "name": "FooError"}


def test_define_variant_emits_debug_event(caplog: pytest.LogCaptureFixture) -> None:
    """Defining a variant should announce its code, name and parent."""

    caplog.set_level(logging.DEBUG, logger="lib_coded_errors")
    define_variant(code="E_LOGGED")
    record = caplog.records[-1]
    assert record.getMessage() == "variant_defined"
    assert getattr(record, "context") == {
        "trace_id": None,
        "code": "E_LOGGED",
        "name": "LoggedError",
        "parent": "CodedError",
    }
