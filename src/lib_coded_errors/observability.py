"""Structured logging helpers for the coded-error engine.

Purpose
    Keep every emission of logging data predictable and contextual without
    forcing applications to adopt a specific logging backend. The engine is
    quiet by default; hosts attach handlers to the package logger.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_error``: emit structured entries via a single
      private emitter.
    - ``make_event``: convenience builder for variant-centric event payloads.

System Integration
    Used by the naming deriver and the composition root to report variant
    definitions and serialization fallbacks. The domain layer stays free from
    logging concerns.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_coded_errors_trace_id", default=None)
"""Current trace identifier propagated through logging helpers.

Why
    Lets a host correlate variant definitions and serialization fallbacks with
    its own request or job identifiers without threading them manually.
"""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_coded_errors")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host applications full
        control over handler and formatter configuration.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    What
        Stores ``trace_id`` in :data:`TRACE_ID`; ``None`` clears the binding.
    Side Effects
        Mutates the context variable visible to subsequent logging helpers.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    code: str | None,
    name: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload describing an error variant.

    What
        Returns a dictionary with ``code`` and ``name`` keys and any optional
        payload fields.
    Inputs
        code: Symbolic code of the variant (or ``None`` when not derived yet).
        name: Display name of the variant (or ``None`` when not derived yet).
        payload: Optional mapping with extra diagnostic detail.

    Examples
    --------
    >>> make_event('E_FOO', 'FooError', {'parent': 'CodedError'})
    {'code': 'E_FOO', 'name': 'FooError', 'parent': 'CodedError'}
    """

    event = _base_event(code, name)
    return _merge_payload(event, payload)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context


def _base_event(code: str | None, name: str | None) -> dict[str, Any]:
    return {"code": code, "name": name}


def _merge_payload(event: dict[str, Any], payload: Mapping[str, Any] | None) -> dict[str, Any]:
    if payload:
        event |= dict(payload)
    return event
