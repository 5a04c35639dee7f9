"""Testing diagnostics that keep failure scenarios observable and predictable.

Purpose
    Provide an intentionally failing helper that exercises error-handling paths
    in the CLI and integration suites without relying on brittle fixtures.

Contents
    - ``FAILURE_MESSAGE``: stable message used when forcing a failure.
    - ``i_should_fail``: raises an :data:`~lib_coded_errors.catalog.IllegalStateError`
      so callers can assert on the propagated code and message.

System Integration
    Referenced by the ``fail`` CLI command and its end-to-end tests.
"""

from __future__ import annotations

from typing import Final

from .catalog import IllegalStateError

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message emitted when ``i_should_fail`` triggers a failure sequence."""


def i_should_fail() -> None:
    """Raise a deterministic coded error for failure-path testing.

    What
        Always raises :data:`~lib_coded_errors.catalog.IllegalStateError` with
        :data:`FAILURE_MESSAGE`, so the rendered message is
        ``E_ILLEGAL_STATE: i should fail``.
    Outputs
        None. The function never returns because it raises.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    lib_coded_errors.catalog.IllegalStateError: E_ILLEGAL_STATE: i should fail
    """

    raise IllegalStateError(FAILURE_MESSAGE)
