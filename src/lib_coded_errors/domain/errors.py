"""Domain-level exception hierarchy.

Purpose
-------
Expose the small error taxonomy raised by ``lib_coded_errors`` itself, as
opposed to the coded errors the library produces for its callers.

Contents
--------
* :class:`CodedErrorsError` – umbrella base class for library failures.
* :class:`ConfigurationError` – raised when a variant is defined without any
  identifying information.

System Role
-----------
The naming deriver raises :class:`ConfigurationError` and the composition root
lets it propagate unchanged. Everything else in the engine is total, so this
is the only exception a caller has to expect.
"""

from __future__ import annotations


class CodedErrorsError(Exception):
    """Base type for all exceptions emitted by ``lib_coded_errors``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class ConfigurationError(CodedErrorsError, ValueError):
    """Raised when a variant is requested with neither a code nor a name.

    Why
    ----
    A variant without a code or a name cannot be derived. The failure is fatal
    to the definition call and is never retried.

    Typical Sources
    ---------------
    :func:`lib_coded_errors.application.naming.derive_code_and_name` and every
    caller of it (``define_variant``, ``Variant.subclass``).
    """
