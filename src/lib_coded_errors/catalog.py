"""Ready-made variants for common programming errors.

Purpose
-------
Offer a small vocabulary of coded errors so applications do not redefine
"illegal argument" or "not initialized" in every project.

Contents
--------
* :data:`IllegalArgumentError` (``E_ILLEGAL_ARGUMENT``) and its sub-variants
  :data:`IllegalArgumentTypeError` and :data:`MissingRequiredArgumentError`.
* :data:`IllegalStateError` (``E_ILLEGAL_STATE``) and its sub-variant
  :data:`ClassNotExtendableError`.
* :data:`AlreadyInitializedError`, :data:`NotInitializedError`,
  :data:`MethodNotImplementedError`.
* :data:`CATALOG` – name → variant mapping, in declaration order.

System Role
-----------
A plain consumer of :func:`lib_coded_errors.core.define_variant`; the engine
does not depend on it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .core import CodedError, define_variant

AlreadyInitializedError = define_variant(name="AlreadyInitializedError")
"""Something was initialised a second time."""

IllegalArgumentError = define_variant(name="IllegalArgumentError")
"""An argument value is not acceptable."""

IllegalArgumentTypeError = IllegalArgumentError.subclass(name="IllegalArgumentTypeError")
"""An argument has an unacceptable type."""

MissingRequiredArgumentError = IllegalArgumentError.subclass(name="MissingRequiredArgumentError")
"""A required argument was not supplied."""

IllegalStateError = define_variant(name="IllegalStateError")
"""An operation was invoked while the object is in the wrong state."""

ClassNotExtendableError = IllegalStateError.subclass(name="ClassNotExtendableError")
"""A class that must not be extended was extended."""

MethodNotImplementedError = define_variant(name="MethodNotImplementedError")
"""An abstract method was called without an implementation."""

NotInitializedError = define_variant(name="NotInitializedError")
"""Something was used before it was initialised."""

CATALOG: Mapping[str, type[CodedError]] = MappingProxyType(
    {
        variant.__name__: variant
        for variant in (
            AlreadyInitializedError,
            ClassNotExtendableError,
            IllegalArgumentError,
            IllegalArgumentTypeError,
            IllegalStateError,
            MethodNotImplementedError,
            MissingRequiredArgumentError,
            NotInitializedError,
        )
    }
)
"""Read-only mapping of catalog variant names to variants."""


__all__ = [
    "AlreadyInitializedError",
    "CATALOG",
    "ClassNotExtendableError",
    "IllegalArgumentError",
    "IllegalArgumentTypeError",
    "IllegalStateError",
    "MethodNotImplementedError",
    "MissingRequiredArgumentError",
    "NotInitializedError",
]
