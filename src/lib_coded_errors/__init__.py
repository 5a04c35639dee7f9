"""Public package surface of ``lib_coded_errors``.

Exports the coded-error engine (:class:`CodedError`, :func:`define_variant`,
:func:`format_message`, :func:`any_to_dict`), the naming deriver, the casing
helpers, the sentinels, the ready-made catalog variants, and the logging hooks
so ``import lib_coded_errors`` is all most callers need.
"""

from __future__ import annotations

from .application.naming import CodeName, derive_code_and_name
from .catalog import (
    CATALOG,
    AlreadyInitializedError,
    ClassNotExtendableError,
    IllegalArgumentError,
    IllegalArgumentTypeError,
    IllegalStateError,
    MethodNotImplementedError,
    MissingRequiredArgumentError,
    NotInitializedError,
)
from .core import CodedError, any_to_dict, define_variant, format_message, is_error_like, normalize_omitting
from .domain.casing import to_camel, to_lower_camel, to_lower_snake, to_snake, to_upper_camel, to_upper_snake
from .domain.constants import DEFAULT_OMITTING, NO_CODE, NO_MESSAGE, OMISSION
from .domain.errors import CodedErrorsError, ConfigurationError
from .observability import bind_trace_id, get_logger
from .testing import i_should_fail

__all__ = [
    "AlreadyInitializedError",
    "CATALOG",
    "ClassNotExtendableError",
    "CodeName",
    "CodedError",
    "CodedErrorsError",
    "ConfigurationError",
    "DEFAULT_OMITTING",
    "IllegalArgumentError",
    "IllegalArgumentTypeError",
    "IllegalStateError",
    "MethodNotImplementedError",
    "MissingRequiredArgumentError",
    "NO_CODE",
    "NO_MESSAGE",
    "NotInitializedError",
    "OMISSION",
    "any_to_dict",
    "bind_trace_id",
    "define_variant",
    "derive_code_and_name",
    "format_message",
    "get_logger",
    "i_should_fail",
    "is_error_like",
    "normalize_omitting",
    "to_camel",
    "to_lower_camel",
    "to_lower_snake",
    "to_snake",
    "to_upper_camel",
    "to_upper_snake",
]
