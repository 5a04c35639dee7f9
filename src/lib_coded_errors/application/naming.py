"""Naming deriver that completes a ``(code, name)`` pair.

Purpose
-------
Every error variant carries both a symbolic code (``E_SOMETHING_WICKED``) and
a display name (``SomethingWickedError``). Callers usually supply only one of
them; this module fills in the other using the casing rules from
:mod:`lib_coded_errors.domain.casing`.

Contents
--------
* :class:`CodeName` – immutable result pair.
* :func:`derive_code_and_name` – the derivation rules.

System Role
-----------
Called by :func:`lib_coded_errors.core.define_variant` before a variant class
is created. It is the only place that raises
:class:`~lib_coded_errors.domain.errors.ConfigurationError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..domain.casing import to_upper_camel, to_upper_snake
from ..domain.errors import ConfigurationError
from ..observability import log_debug, make_event

CODE_PREFIX: Final[str] = "E_"
NAME_SUFFIX: Final[str] = "Error"
_CODE_SUFFIX: Final[str] = "_ERROR"


@dataclass(frozen=True, slots=True)
class CodeName:
    """Resolved identity of an error variant.

    Attributes
    ----------
    code:
        Symbolic error code, conventionally prefixed with ``E_``.
    name:
        Display name, conventionally suffixed with ``Error``.
    """

    code: str
    name: str


def derive_code_and_name(code: str | None = None, name: str | None = None) -> CodeName:
    """Return a complete :class:`CodeName`, deriving whichever half is missing.

    Rules
    -----
    * name only: ``"E_" + upper_snake(name)`` with a trailing ``_ERROR``
      removed.
    * code only: leading ``E_`` removed, the rest upper-camel cased and
      suffixed with ``Error`` unless it already ends that way.
    * both: returned unchanged; the two are not cross-checked.

    Raises
    ------
    ConfigurationError
        When neither *code* nor *name* is supplied.

    Examples
    --------
    >>> derive_code_and_name(name="SomethingWickedError")
    CodeName(code='E_SOMETHING_WICKED', name='SomethingWickedError')
    >>> derive_code_and_name(code="E_SOMETHING_WICKED")
    CodeName(code='E_SOMETHING_WICKED', name='SomethingWickedError')
    >>> derive_code_and_name(code="E_SUPER", name="Super")
    CodeName(code='E_SUPER', name='Super')
    """

    if not name and not code:
        log_debug("variant_definition_rejected", **make_event(code, name))
        raise ConfigurationError("name or code is required")

    if name and not code:
        code = _code_from_name(name)
    if code and not name:
        name = _name_from_code(code)

    return CodeName(code=code, name=name)  # type: ignore[arg-type]


def _code_from_name(name: str) -> str:
    code = f"{CODE_PREFIX}{to_upper_snake(name)}"
    if code.endswith(_CODE_SUFFIX):
        code = code[: -len(_CODE_SUFFIX)]
    return code


def _name_from_code(code: str) -> str:
    stem = code[len(CODE_PREFIX) :] if code.startswith(CODE_PREFIX) else code
    name = to_upper_camel(stem)
    if not name.endswith(NAME_SUFFIX):
        name = f"{name}{NAME_SUFFIX}"
    return name


__all__ = ["CodeName", "derive_code_and_name", "CODE_PREFIX", "NAME_SUFFIX"]
