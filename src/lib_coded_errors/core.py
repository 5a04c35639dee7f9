"""Composition root for ``lib_coded_errors``.

Purpose
-------
Provide the coded-error engine: the base :class:`CodedError`, the message
formatter, the variant factory, and the safe conversion of error graphs into
plain structures and JSON text.

Contents
--------
* :func:`format_message` – renders ``CODE: message: cause`` one level deep.
* :func:`normalize_omitting` – turns the many accepted ``omitting`` shapes
  into a tuple of property names.
* :func:`any_to_dict` – converts causes (family errors, foreign errors, plain
  structures, scalars) into plain data with recursive omission.
* :class:`CodedError` – base class of every variant.
* :func:`define_variant` – mints new variants (and, via
  :meth:`CodedError.subclass`, sub-variants).

System Role
-----------
Consumes the naming deriver from the application layer and the sentinels from
the domain layer. Everything here is total except variant definition, which
raises :class:`~lib_coded_errors.domain.errors.ConfigurationError` when it has
nothing to derive a variant from.
"""

from __future__ import annotations

import json
import sys
import traceback
from collections.abc import Mapping
from typing import Any, Callable, Final, Sequence, TypeAlias

from .application.naming import derive_code_and_name
from .domain.constants import DEFAULT_OMITTING, NO_CODE, NO_MESSAGE, OMISSION
from .domain.errors import ConfigurationError
from .observability import log_debug, log_error, make_event

Omitting: TypeAlias = "str | bool | Sequence[str] | None"

_ERROR_LIKE_KEYS: Final[tuple[str, ...]] = ("message", "name", "stack")
_FALLBACK_ERROR_KEYS: Final[tuple[str, ...]] = ("message", "code", "name", "stack")
_JSON_SEPARATORS: Final[tuple[str, str]] = (",", ":")


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return "<unstringifiable>"


def _get_attr(obj: Any, name: str, default: Any = None) -> Any:
    try:
        return getattr(obj, name)
    except Exception:
        return default


def _has_attr(obj: Any, name: str) -> bool:
    missing = object()
    return _get_attr(obj, name, missing) is not missing


def _is_present(value: Any) -> bool:
    try:
        return bool(value)
    except Exception:
        # objects with ambiguous truth values (arrays, frames) still count as a cause
        return True


def is_error_like(value: Any) -> bool:
    """Return ``True`` for exceptions and for objects exposing ``message`` and ``name``.

    Examples
    --------
    >>> is_error_like(ValueError("bad"))
    True
    >>> is_error_like({"message": "not an attribute"})
    False
    """

    if isinstance(value, BaseException):
        return True
    return _has_attr(value, "message") and _has_attr(value, "name")


def _error_message(value: Any) -> Any:
    message = _get_attr(value, "message")
    if message is None and isinstance(value, BaseException):
        message = _safe_str(value)
    return message


def _error_name(value: Any) -> Any:
    if isinstance(value, CodedError):
        return value.name
    if isinstance(value, BaseException):
        return type(value).__name__
    return _get_attr(value, "name")


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _error_stack(value: Any) -> Any:
    if isinstance(value, CodedError):
        return value.stack
    if isinstance(value, BaseException):
        return _format_exception(value)
    return _get_attr(value, "stack")


def _render_cause(item: Any) -> Any:
    if is_error_like(item):
        return _error_message(item) or NO_MESSAGE
    return item


def format_message(code: Any = None, message: Any = None, cause: Any = None) -> str:
    """Render the single-line message stored on every coded error.

    Why
    ----
    Messages must read the same wherever the error is logged, so the rendering
    is a pure function of the code, the message, and the direct cause.

    What
    ----
    ``CODE: message`` followed by ``: <cause>`` for a single cause or
    ``: [<cause>, <cause>]`` for a list or tuple of causes. Error-like causes
    contribute their (already formatted) message, other values their text.
    ``None`` entries in a cause list are dropped. The cause's own cause is not
    visited; it is already part of the cause's message.

    Examples
    --------
    >>> format_message("E_FOO")
    'E_FOO: NO_MESSAGE'
    >>> format_message("E_FOO", "boom", ValueError("why"))
    'E_FOO: boom: why'
    >>> format_message(None, "boom", ["a", None, 13])
    'NO_CODE: boom: [a, 13]'
    """

    text = f"{_safe_str(code) if code else NO_CODE}: {_safe_str(message) if message else NO_MESSAGE}"
    if isinstance(cause, (list, tuple)):
        rendered = (_render_cause(item) for item in cause)
        text += f": [{', '.join(_safe_str(item) for item in rendered if item is not None)}]"
    elif cause is not None and _is_present(cause):
        text += f": {_safe_str(_render_cause(cause))}"
    return text


def normalize_omitting(omitting: Omitting = DEFAULT_OMITTING) -> tuple[str, ...]:
    """Normalise the property names to omit during conversion.

    ``None`` and ``True`` omit ``stack``; ``False`` omits nothing; a string
    omits that single property; a sequence omits its string elements (other
    elements are ignored).

    Examples
    --------
    >>> normalize_omitting(None)
    ('stack',)
    >>> normalize_omitting(False)
    ()
    >>> normalize_omitting("info")
    ('info',)
    >>> normalize_omitting(["cause", 3, "stack"])
    ('cause', 'stack')
    """

    if omitting is None:
        omitting = True
    if isinstance(omitting, bool):
        return (DEFAULT_OMITTING,) if omitting else ()
    if isinstance(omitting, str):
        return (omitting,) if omitting else ()
    if isinstance(omitting, (list, tuple, set, frozenset)):
        return tuple(item for item in omitting if isinstance(item, str))
    return ()


_ERROR_LIKE_READERS: Final[dict[str, Callable[[Any], Any]]] = {
    "message": _error_message,
    "name": _error_name,
    "stack": _error_stack,
}


def any_to_dict(item: Any, omitting: Omitting = DEFAULT_OMITTING) -> Any:
    """Convert *item* into plain data, omitting the requested properties.

    What
    ----
    * ``None`` and scalars are returned unchanged.
    * Lists and tuples become lists of converted elements.
    * Coded errors delegate to :meth:`CodedError.to_dict`.
    * Other error-like values become ``{"message", "name", "stack"}``.
    * Mappings become dicts whose values are converted recursively; omitted
      keys keep their place with :data:`~lib_coded_errors.domain.constants.OMISSION`.
    * Any other object is returned unchanged.

    Examples
    --------
    >>> any_to_dict({"stack": "trace", "nested": {"stack": "deeper", "n": 1}})
    {'stack': None, 'nested': {'stack': None, 'n': 1}}
    >>> any_to_dict(KeyError("k"), ["stack", "name"])
    {'message': "'k'", 'name': None, 'stack': None}
    """

    if item is None:
        return item
    if isinstance(item, (list, tuple)):
        return [any_to_dict(element, omitting) for element in item]
    if isinstance(item, CodedError):
        return item.to_dict(omitting)
    if isinstance(item, (str, bytes, int, float)):
        return item

    omitted = normalize_omitting(omitting)
    if is_error_like(item):
        return {key: OMISSION if key in omitted else _ERROR_LIKE_READERS[key](item) for key in _ERROR_LIKE_KEYS}
    if isinstance(item, Mapping):
        return {key: OMISSION if key in omitted else any_to_dict(value, omitted) for key, value in item.items()}
    return item


def _capture_origin() -> list[tuple[str, int, str, None]]:
    # Source lines are resolved lazily by StackSummary when ``stack`` is read.
    frames = []
    frame = sys._getframe(1)
    while frame is not None:
        if frame.f_code.co_filename != __file__:
            frames.append((frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name, None))
        frame = frame.f_back
    frames.reverse()
    return frames


class CodedError(Exception):
    """Base class of every error variant minted by :func:`define_variant`.

    Why
    ----
    Give every application error a stable symbolic code, a chain of causes,
    free-form contextual ``info``, and conversions that are safe to call from
    error handlers.

    What
    ----
    The rendered message is computed once, at construction, by
    :func:`format_message`. ``str(error)`` returns it as well.

    Parameters
    ----------
    message:
        Optional message text. Takes precedence over *msg*.
    cause:
        Optional cause, or a list/tuple of causes. Any value is accepted. A
        single exception cause is also linked as ``__cause__``.
    info:
        Optional contextual value of any kind; never inspected by the engine.
    msg:
        Deprecated alias of *message*.
    name_override / code_override:
        Replace the variant's name / code for this instance only.

    Examples
    --------
    >>> FooError = define_variant(name="FooError")
    >>> error = FooError("boom", info={"attempt": 2})
    >>> error.code, error.name, error.message
    ('E_FOO', 'FooError', 'E_FOO: boom')
    >>> error.to_dict()
    {'message': 'E_FOO: boom', 'name': 'FooError', 'code': 'E_FOO', 'cause': None, 'info': {'attempt': 2}, 'stack': None}
    """

    code: str | None = None
    name: str | None = "CodedError"

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: Any = None,
        info: Any = None,
        msg: str | None = None,
        name_override: str | None = None,
        code_override: str | None = None,
    ) -> None:
        if not message:
            message = msg
        variant = type(self)
        code = code_override or variant.code
        name = name_override or variant.name or code
        formatted = format_message(code, message, cause)
        super().__init__(formatted)

        self.message = formatted
        self.name = name
        self.code = code
        self.cause = cause
        self.info = info
        if isinstance(cause, BaseException):
            self.__cause__ = cause
        self._origin = _capture_origin()

    @property
    def stack(self) -> str:
        """Traceback text: the raise site once raised, else the construction site."""

        if self.__traceback__ is not None:
            return _format_exception(self)
        origin = traceback.StackSummary.from_list(self._origin)
        return f"{self.name}: {self.message}\n" + "".join(origin.format())

    def __reduce__(self) -> tuple[Any, ...]:
        # ``args`` already holds the rendered message; restore state instead of re-rendering it.
        state = dict(vars(self))
        state["args"] = self.args
        if self.__cause__ is not None:
            state["__cause__"] = self.__cause__
        return type(self), (), state

    @classmethod
    def subclass(cls, *, code: str | None = None, name: str | None = None) -> type[CodedError]:
        """Define a new variant extending this one.

        Examples
        --------
        >>> Super = define_variant(code="E_SUPER")
        >>> Sub = Super.subclass(code="E_SUB")
        >>> Sub.name, issubclass(Sub, Super)
        ('SubError', True)
        """

        return define_variant(code=code, name=name, parent=cls)

    @classmethod
    def is_instance(cls, candidate: Any) -> bool:
        """Return ``True`` when *candidate* belongs to this variant by name.

        The class names of *candidate*'s type and of its ancestors (stopping at
        :class:`CodedError`) are compared with this variant's name, so two
        separately defined variants with the same name recognise each other.
        ``None`` and values outside the family yield ``False``.

        Examples
        --------
        >>> Lookalike = define_variant(name="KeyError")
        >>> Lookalike.is_instance(KeyError("x"))
        False
        """

        if not isinstance(candidate, CodedError):
            return False
        for klass in type(candidate).__mro__:
            if klass is CodedError:
                break
            if klass.__name__ == cls.name:
                return True
        return False

    def to_dict(self, omitting: Omitting = DEFAULT_OMITTING) -> dict[str, Any]:
        """Return this error as a plain ``dict`` suitable for :func:`json.dumps`.

        What
        ----
        Contains ``message``, every public instance attribute (``name``,
        ``code``, ``cause``, ``info`` and anything a caller attached), and
        ``stack``. Omitted keys hold
        :data:`~lib_coded_errors.domain.constants.OMISSION`. ``cause`` is
        converted recursively with the same omissions; all other values,
        including ``info``, are copied as they are.

        Parameters
        ----------
        omitting:
            Property names to omit, see :func:`normalize_omitting`. Defaults to
            ``"stack"``.
        """

        omitted = normalize_omitting(omitting)
        result: dict[str, Any] = {}
        for key in self._public_keys():
            if key in omitted:
                result[key] = OMISSION
            elif key == "cause":
                result[key] = any_to_dict(self.cause, omitted)
            else:
                result[key] = getattr(self, key)
        return result

    def to_json(
        self,
        *,
        omitting: Omitting = DEFAULT_OMITTING,
        formatter: Callable[[Any], Any] | None = None,
        indent: int | str | None = None,
    ) -> str:
        """Serialise :meth:`to_dict` to JSON without ever raising.

        Why
        ----
        Error handlers must not fail while reporting errors. Cyclic ``info`` or
        ``cause`` graphs and unserialisable values are the usual culprits.

        What
        ----
        On any serialisation failure the result is the JSON of
        ``{"jsonStringifyError": {message, name, stack}, "error": {message,
        code, name, stack}}`` describing the failure and this error, each value
        subject to *omitting*.

        Parameters
        ----------
        omitting:
            Property names to omit, see :func:`normalize_omitting`.
        formatter:
            Passed to :func:`json.dumps` as ``default`` to encode otherwise
            unserialisable values.
        indent:
            Optional indentation passed to :func:`json.dumps`.

        Examples
        --------
        >>> BarError = define_variant(code="E_BAR")
        >>> BarError("boom").to_json()
        '{"message":"E_BAR: boom","name":"BarError","code":"E_BAR","cause":null,"info":null,"stack":null}'
        """

        try:
            return json.dumps(
                self.to_dict(omitting),
                default=formatter,
                indent=indent,
                separators=_JSON_SEPARATORS,
                ensure_ascii=False,
            )
        except Exception as exc:  # noqa: BLE001 - serialisation must never raise
            event = make_event(_safe_str(self.code), _safe_str(self.name), {"error": _safe_str(exc)})
            log_error("json_fallback", **event)
            return json.dumps(
                self._fallback(exc, omitting),
                indent=indent if isinstance(indent, (int, str)) else None,
                separators=_JSON_SEPARATORS,
                ensure_ascii=False,
            )

    def _public_keys(self) -> list[str]:
        keys = ["message", *(key for key in vars(self) if not key.startswith("_")), "stack"]
        return list(dict.fromkeys(keys))

    def _fallback(self, failure: Exception, omitting: Omitting) -> dict[str, dict[str, str | None]]:
        omitted = normalize_omitting(omitting)
        failure_values = {
            "message": lambda: _safe_str(failure),
            "name": lambda: type(failure).__name__,
            "stack": lambda: _format_exception(failure),
        }
        error_values = {
            "message": lambda: self.message,
            "code": lambda: self.code,
            "name": lambda: self.name,
            "stack": lambda: self.stack,
        }
        return {
            "jsonStringifyError": {key: _fallback_text(failure_values[key], key in omitted) for key in _ERROR_LIKE_KEYS},
            "error": {key: _fallback_text(error_values[key], key in omitted) for key in _FALLBACK_ERROR_KEYS},
        }


def _fallback_text(read: Callable[[], Any], omitted: bool) -> str | None:
    if omitted:
        return OMISSION
    try:
        value = read()
    except Exception:
        return None
    return None if value is None else _safe_str(value)


def _caller_module() -> str:
    frame = sys._getframe(1)
    while frame is not None and frame.f_globals.get("__name__") == __name__:
        frame = frame.f_back
    if frame is None:
        return __name__
    return frame.f_globals.get("__name__", __name__)


def define_variant(
    *,
    code: str | None = None,
    name: str | None = None,
    parent: type[CodedError] | None = None,
) -> type[CodedError]:
    """Define a new error variant bound to a code and a name.

    Why
    ----
    Application errors are declared in one line, by name or by code, and still
    get stable codes, class names that show up in tracebacks, and subclassing.

    What
    ----
    Completes the ``(code, name)`` pair with
    :func:`~lib_coded_errors.application.naming.derive_code_and_name` and
    returns a subclass of *parent* (default :class:`CodedError`) whose class
    name, ``name`` and ``code`` attributes carry the pair.

    Raises
    ------
    ConfigurationError
        When neither *code* nor *name* is given, or *parent* is not a variant.

    Examples
    --------
    >>> WickedError = define_variant(name="SomethingWickedError")
    >>> WickedError.code
    'E_SOMETHING_WICKED'
    >>> str(WickedError(cause=WickedError("why")))
    'E_SOMETHING_WICKED: NO_MESSAGE: E_SOMETHING_WICKED: why'
    """

    resolved = derive_code_and_name(code=code, name=name)
    base = CodedError if parent is None else parent
    if not (isinstance(base, type) and issubclass(base, CodedError)):
        log_debug("variant_definition_rejected", **make_event(resolved.code, resolved.name, {"parent": repr(base)}))
        raise ConfigurationError(f"parent of {resolved.name} must be a CodedError variant, got {base!r}")

    namespace = {
        "code": resolved.code,
        "name": resolved.name,
        "__qualname__": resolved.name,
        "__module__": _caller_module(),
        "__doc__": f"Coded error variant {resolved.name} ({resolved.code}).",
    }
    variant = type(resolved.name, (base,), namespace)
    log_debug("variant_defined", **make_event(resolved.code, resolved.name, {"parent": base.__name__}))
    return variant


__all__ = [
    "CodedError",
    "Omitting",
    "any_to_dict",
    "define_variant",
    "format_message",
    "is_error_like",
    "normalize_omitting",
]
