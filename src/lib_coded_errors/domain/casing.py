"""Casing conversions used to derive codes from names and names from codes.

Purpose
-------
Translate between ``camelCase`` identifiers and ``snake_case`` identifiers
without any knowledge of error naming conventions. The naming deriver layers
the ``E_`` prefix and ``Error`` suffix rules on top.

Contents
--------
* :func:`to_snake` / :func:`to_upper_snake` / :func:`to_lower_snake`
* :func:`to_camel` / :func:`to_upper_camel` / :func:`to_lower_camel`

Falsy input is returned unchanged by every helper so callers can pass optional
values straight through.
"""

from __future__ import annotations

import re
from typing import Any, Final

_LEADING_UPPER: Final[re.Pattern[str]] = re.compile(r"^([A-Z])")
_UPPER: Final[re.Pattern[str]] = re.compile(r"([A-Z])")
_LEADING_LOWER: Final[re.Pattern[str]] = re.compile(r"^([a-z])")


def to_snake(camel: Any, upper: bool = False) -> Any:
    """Convert *camel* (``likeThis``) to snake case (``like_this``).

    Parameters
    ----------
    camel:
        Camel cased text; non-string values are converted with :func:`str`.
    upper:
        Upper-case the result (``LIKE_THIS``) when ``True``.

    Returns
    -------
    Any
        The converted text, or *camel* unchanged when it is falsy.

    Examples
    --------
    >>> to_snake("likeThis")
    'like_this'
    >>> to_snake("SomethingWickedError", upper=True)
    'SOMETHING_WICKED_ERROR'
    >>> to_snake("") == ""
    True
    """

    if not camel:
        return camel
    text = _LEADING_UPPER.sub(lambda match: match.group(1).lower(), str(camel))
    text = _UPPER.sub(lambda match: f"_{match.group(1).lower()}", text)
    return text.upper() if upper else text


def to_upper_snake(camel: Any) -> Any:
    """Convert *camel* to upper snake case (``LIKE_THIS``)."""

    return to_snake(camel, upper=True)


def to_lower_snake(camel: Any) -> Any:
    """Convert *camel* to lower snake case (``like_this``)."""

    return to_snake(camel)


def to_camel(snake: Any, upper: bool = True) -> Any:
    """Convert *snake* (``like_this``) to camel case.

    Empty segments (doubled or leading underscores) are dropped. Each segment
    is lower-cased before its first letter is capitalised, so ``E_FOO_BAR``
    and ``e_foo_bar`` convert identically.

    Parameters
    ----------
    snake:
        Snake cased text; non-string values are converted with :func:`str`.
    upper:
        Capitalise the first segment too (``LikeThis``) when ``True``,
        otherwise keep it lower case (``likeThis``).

    Examples
    --------
    >>> to_camel("like_this")
    'LikeThis'
    >>> to_camel("LIKE_THIS", upper=False)
    'likeThis'
    >>> to_camel("__sub2_")
    'Sub2'
    >>> to_camel(None) is None
    True
    """

    if not snake:
        return snake
    capitalise = upper
    parts: list[str] = []
    for segment in str(snake).split("_"):
        if not segment:
            continue
        segment = segment.lower()
        if capitalise:
            segment = _LEADING_LOWER.sub(lambda match: match.group(1).upper(), segment)
        capitalise = True
        parts.append(segment)
    return "".join(parts)


def to_upper_camel(snake: Any) -> Any:
    """Convert *snake* to leading upper camel case (``LikeThis``)."""

    return to_camel(snake)


def to_lower_camel(snake: Any) -> Any:
    """Convert *snake* to leading lower camel case (``likeThis``)."""

    return to_camel(snake, upper=False)


__all__ = [
    "to_snake",
    "to_upper_snake",
    "to_lower_snake",
    "to_camel",
    "to_upper_camel",
    "to_lower_camel",
]
