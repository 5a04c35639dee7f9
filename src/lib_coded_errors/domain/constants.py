"""Sentinel values shared by the message formatter and the serializers.

Purpose
-------
Keep the placeholders that appear in rendered messages and converted
structures in one immutable location so every layer agrees on them.

Contents
--------
* :data:`NO_CODE` – substituted for a falsy code in rendered messages.
* :data:`NO_MESSAGE` – substituted for a falsy message in rendered messages.
* :data:`OMISSION` – value stored under keys omitted during conversion.
* :data:`DEFAULT_OMITTING` – property omitted when callers do not specify.
"""

from __future__ import annotations

from typing import Final

NO_CODE: Final[str] = "NO_CODE"
"""Code text used when an error carries no code."""

NO_MESSAGE: Final[str] = "NO_MESSAGE"
"""Message text used when an error (or an error-like cause) has no message."""

OMISSION: Final[None] = None
"""Marker stored under an omitted key.

Why
    An omitted key stays present in the converted structure so readers can tell
    "actively omitted" apart from "never there".
"""

DEFAULT_OMITTING: Final[str] = "stack"
"""Property omitted by :meth:`CodedError.to_dict` and ``to_json`` by default."""
