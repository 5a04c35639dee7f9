from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_coded_errors import NO_CODE, NO_MESSAGE, define_variant, format_message

WhyError = define_variant(code="E_WHY")
AError = define_variant(code="E_A")

TEXT = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), min_size=1, max_size=12)


class _DuckError:
    """Error-like value that is not an exception."""

    def __init__(self, message: str | None) -> None:
        self.message = message
        self.name = "DuckError"


def test_no_message_no_cause() -> None:
    assert format_message("E_X") == f"E_X: {NO_MESSAGE}"


def test_missing_code() -> None:
    assert format_message(None, "boom") == f"{NO_CODE}: boom"
    assert format_message("", None) == f"{NO_CODE}: {NO_MESSAGE}"


def test_message_without_cause() -> None:
    assert format_message("E_X", "boom") == "E_X: boom"


def test_family_cause_contributes_its_rendered_message() -> None:
    cause = WhyError("why")
    assert format_message("E_X", "boom", cause) == "E_X: boom: E_WHY: why"


def test_foreign_exception_cause_uses_its_text() -> None:
    assert format_message("E_X", "boom", RuntimeError("disk full")) == "E_X: boom: disk full"


def test_error_like_cause_without_message_uses_sentinel() -> None:
    assert format_message("E_X", "boom", RuntimeError()) == f"E_X: boom: {NO_MESSAGE}"
    assert format_message("E_X", "boom", _DuckError(None)) == f"E_X: boom: {NO_MESSAGE}"


def test_duck_typed_cause_uses_message_attribute() -> None:
    assert format_message("E_X", "boom", _DuckError("quack")) == "E_X: boom: quack"


def test_non_error_cause_is_stringified() -> None:
    assert format_message("E_X", "boom", 13) == "E_X: boom: 13"
    assert format_message("E_X", "boom", "plain text") == "E_X: boom: plain text"


@pytest.mark.parametrize("falsy", [None, 0, "", False])
def test_falsy_single_cause_adds_nothing(falsy: object) -> None:
    assert format_message("E_X", "boom", falsy) == "E_X: boom"


def test_mixed_cause_list_drops_none_entries() -> None:
    causes = [AError("m0"), RuntimeError("m1"), None, 13]
    assert format_message("E_X", "msg", causes) == "E_X: msg: [E_A: m0, m1, 13]"


def test_empty_cause_list_renders_empty_brackets() -> None:
    assert format_message("E_X", "msg", []) == "E_X: msg: []"
    assert format_message("E_X", "msg", (None, None)) == "E_X: msg: []"


def test_only_one_level_is_rendered() -> None:
    inner = WhyError("root", cause=AError("deeper"))
    outer = format_message("E_X", "top", inner)
    assert outer == "E_X: top: E_WHY: root: E_A: deeper"
    assert outer.count("deeper") == 1


def test_cause_with_ambiguous_truth_value_is_rendered() -> None:
    class Ambiguous:
        def __bool__(self) -> bool:
            raise ValueError("ambiguous")

        def __str__(self) -> str:
            return "ambiguous"

    assert format_message("E_X", "boom", Ambiguous()) == "E_X: boom: ambiguous"


@given(code=TEXT, message=TEXT, causes=st.lists(st.one_of(st.none(), st.integers(), TEXT), max_size=5))
def test_message_is_deterministic_and_compacts_nones(code: str, message: str, causes: list[object]) -> None:
    first = format_message(code, message, causes)
    assert first == format_message(code, message, list(causes))
    kept = [str(item) for item in causes if item is not None]
    assert first == f"{code}: {message}: [{', '.join(kept)}]"
