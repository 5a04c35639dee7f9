"""End-to-end behaviour of variants defined through ``define_variant``.

These tests follow the lifecycle a consumer goes through: define a variant by
name or code, raise and catch instances, chain causes, subclass, and check
membership by name.
"""

from __future__ import annotations

import copy
import pickle
from typing import Callable

import pytest

from lib_coded_errors import CodedError, ConfigurationError, define_variant

ShippedError = define_variant(name="ShippedError")


def test_define_without_code_or_name_raises() -> None:
    with pytest.raises(ConfigurationError):
        define_variant()


def test_define_with_invalid_parent_raises() -> None:
    with pytest.raises(ConfigurationError, match="must be a CodedError variant"):
        define_variant(name="OrphanError", parent=ValueError)  # type: ignore[arg-type]


def test_code_only_variant() -> None:
    MyError = define_variant(code="E_MY")

    error = MyError(msg="boom")

    assert isinstance(error, Exception)
    assert isinstance(error, MyError)
    assert error.name == "MyError"
    assert error.code == "E_MY" == MyError.code
    assert error.message == "E_MY: boom"
    assert str(error) == "E_MY: boom"
    assert MyError.is_instance(error)
    assert not MyError.is_instance(None)


def test_name_only_variant() -> None:
    MyError = define_variant(name="MyError")

    error = MyError("boom")

    assert MyError.code == "E_MY"
    assert error.name == "MyError"
    assert error.message == "E_MY: boom"


def test_variant_identity_is_visible_to_introspection() -> None:
    MyError = define_variant(name="MyError")
    assert MyError.__name__ == "MyError"
    assert MyError.__qualname__ == "MyError"
    assert MyError.__module__ == __name__
    assert repr(MyError("boom")) == "MyError('E_MY: boom')"


def test_cause_renders_into_message_and_links_traceback() -> None:
    MyCauseError = define_variant(name="MyCauseError")
    MyError = define_variant(name="MyError")

    cause = MyCauseError(msg="because many badness so high")
    error = MyError(msg="boom", cause=cause)

    assert MyCauseError.code == "E_MY_CAUSE"
    assert error.message == "E_MY: boom: E_MY_CAUSE: because many badness so high"
    assert error.cause is cause
    assert error.__cause__ is cause


def test_no_arguments_uses_sentinels() -> None:
    MyErrorCause = define_variant(code="E_MY_ERROR_CAUSE")
    MyError = define_variant(code="E_MY")

    error = MyError(cause=MyErrorCause())

    assert error.message == "E_MY: NO_MESSAGE: E_MY_ERROR_CAUSE: NO_MESSAGE"
    assert MyError().message == "E_MY: NO_MESSAGE"


def test_message_takes_precedence_over_msg() -> None:
    MyError = define_variant(code="E_MY")
    assert MyError(message="preferred", msg="deprecated").message == "E_MY: preferred"
    assert MyError("", msg="fallback").message == "E_MY: fallback"


def test_instance_overrides() -> None:
    MyError = define_variant(code="E_MY")

    error = MyError("boom", code_override="E_OTHER", name_override="OtherError")

    assert error.code == "E_OTHER"
    assert error.name == "OtherError"
    assert error.message == "E_OTHER: boom"
    assert MyError.code == "E_MY"


def test_code_override_without_name_keeps_variant_name() -> None:
    MyError = define_variant(code="E_MY")
    assert MyError(code_override="E_OTHER").name == "MyError"


def test_subclass_chain() -> None:
    Super = define_variant(code="E_SUPER")
    Sub = Super.subclass(code="E_SUB")
    Sub2 = Sub.subclass(code="E_SUB2")

    error = Sub2()

    assert isinstance(error, Sub2) and isinstance(error, Sub) and isinstance(error, Super)
    assert isinstance(error, CodedError)
    assert error.name == "Sub2Error"
    assert error.code == "E_SUB2"
    assert error.message == "E_SUB2: NO_MESSAGE"
    assert Sub2.__bases__ == (Sub,)
    with pytest.raises(Super):
        raise Sub2("boom")


def test_named_super_and_sub() -> None:
    Super = define_variant(code="E_SUPER", name="Super")
    Sub = Super.subclass(code="E_SUB", name="Sub")

    error = Sub()

    assert isinstance(error, Super)
    assert error.name == "Sub"
    assert error.code == "E_SUB"


def test_is_instance_walks_ancestors_by_name() -> None:
    Super = define_variant(name="SuperError")
    Sub = Super.subclass(name="SubError")
    Unrelated = define_variant(name="UnrelatedError")
    error = Sub("boom")

    assert Sub.is_instance(error)
    assert Super.is_instance(error)
    assert not Unrelated.is_instance(error)
    assert not Sub.is_instance(Super("boom"))
    assert not Super.is_instance(None)
    assert not Super.is_instance("SuperError")
    assert not CodedError.is_instance(error)


def test_is_instance_recognises_separately_defined_twin() -> None:
    First = define_variant(name="TwinError")
    Second = define_variant(name="TwinError")
    assert Second.is_instance(First())
    assert not isinstance(First(), Second)


def test_stack_reports_construction_then_raise_site() -> None:
    MyError = define_variant(name="MyError")

    error = MyError("boom")
    assert error.stack.startswith("MyError: E_MY: boom\n")
    assert "test_variants.py" in error.stack
    assert 'error = MyError("boom")' in error.stack

    with pytest.raises(MyError) as info:
        raise error
    assert info.value.stack.startswith("Traceback (most recent call last):")
    assert "E_MY: boom" in info.value.stack


def test_malformed_cause_and_info_never_break_construction() -> None:
    class Hostile:
        def __bool__(self) -> bool:
            raise RuntimeError("no truth")

        def __str__(self) -> str:
            raise RuntimeError("no text")

    MyError = define_variant(name="MyError")
    error = MyError("boom", cause=[Hostile(), None], info=Hostile())

    assert error.message == "E_MY: boom: [<unstringifiable>]"
    assert set(error.to_dict()) == {"message", "name", "code", "cause", "info", "stack"}


def test_is_instance_ignores_foreign_classes_with_the_same_name() -> None:
    Lookalike = define_variant(name="KeyError")

    assert Lookalike.is_instance(Lookalike("boom"))
    assert not Lookalike.is_instance(KeyError("x"))


@pytest.mark.parametrize(
    "clone",
    [copy.copy, copy.deepcopy, lambda error: pickle.loads(pickle.dumps(error))],
    ids=["copy", "deepcopy", "pickle"],
)
def test_copies_keep_the_rendered_message(clone: Callable[[CodedError], CodedError]) -> None:
    root = ValueError("why")
    error = ShippedError("boom", cause=root, info={"attempt": 2})

    result = clone(error)

    assert type(result) is ShippedError
    assert str(result) == result.message == "E_SHIPPED: boom: why"
    assert result.args == ("E_SHIPPED: boom: why",)
    assert result.info == {"attempt": 2}
    assert isinstance(result.__cause__, ValueError)
    assert result.to_dict() == error.to_dict()
    assert result.stack == error.stack
