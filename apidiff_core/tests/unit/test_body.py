"""Unit tests for apidiff_core.diff.body."""

from __future__ import annotations

import pytest

from apidiff_core.diff.body import (
    LAMBDA_PREFIX,
    METHOD_BODY_BLACKLIST,
    find_changed_methods,
    has_body_changed,
    is_body_check_excluded,
)
from apidiff_core.models.bytecode import MethodInfo


def _method(name: str = "foo", descriptor: str = "()V", code: bytes | None = b"\xb1") -> MethodInfo:
    return MethodInfo(name=name, descriptor=descriptor, code=code)


# ---------------------------------------------------------------------------
# Exclusion rules
# ---------------------------------------------------------------------------


class TestExclusions:
    @pytest.mark.parametrize("name", sorted(METHOD_BODY_BLACKLIST))
    def test_blacklisted_names(self, name):
        assert is_body_check_excluded(name) is True

    def test_lambda_prefix(self):
        assert is_body_check_excluded(f"{LAMBDA_PREFIX}run$0") is True

    def test_regular_name(self):
        assert is_body_check_excluded("compute") is False

    def test_blacklist_is_exact_match(self):
        assert is_body_check_excluded("toStringHelper") is False


# ---------------------------------------------------------------------------
# has_body_changed
# ---------------------------------------------------------------------------


class TestHasBodyChanged:
    def test_both_absent(self):
        assert has_body_changed(_method(code=None), _method(code=None)) is False

    def test_left_absent(self):
        assert has_body_changed(_method(code=None), _method(code=b"\xb1")) is True

    def test_right_absent(self):
        assert has_body_changed(_method(code=b"\xb1"), _method(code=None)) is True

    def test_equal_bytes(self):
        assert has_body_changed(_method(code=b"\x01\x02\x03"), _method(code=b"\x01\x02\x03")) is False

    def test_different_byte(self):
        assert has_body_changed(_method(code=b"\x01\x02\x03"), _method(code=b"\x01\x02\x04")) is True

    def test_different_length(self):
        assert has_body_changed(_method(code=b"\x01\x02"), _method(code=b"\x01\x02\x03")) is True

    def test_empty_bodies_equal(self):
        assert has_body_changed(_method(code=b""), _method(code=b"")) is False

    def test_deterministic(self):
        left, right = _method(code=b"\x05"), _method(code=b"\x06")
        assert {has_body_changed(left, right) for _ in range(5)} == {True}


# ---------------------------------------------------------------------------
# find_changed_methods
# ---------------------------------------------------------------------------


class TestFindChangedMethods:
    def test_reports_name_and_descriptor(self):
        pairs = [(_method("foo", "()V", b"\x01\x02\x03"), _method("foo", "()V", b"\x01\x02\x04"))]
        assert find_changed_methods(pairs) == ["foo :: ()V"]

    def test_unchanged_not_reported(self):
        pairs = [(_method(code=b"\x01"), _method(code=b"\x01"))]
        assert find_changed_methods(pairs) == []

    def test_to_string_excluded(self):
        pairs = [
            (
                _method("toString", "()Ljava/lang/String;", b"\x01"),
                _method("toString", "()Ljava/lang/String;", b"\x02"),
            )
        ]
        assert find_changed_methods(pairs) == []

    def test_constructor_excluded(self):
        pairs = [(_method("<init>", "()V", b"\x01"), _method("<init>", "()V", b"\x02"))]
        assert find_changed_methods(pairs) == []

    def test_lambda_excluded(self):
        pairs = [(_method("lambda$main$0", "()V", b"\x01"), _method("lambda$main$0", "()V", b"\x02"))]
        assert find_changed_methods(pairs) == []

    def test_keeps_pair_order(self):
        pairs = [
            (_method("b", code=b"\x01"), _method("b", code=b"\x02")),
            (_method("a", code=b"\x01"), _method("a", code=b"\x02")),
        ]
        assert find_changed_methods(pairs) == ["b :: ()V", "a :: ()V"]

    def test_empty(self):
        assert find_changed_methods([]) == []
