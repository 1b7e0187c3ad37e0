"""Tests for crd_schema_compat.comparator."""

from __future__ import annotations

import pytest

from crd_schema_compat.comparator import (
    MISSING,
    assert_documents_equal,
    find_first_mismatch,
    format_path,
)
from crd_schema_compat.exceptions import SchemaCompatibilityError


def _tolerations(second_key):
    return {
        "spec": {
            "tolerations": [
                {"key": "a", "value": "1"},
                {"key": second_key, "value": "2"},
            ]
        }
    }


def test_equal_trees_have_no_mismatch():
    assert find_first_mismatch(_tolerations("b"), _tolerations("b")) is None


def test_reports_exact_nested_path():
    mismatch = find_first_mismatch(_tolerations("b"), _tolerations("c"))
    assert mismatch.path == ("spec", "tolerations", 1, "key")
    assert mismatch.path_str == "spec.tolerations[1].key"
    assert mismatch.expected == "b"
    assert mismatch.actual == "c"


def test_assert_raises_with_path_in_message():
    with pytest.raises(SchemaCompatibilityError) as excinfo:
        assert_documents_equal(_tolerations("b"), _tolerations("c"), kind="SGCluster")
    message = str(excinfo.value)
    assert message.startswith("SGCluster: ")
    assert "spec.tolerations[1].key" in message
    assert '"b"' in message and '"c"' in message
    assert excinfo.value.mismatch.path_str == "spec.tolerations[1].key"


def test_missing_field_after_round_trip():
    mismatch = find_first_mismatch({"spec": {"a": 1, "b": 2}}, {"spec": {"a": 1}})
    assert mismatch.path_str == "spec.b"
    assert mismatch.actual is MISSING
    assert "missing" in mismatch.reason


def test_extra_field_in_round_trip():
    mismatch = find_first_mismatch({"spec": {"a": 1}}, {"spec": {"a": 1, "injected": "x"}})
    assert mismatch.path_str == "spec.injected"
    assert mismatch.expected is MISSING


def test_array_length_difference():
    mismatch = find_first_mismatch({"a": [1, 2]}, {"a": [1]})
    assert mismatch.path_str == "a[1]"
    assert mismatch.expected == 2
    assert mismatch.actual is MISSING
    assert "length" in mismatch.reason


def test_type_difference():
    mismatch = find_first_mismatch({"a": {"b": "1"}}, {"a": {"b": 1}})
    assert mismatch.path_str == "a.b"
    assert "string != number" in mismatch.reason


def test_boolean_is_not_a_number():
    assert find_first_mismatch({"a": True}, {"a": 1}) is not None


def test_integer_and_float_compare_by_value():
    assert find_first_mismatch({"a": 5}, {"a": 5.0}) is None
    assert find_first_mismatch({"a": 5}, {"a": 5.5}) is not None


def test_key_order_is_irrelevant():
    assert find_first_mismatch({"a": 1, "b": 2}, {"b": 2, "a": 1}) is None


def test_null_equals_null():
    assert find_first_mismatch({"spec": None}, {"spec": None}) is None


@pytest.mark.parametrize(
    "tokens, text",
    [
        ((), "<root>"),
        (("spec",), "spec"),
        (("spec", "a", 0, "b"), "spec.a[0].b"),
        ((0, "a"), "[0].a"),
    ],
)
def test_format_path(tokens, text):
    assert format_path(tokens) == text


def test_describe_truncates_large_values():
    big = {"k": "x" * 1000}
    mismatch = find_first_mismatch({"a": big}, {"a": "small"})
    assert len(mismatch.describe()) < 600
    assert mismatch.to_dict()["path"] == "a"
