"""Tests for crd_schema_compat.normalizer."""

from __future__ import annotations

import copy

import pytest

from crd_schema_compat.normalizer import strip_nulls


def _has_null(tree) -> bool:
    if tree is None:
        return True
    if isinstance(tree, dict):
        return any(_has_null(v) for v in tree.values())
    if isinstance(tree, list):
        return any(_has_null(v) for v in tree)
    return False


TREES = [
    {},
    {"a": None},
    {"a": 1, "b": None, "c": {"d": None, "e": [None, {"f": None, "g": "x"}, 3]}},
    [None, None],
    [{"a": None}, None, [None, 1]],
    {"spec": {"tolerations": [{"key": None, "value": "v"}], "port": None}},
]


@pytest.mark.parametrize("tree", TREES)
def test_no_nulls_remain(tree):
    assert not _has_null(strip_nulls(copy.deepcopy(tree)))


@pytest.mark.parametrize("tree", TREES)
def test_idempotent(tree):
    once = strip_nulls(copy.deepcopy(tree))
    twice = strip_nulls(copy.deepcopy(once))
    assert once == twice


def test_mutates_in_place_and_keeps_order():
    tree = {"z": 1, "y": None, "x": [3, None, 1, None, 2], "w": {"b": None, "a": 0}}
    result = strip_nulls(tree)
    assert result is tree
    assert list(tree) == ["z", "x", "w"]
    assert tree["x"] == [3, 1, 2]
    assert tree["w"] == {"a": 0}


def test_keeps_falsy_values():
    tree = {"a": 0, "b": False, "c": "", "d": [], "e": {}}
    assert strip_nulls(copy.deepcopy(tree)) == tree


@pytest.mark.parametrize("scalar", [1, "text", True, 2.5])
def test_scalars_untouched(scalar):
    assert strip_nulls(scalar) == scalar


def test_omitted_and_null_compare_equal():
    explicit = {"spec": {"name": "a", "replicas": None}}
    omitted = {"spec": {"name": "a"}}
    assert strip_nulls(explicit) == strip_nulls(omitted)
