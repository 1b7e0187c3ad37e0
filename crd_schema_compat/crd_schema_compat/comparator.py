# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structural comparison of document trees.

The comparison stops at the first divergence and reports where it happened as
a path like ``spec.tolerations[1].key``, together with both values.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from .exceptions import SchemaCompatibilityError


PathToken = Union[str, int]

_MAX_RENDERED_VALUE = 200


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


def format_path(tokens: Sequence[PathToken]) -> str:
    parts = []
    for token in tokens:
        if isinstance(token, int):
            parts.append(f"[{token}]")
        elif parts:
            parts.append(f".{token}")
        else:
            parts.append(str(token))
    return "".join(parts) or "<root>"


def json_type(value: Any) -> str:
    if value is None:
        return "null"
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def render_value(value: Any) -> str:
    if value is MISSING:
        return repr(value)
    try:
        text = json.dumps(value, sort_keys=True, default=str)
    except (TypeError, ValueError):
        text = repr(value)
    if len(text) > _MAX_RENDERED_VALUE:
        text = text[:_MAX_RENDERED_VALUE - 3] + "..."
    return text


@dataclass(frozen=True)
class Mismatch:
    path: Tuple[PathToken, ...]
    expected: Any
    actual: Any
    reason: str

    @property
    def path_str(self) -> str:
        return format_path(self.path)

    def describe(self) -> str:
        return (
            f"mismatch at {self.path_str}: {self.reason} "
            f"(expected: {render_value(self.expected)}, actual: {render_value(self.actual)})"
        )

    def to_dict(self) -> dict:
        return {
            "path": self.path_str,
            "reason": self.reason,
            "expected": render_value(self.expected),
            "actual": render_value(self.actual),
        }


def find_first_mismatch(
    expected: Any,
    actual: Any,
    path: Tuple[PathToken, ...] = (),
) -> Optional[Mismatch]:
    """Return the first divergence between two trees, or None if they match.

    Keys of ``expected`` are visited in order before keys only present in
    ``actual``. Integers and floats compare by value.
    """
    expected_type = json_type(expected)
    actual_type = json_type(actual)
    if expected_type != actual_type:
        return Mismatch(path, expected, actual, f"type differs ({expected_type} != {actual_type})")

    if expected_type == "object":
        for key, expected_value in expected.items():
            if key not in actual:
                return Mismatch(path + (key,), expected_value, MISSING, "field missing after round trip")
            found = find_first_mismatch(expected_value, actual[key], path + (key,))
            if found is not None:
                return found
        for key, actual_value in actual.items():
            if key not in expected:
                return Mismatch(path + (key,), MISSING, actual_value, "field not present in generated document")
        return None

    if expected_type == "array":
        for index, (expected_item, actual_item) in enumerate(zip(expected, actual)):
            found = find_first_mismatch(expected_item, actual_item, path + (index,))
            if found is not None:
                return found
        if len(expected) != len(actual):
            index = min(len(expected), len(actual))
            return Mismatch(
                path + (index,),
                expected[index] if index < len(expected) else MISSING,
                actual[index] if index < len(actual) else MISSING,
                f"array length differs ({len(expected)} != {len(actual)})",
            )
        return None

    if expected != actual:
        return Mismatch(path, expected, actual, "value differs")
    return None


def assert_documents_equal(expected: Any, actual: Any, kind: Optional[str] = None) -> None:
    """Raise :class:`SchemaCompatibilityError` on the first divergence."""
    mismatch = find_first_mismatch(expected, actual)
    if mismatch is not None:
        raise SchemaCompatibilityError(mismatch, kind=kind)
