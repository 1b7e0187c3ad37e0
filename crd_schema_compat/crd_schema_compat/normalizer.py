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

"""Null stripping for generic document trees."""

from typing import Any


def strip_nulls(tree: Any) -> Any:
    """Remove null-valued object fields and array elements at any depth.

    The tree is modified in place and also returned. Scalars pass through
    untouched; sibling order is preserved.
    """
    if isinstance(tree, dict):
        for key in [k for k, v in tree.items() if v is None]:
            del tree[key]
        for value in tree.values():
            strip_nulls(value)
    elif isinstance(tree, list):
        tree[:] = [item for item in tree if item is not None]
        for item in tree:
            strip_nulls(item)
    return tree
