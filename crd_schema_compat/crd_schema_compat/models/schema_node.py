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

"""Typed view over a structural (openAPIV3Schema) schema node.

Only the keywords that drive fixture generation are kept: ``type``,
``properties``, ``additionalProperties``, ``items``, ``enum``, ``format``,
``description`` and ``x-kubernetes-preserve-unknown-fields``. Everything else
(patterns, bounds, ``anyOf``...) is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


PRESERVE_UNKNOWN_FIELDS = "x-kubernetes-preserve-unknown-fields"

# Kubernetes resource.Quantity carries no dedicated type or format in CRD
# schemas; its generated description is the only thing that identifies it.
# Wording changes upstream silently disable the quantity branch.
QUANTITY_DESCRIPTION_PREFIX = "Quantity is a fixed-point representation of a number."


class NodeKind(Enum):
    """Closed set of node kinds the generator knows how to fill."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NONE = "none"


_DECLARED_KINDS = {kind.value: kind for kind in NodeKind if kind is not NodeKind.NONE}


class ObjectShape(Enum):
    """Which keyword governs the content of an object node."""

    PROPERTIES = "properties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    PRESERVE_UNKNOWN_FIELDS = "preserveUnknownFields"
    EMPTY = "empty"


AdditionalProperties = Union["SchemaNode", bool, None]


@dataclass(frozen=True)
class SchemaNode:
    type: Optional[str] = None
    properties: Optional[Dict[str, "SchemaNode"]] = None
    additional_properties: AdditionalProperties = None
    items: Optional["SchemaNode"] = None
    enum: Optional[Tuple[Any, ...]] = None
    format: Optional[str] = None
    description: Optional[str] = None
    preserve_unknown_fields: bool = False

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["SchemaNode"]:
        """Build a node tree from a parsed schema mapping.

        Returns None for anything that is not a mapping (missing sub-schemas,
        tuple-style ``items`` lists), so callers can treat it as "no schema".
        """
        if not isinstance(raw, dict):
            return None

        properties = None
        if isinstance(raw.get("properties"), dict):
            properties = {}
            for name, child in raw["properties"].items():
                node = cls.from_dict(child)
                properties[str(name)] = node if node is not None else cls()

        additional = raw.get("additionalProperties")
        if isinstance(additional, bool):
            additional_properties: AdditionalProperties = additional
        else:
            additional_properties = cls.from_dict(additional)

        enum = raw.get("enum")
        declared_type = raw.get("type")
        fmt = raw.get("format")
        description = raw.get("description")

        return cls(
            type=declared_type if isinstance(declared_type, str) else None,
            properties=properties,
            additional_properties=additional_properties,
            items=cls.from_dict(raw.get("items")),
            enum=tuple(enum) if isinstance(enum, list) else None,
            format=fmt if isinstance(fmt, str) else None,
            description=description if isinstance(description, str) else None,
            preserve_unknown_fields=raw.get(PRESERVE_UNKNOWN_FIELDS) is True,
        )

    @property
    def has_additional_properties(self) -> bool:
        # ``additionalProperties: false`` forbids extra keys, so it never counts
        return isinstance(self.additional_properties, SchemaNode) or self.additional_properties is True

    @property
    def kind(self) -> NodeKind:
        if self.type is None:
            if (
                self.properties is not None
                or self.has_additional_properties
                or self.preserve_unknown_fields
            ):
                return NodeKind.OBJECT
            return NodeKind.NONE
        return _DECLARED_KINDS.get(self.type, NodeKind.NONE)

    @property
    def object_shape(self) -> ObjectShape:
        if self.properties is not None:
            return ObjectShape.PROPERTIES
        if self.has_additional_properties:
            return ObjectShape.ADDITIONAL_PROPERTIES
        if self.preserve_unknown_fields:
            return ObjectShape.PRESERVE_UNKNOWN_FIELDS
        return ObjectShape.EMPTY

    @property
    def is_int64(self) -> bool:
        return self.format == "int64"

    @property
    def is_quantity(self) -> bool:
        return bool(self.description) and self.description.startswith(QUANTITY_DESCRIPTION_PREFIX)
