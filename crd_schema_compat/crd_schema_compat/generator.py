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

"""Schema driven synthetic document generator.

Walks a structural schema and fills every field it describes with random but
reproducible data. The output is not meant to be meaningful, only to exercise
each field of a typed model at least once.

A return value of ``None`` means "no value": the caller omits the field
instead of emitting an explicit null.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Union

from .config import DEFAULT_SEED
from .models.schema_node import NodeKind, ObjectShape, SchemaNode

logger = logging.getLogger(__name__)

ALPHANUMERIC = "abcdefghijklmnopqrstuvwxyz0123456789"
TOKEN_LENGTH = 10
TOKEN_PREFIX = "rnd-"

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def random_alphanumeric(rng: random.Random, length: int = TOKEN_LENGTH) -> str:
    return "".join(ALPHANUMERIC[rng.randrange(len(ALPHANUMERIC))] for _ in range(length))


def random_token(rng: random.Random) -> str:
    return TOKEN_PREFIX + random_alphanumeric(rng, TOKEN_LENGTH)


class SchemaValueGenerator:
    """Generates document values for schema nodes from one random source."""

    def __init__(self, rng: random.Random):
        self.rng = rng
        self._handlers = {
            NodeKind.OBJECT: self._generate_object,
            NodeKind.ARRAY: self._generate_array,
            NodeKind.STRING: self._generate_string,
            NodeKind.INTEGER: self._generate_integer,
            NodeKind.NUMBER: self._generate_number,
            NodeKind.BOOLEAN: self._generate_boolean,
        }

    @classmethod
    def with_seed(cls, seed: int = DEFAULT_SEED) -> "SchemaValueGenerator":
        return cls(random.Random(seed))

    def generate(self, node: Optional[SchemaNode]) -> Any:
        if node is None:
            return None
        handler = self._handlers.get(node.kind)
        if handler is None:
            return None
        return handler(node)

    def _entry_count(self) -> int:
        return 1 + self.rng.randrange(2)

    def _generate_object(self, node: SchemaNode) -> Dict[str, Any]:
        obj: Dict[str, Any] = {}
        shape = node.object_shape

        if shape is ObjectShape.PROPERTIES:
            for name, child in node.properties.items():
                value = self.generate(child)
                if value is not None:
                    obj[name] = value
        elif shape is ObjectShape.ADDITIONAL_PROPERTIES:
            for _ in range(self._entry_count()):
                key = random_token(self.rng)
                if node.additional_properties is True:
                    obj[key] = random_token(self.rng)
                else:
                    value = self.generate(node.additional_properties)
                    if value is not None:
                        obj[key] = value
        elif shape is ObjectShape.PRESERVE_UNKNOWN_FIELDS:
            for _ in range(self._entry_count()):
                key = random_token(self.rng)
                obj[key] = random_token(self.rng)

        return obj

    def _generate_array(self, node: SchemaNode) -> List[Any]:
        arr: List[Any] = []
        if node.items is None:
            return arr
        for _ in range(self._entry_count()):
            value = self.generate(node.items)
            if value is not None:
                arr.append(value)
        return arr

    def _generate_string(self, node: SchemaNode) -> str:
        if node.enum is not None:
            if not node.enum:
                return random_token(self.rng)
            return str(node.enum[self.rng.randrange(len(node.enum))])
        if node.is_quantity:
            return f"{self.rng.randint(INT32_MIN, INT32_MAX)}Mi"
        return random_token(self.rng)

    def _generate_integer(self, node: SchemaNode) -> int:
        if node.is_int64:
            return self.rng.randint(INT64_MIN, INT64_MAX)
        return self.rng.randint(INT32_MIN, INT32_MAX)

    def _generate_number(self, node: SchemaNode) -> float:
        return float(self.rng.randint(INT32_MIN, INT32_MAX))

    def _generate_boolean(self, node: SchemaNode) -> bool:
        return True


def create_with_random_data(
    schema: Union[SchemaNode, Dict[str, Any], None],
    seed: int = DEFAULT_SEED,
    rng: Optional[random.Random] = None,
) -> Any:
    """Generate a document for ``schema`` (a node or its raw mapping).

    A fresh ``random.Random(seed)`` is used unless ``rng`` is given, so two
    calls with the same schema and seed return equal documents.
    """
    node = schema if isinstance(schema, SchemaNode) else SchemaNode.from_dict(schema)
    generator = SchemaValueGenerator(rng if rng is not None else random.Random(seed))
    return generator.generate(node)
