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

"""Self-check that generated fixtures match the shape of their own schema.

Only the keywords honoured by the generator are validated, and ``enum`` only on
strings. Constraints such as ``pattern``, ``minimum`` or ``maxLength`` are out
of reach of the random data and are not checked.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema.exceptions import ValidationError


STRUCTURAL_KEYWORDS = ("type", "enum", "properties", "items", "additionalProperties")

_draft7_enum = jsonschema.Draft7Validator.VALIDATORS["enum"]


def _string_enum(validator, enums, instance, schema):
    # The generator only picks enum members for strings
    if isinstance(instance, str):
        yield from _draft7_enum(validator, enums, instance, schema)


_VALIDATORS = {keyword: jsonschema.Draft7Validator.VALIDATORS[keyword] for keyword in STRUCTURAL_KEYWORDS}
_VALIDATORS["enum"] = _string_enum

StructuralValidator = jsonschema.validators.create(
    meta_schema=jsonschema.Draft7Validator.META_SCHEMA,
    validators=_VALIDATORS,
    type_checker=jsonschema.Draft7Validator.TYPE_CHECKER,
)


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[str] = None


def _pointer(root: str, error: ValidationError) -> str:
    tokens = [root] if root else []
    tokens.extend(str(p) for p in error.absolute_path)
    return "/" + "/".join(tokens)


def check_fixture_conformance(
    schema: Optional[Dict[str, Any]],
    value: Any,
    root: str = "",
) -> List[SchemaIssue]:
    """List every place where ``value`` does not fit ``schema``.

    Args:
        schema: Raw structural schema the value was generated from
        value: Generated value; None (no value) always conforms
        root: Name prefixed to the reported paths (e.g. "spec")

    Returns:
        List of SchemaIssue objects, empty when the value conforms
    """
    if schema is None or value is None:
        return []

    validator = StructuralValidator(schema)
    issues = []
    for error in validator.iter_errors(value):
        issues.append(SchemaIssue(message=error.message, yaml_path=_pointer(root, error)))
    return issues
