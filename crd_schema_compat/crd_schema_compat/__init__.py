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

"""Structural compatibility checks between CRD schemas and typed models."""

__version__ = "0.1.0"

from .comparator import Mismatch, assert_documents_equal, find_first_mismatch
from .generator import SchemaValueGenerator, create_with_random_data
from .models.crd_loader import CrdLoader, ResourceSchemas
from .models.resource_model import PydanticResourceModel, ResourceModel
from .models.schema_node import SchemaNode
from .normalizer import strip_nulls
from .overrides import OverrideRegistry, default_override_registry
from .report import VerificationReport, VerificationResult
from .verifier import CompatibilityVerifier, Stage

__all__ = [
    "CompatibilityVerifier",
    "CrdLoader",
    "Mismatch",
    "OverrideRegistry",
    "PydanticResourceModel",
    "ResourceModel",
    "ResourceSchemas",
    "SchemaNode",
    "SchemaValueGenerator",
    "Stage",
    "VerificationReport",
    "VerificationResult",
    "assert_documents_equal",
    "create_with_random_data",
    "default_override_registry",
    "find_first_mismatch",
    "strip_nulls",
]
