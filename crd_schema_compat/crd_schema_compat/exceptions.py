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

"""Custom exceptions for the CRD schema compatibility checker."""


class CrdCompatError(Exception):
    """Base exception for schema compatibility related errors."""
    pass


class SchemaNotFoundError(CrdCompatError):
    """Exception raised when no CRD document exists for a resource kind."""
    pass


class CrdFormatError(CrdCompatError):
    """Exception raised when a CRD document cannot be read or has the wrong shape."""
    pass


class FixtureConformanceError(CrdCompatError):
    """Exception raised when a generated fixture does not match its own schema."""
    pass


class RoundTripError(CrdCompatError):
    """Exception raised when the typed model fails to deserialize or serialize."""
    pass


class SchemaDriftError(CrdCompatError):
    """Exception raised when an override cannot find the subtree it adjusts."""
    pass


class SchemaCompatibilityError(CrdCompatError):
    """Exception raised when the round-tripped document diverges from the fixture."""

    def __init__(self, mismatch, kind=None):
        self.mismatch = mismatch
        self.kind = kind
        prefix = f"{kind}: " if kind else ""
        super().__init__(f"{prefix}{mismatch.describe()}")
