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

"""Boundary to the typed resource models under test.

The verifier never inspects typed instances. It only needs a stable kind name
and a way to go from a generic document to the typed form and back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from ..exceptions import RoundTripError


class ResourceModel(ABC):
    """Abstract typed model of one resource kind."""

    KIND: str

    @property
    def kind(self) -> str:
        """Return the kind this model handles."""
        kind = getattr(self, "KIND", None)
        if not isinstance(kind, str) or not kind:
            raise NotImplementedError("Resource model must define KIND")
        return kind

    @abstractmethod
    def from_document(self, document: Dict[str, Any]) -> Any:
        """Deserialize a resource envelope into the typed form."""

    @abstractmethod
    def to_document(self, resource: Any) -> Dict[str, Any]:
        """Serialize a typed resource back into a generic document."""

    def round_trip(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Deserialize then re-serialize ``document``.

        Raises:
            RoundTripError: If either direction fails; the cause is chained
        """
        try:
            resource = self.from_document(document)
        except Exception as exc:
            raise RoundTripError(f"{self.kind}: failed to deserialize resource: {exc}") from exc
        try:
            serialized = self.to_document(resource)
        except Exception as exc:
            raise RoundTripError(f"{self.kind}: failed to serialize resource: {exc}") from exc
        if not isinstance(serialized, dict):
            raise RoundTripError(
                f"{self.kind}: serialized resource must be an object, got {type(serialized).__name__}"
            )
        return serialized

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={getattr(self, 'KIND', None)!r})"


class PydanticResourceModel(ResourceModel):
    """Resource model backed by a pydantic ``BaseModel`` class.

    Fields are read and written by alias so camelCase documents map onto
    snake_case attributes.
    """

    def __init__(self, model_cls: Type[BaseModel], kind: Optional[str] = None):
        self.model_cls = model_cls
        self.KIND = kind if kind is not None else getattr(model_cls, "KIND", None)

    def from_document(self, document: Dict[str, Any]) -> BaseModel:
        return self.model_cls.model_validate(document)

    def to_document(self, resource: BaseModel) -> Dict[str, Any]:
        return resource.model_dump(mode="json", by_alias=True)
