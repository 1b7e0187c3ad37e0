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

"""CRD document loader with caching support."""

import yaml
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .json_schema_loader import schema_errors
from .schema_node import SchemaNode
from ..exceptions import CrdFormatError, SchemaNotFoundError

logger = logging.getLogger(__name__)

CRD_DOCUMENT_SCHEMA = "crd_document"


@dataclass(frozen=True)
class ResourceSchemas:
    """Structural sub-schemas of one resource kind."""

    kind: str
    spec: Optional[Dict[str, Any]] = None
    status: Optional[Dict[str, Any]] = None

    @property
    def spec_node(self) -> Optional[SchemaNode]:
        return SchemaNode.from_dict(self.spec)

    @property
    def status_node(self) -> Optional[SchemaNode]:
        return SchemaNode.from_dict(self.status)


def open_api_v3_schema(crd: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``spec.versions[0].schema.openAPIV3Schema`` of a CRD document."""
    return crd["spec"]["versions"][0]["schema"]["openAPIV3Schema"]


class CrdLoader:
    """Loads ``<crd_dir>/<kind>.yaml`` documents and extracts their schemas."""

    def __init__(self, crd_dir: Union[str, Path], cache_enabled: bool = True):
        """Initialize CRD loader.

        Args:
            crd_dir: Directory holding one ``<kind>.yaml`` file per kind
            cache_enabled: Whether parsed documents are kept between calls
        """
        self.crd_dir = Path(crd_dir)
        self.cache_enabled = cache_enabled
        self._cache: Dict[Path, Dict[str, Any]] = {}

    def crd_path(self, kind: str) -> Path:
        return self.crd_dir / f"{kind}.yaml"

    def load_crd(self, kind: str) -> Dict[str, Any]:
        """Load and shape-check the CRD document of ``kind``.

        Raises:
            SchemaNotFoundError: If there is no CRD file for the kind
            CrdFormatError: If the file cannot be parsed or is not a CRD
        """
        path = self.crd_path(kind)

        if not path.is_file():
            raise SchemaNotFoundError(f"CRD file not found for kind {kind}: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading CRD from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading CRD file: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as stream:
                crd = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise CrdFormatError(f"Failed to parse CRD file {path}: {exc}") from exc
        except OSError as exc:
            raise CrdFormatError(f"Failed to read CRD file {path}: {exc}") from exc

        problems = schema_errors(crd, CRD_DOCUMENT_SCHEMA)
        if problems:
            details = "\n".join(f"  - {problem}" for problem in problems)
            raise CrdFormatError(f"{path} is not a CRD with a structural schema:\n{details}")

        if self.cache_enabled:
            self._cache[path] = crd
        return crd

    def load_resource_schemas(self, kind: str) -> ResourceSchemas:
        """Extract the ``spec`` and ``status`` sub-schemas of ``kind``.

        Either of them may be absent, in which case it is None.

        Raises:
            CrdFormatError: If the CRD declares a different ``spec.names.kind``
        """
        crd = self.load_crd(kind)
        declared_kind = (crd["spec"].get("names") or {}).get("kind")
        if declared_kind is None:
            logger.warning(f"{self.crd_path(kind)} does not declare spec.names.kind; assuming {kind}")
        elif declared_kind != kind:
            raise CrdFormatError(f"{self.crd_path(kind)} declares kind {declared_kind}, expected {kind}")

        root = open_api_v3_schema(crd)
        properties = root.get("properties") or {}
        return ResourceSchemas(
            kind=kind,
            spec=properties.get("spec"),
            status=properties.get("status"),
        )

    def clear_cache(self):
        """Clear the CRD cache."""
        self._cache.clear()
        logger.debug("CRD cache cleared")
