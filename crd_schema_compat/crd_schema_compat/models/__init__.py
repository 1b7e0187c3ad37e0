"""Schema nodes, CRD loading and the typed-model boundary."""

from .schema_node import NodeKind, ObjectShape, SchemaNode
from .crd_loader import CrdLoader, ResourceSchemas
from .resource_model import PydanticResourceModel, ResourceModel

__all__ = [
    "NodeKind",
    "ObjectShape",
    "SchemaNode",
    "CrdLoader",
    "ResourceSchemas",
    "ResourceModel",
    "PydanticResourceModel",
]
