"""Tests for crd_schema_compat.models.resource_model."""

from __future__ import annotations

from typing import ClassVar, Optional

import pytest
from pydantic import BaseModel

from crd_schema_compat.exceptions import RoundTripError
from crd_schema_compat.models.resource_model import PydanticResourceModel, ResourceModel

from stackgres_models import KubernetesModel, StackGresProfile


class _Spec(KubernetesModel):
    node_selector: Optional[dict] = None


class _Demo(KubernetesModel):
    KIND: ClassVar[str] = "SGDemo"

    spec: Optional[_Spec] = None


class _Failing(ResourceModel):
    KIND = "SGFailing"

    def from_document(self, document):
        raise KeyError("metadata")

    def to_document(self, resource):
        return {}


class _BadOutput(ResourceModel):
    KIND = "SGBadOutput"

    def from_document(self, document):
        return document

    def to_document(self, resource):
        return ["not", "a", "document"]


class _Nameless(ResourceModel):
    def from_document(self, document):
        return document

    def to_document(self, resource):
        return resource


def test_pydantic_model_uses_camel_case_aliases():
    model = PydanticResourceModel(_Demo)
    assert model.kind == "SGDemo"
    document = model.round_trip({"spec": {"nodeSelector": {"a": "b"}}})
    assert document["spec"] == {"nodeSelector": {"a": "b"}}


def test_pydantic_model_drops_undeclared_fields():
    model = PydanticResourceModel(StackGresProfile)
    document = model.round_trip({"kind": "SGInstanceProfile", "spec": {"cpu": "1"}, "status": {"x": 1}})
    assert "status" not in document
    assert document["spec"]["cpu"] == "1"


def test_kind_override():
    assert PydanticResourceModel(_Demo, kind="SGOther").kind == "SGOther"


def test_deserialize_failure_is_chained():
    with pytest.raises(RoundTripError, match="SGFailing: failed to deserialize") as excinfo:
        _Failing().round_trip({})
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_validation_failure_is_round_trip_error():
    class _Strict(BaseModel):
        KIND: ClassVar[str] = "SGStrict"
        spec: int

    with pytest.raises(RoundTripError, match="SGStrict"):
        PydanticResourceModel(_Strict).round_trip({"spec": {"nested": True}})


def test_non_object_serialization_is_rejected():
    with pytest.raises(RoundTripError, match="must be an object, got list"):
        _BadOutput().round_trip({})


def test_missing_kind_is_reported():
    with pytest.raises(NotImplementedError):
        _Nameless().kind
    assert "kind=None" in repr(_Nameless())
