"""Tests for crd_schema_compat.models.crd_loader."""

from __future__ import annotations

import logging

import pytest
import yaml

from crd_schema_compat.exceptions import CrdFormatError, SchemaNotFoundError
from crd_schema_compat.models.crd_loader import CrdLoader
from crd_schema_compat.models.schema_node import NodeKind

from helpers import make_crd, write_crd


def test_loads_spec_and_status(loader):
    schemas = loader.load_resource_schemas("SGCluster")
    assert schemas.kind == "SGCluster"
    assert schemas.spec["type"] == "object"
    assert "instances" in schemas.spec["properties"]
    assert schemas.status_node.kind is NodeKind.OBJECT


def test_status_is_optional(tmp_path):
    write_crd(tmp_path, "SGScript", spec={"type": "object", "properties": {"a": {"type": "string"}}})
    schemas = CrdLoader(tmp_path).load_resource_schemas("SGScript")
    assert schemas.spec is not None
    assert schemas.status is None
    assert schemas.status_node is None


def test_missing_crd_raises(tmp_path):
    with pytest.raises(SchemaNotFoundError, match="SGMissing"):
        CrdLoader(tmp_path).load_crd("SGMissing")


def test_invalid_yaml_raises(tmp_path):
    (tmp_path / "SGBroken.yaml").write_text("spec: [unclosed\n", encoding="utf-8")
    with pytest.raises(CrdFormatError, match="Failed to parse"):
        CrdLoader(tmp_path).load_crd("SGBroken")


def test_document_without_versions_is_rejected(tmp_path):
    (tmp_path / "SGOdd.yaml").write_text(yaml.safe_dump({"spec": {"group": "x"}}), encoding="utf-8")
    with pytest.raises(CrdFormatError, match="versions"):
        CrdLoader(tmp_path).load_crd("SGOdd")


def test_version_without_open_api_schema_is_rejected(tmp_path):
    crd = make_crd("SGOdd")
    del crd["spec"]["versions"][0]["schema"]["openAPIV3Schema"]
    (tmp_path / "SGOdd.yaml").write_text(yaml.safe_dump(crd), encoding="utf-8")
    with pytest.raises(CrdFormatError, match="openAPIV3Schema"):
        CrdLoader(tmp_path).load_crd("SGOdd")


def test_empty_versions_are_rejected(tmp_path):
    crd = make_crd("SGOdd")
    crd["spec"]["versions"] = []
    (tmp_path / "SGOdd.yaml").write_text(yaml.safe_dump(crd), encoding="utf-8")
    with pytest.raises(CrdFormatError):
        CrdLoader(tmp_path).load_crd("SGOdd")


def test_cache_returns_same_document(tmp_path):
    path = write_crd(tmp_path, "SGScript", spec={"type": "object"})
    loader = CrdLoader(tmp_path)
    first = loader.load_crd("SGScript")
    path.write_text(yaml.safe_dump(make_crd("SGScript", spec={"type": "string"})), encoding="utf-8")
    assert loader.load_crd("SGScript") is first

    loader.clear_cache()
    assert loader.load_resource_schemas("SGScript").spec == {"type": "string"}


def test_cache_disabled_rereads(tmp_path):
    path = write_crd(tmp_path, "SGScript", spec={"type": "object"})
    loader = CrdLoader(tmp_path, cache_enabled=False)
    loader.load_crd("SGScript")
    path.write_text(yaml.safe_dump(make_crd("SGScript", spec={"type": "string"})), encoding="utf-8")
    assert loader.load_resource_schemas("SGScript").spec == {"type": "string"}


def test_declared_kind_must_match_file_name(tmp_path):
    crd = make_crd("SGCluster", spec={"type": "object"})
    (tmp_path / "SGScript.yaml").write_text(yaml.safe_dump(crd), encoding="utf-8")
    with pytest.raises(CrdFormatError, match="declares kind SGCluster, expected SGScript"):
        CrdLoader(tmp_path).load_resource_schemas("SGScript")


def test_undeclared_kind_is_warned_about(tmp_path, caplog):
    crd = make_crd("SGScript", spec={"type": "object"})
    del crd["spec"]["names"]
    (tmp_path / "SGScript.yaml").write_text(yaml.safe_dump(crd), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="crd_schema_compat.models.crd_loader"):
        schemas = CrdLoader(tmp_path).load_resource_schemas("SGScript")
    assert schemas.spec == {"type": "object"}
    assert "does not declare spec.names.kind" in caplog.text
