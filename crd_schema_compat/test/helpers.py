"""Shared helpers for building throwaway CRDs in tests."""

from __future__ import annotations

from pathlib import Path

import yaml


def make_crd(kind: str, spec: dict | None = None, status: dict | None = None) -> dict:
    properties = {"apiVersion": {"type": "string"}, "kind": {"type": "string"}}
    if spec is not None:
        properties["spec"] = spec
    if status is not None:
        properties["status"] = status
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "metadata": {"name": f"{kind.lower()}s.stackgres.io"},
        "spec": {
            "group": "stackgres.io",
            "names": {"kind": kind},
            "versions": [
                {
                    "name": "v1",
                    "schema": {"openAPIV3Schema": {"type": "object", "properties": properties}},
                }
            ],
        },
    }


def write_crd(directory: Path, kind: str, spec: dict | None = None, status: dict | None = None) -> Path:
    """Write a minimal CRD for ``kind`` with the given sub-schemas."""
    path = directory / f"{kind}.yaml"
    path.write_text(yaml.safe_dump(make_crd(kind, spec, status), sort_keys=False), encoding="utf-8")
    return path
