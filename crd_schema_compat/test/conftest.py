from __future__ import annotations

from pathlib import Path

import pytest

from crd_schema_compat.config import VerifierConfig
from crd_schema_compat.models.crd_loader import CrdLoader
from crd_schema_compat.verifier import CompatibilityVerifier


RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
CRD_DIR = RESOURCES_DIR / "crds"


@pytest.fixture
def crd_dir() -> Path:
    return CRD_DIR


@pytest.fixture
def loader(crd_dir: Path) -> CrdLoader:
    return CrdLoader(crd_dir)


@pytest.fixture
def config() -> VerifierConfig:
    return VerifierConfig()


@pytest.fixture
def verifier(loader: CrdLoader, config: VerifierConfig) -> CompatibilityVerifier:
    return CompatibilityVerifier(loader, config=config)
