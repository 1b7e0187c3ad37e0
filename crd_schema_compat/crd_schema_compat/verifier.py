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

"""Schema/model compatibility verification.

For every resource kind the pipeline runs, strictly in order:

    LoadSchema -> GenerateFixture -> BuildEnvelope -> RoundTripModel
        -> Normalize -> Override -> Compare -> Done | Failed

A fixture is generated from the CRD's ``spec``/``status`` schemas, wrapped in
a resource envelope, round-tripped through the typed model and compared with
what went in. Every run owns its random source and documents, so kinds can be
verified concurrently.
"""

import copy
import logging
import random
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .comparator import assert_documents_equal
from .config import VerifierConfig, verifier_config
from .conformance import check_fixture_conformance
from .exceptions import CrdCompatError, FixtureConformanceError, SchemaCompatibilityError
from .generator import SchemaValueGenerator
from .models.crd_loader import CrdLoader, ResourceSchemas
from .models.resource_model import ResourceModel
from .normalizer import strip_nulls
from .overrides import OverrideRegistry, default_override_registry
from .report import VerificationReport, VerificationResult

logger = logging.getLogger(__name__)

PAYLOAD_KEYS = ("spec", "status")


class Stage(Enum):
    LOAD_SCHEMA = "LoadSchema"
    GENERATE_FIXTURE = "GenerateFixture"
    BUILD_ENVELOPE = "BuildEnvelope"
    ROUND_TRIP_MODEL = "RoundTripModel"
    NORMALIZE = "Normalize"
    OVERRIDE = "Override"
    COMPARE = "Compare"
    DONE = "Done"
    FAILED = "Failed"


def build_envelope(
    payload: Dict[str, Any],
    kind: str,
    api_version: str = "stackgres.io/v1",
    name: str = "test",
    namespace: str = "test",
) -> Dict[str, Any]:
    """Wrap a ``spec``/``status`` payload into a full resource document."""
    envelope = copy.deepcopy(payload)
    envelope["apiVersion"] = api_version
    envelope["kind"] = kind
    envelope["metadata"] = {"name": name, "namespace": namespace}
    return envelope


def extract_payload(document: Dict[str, Any]) -> Dict[str, Any]:
    return {key: document[key] for key in PAYLOAD_KEYS if key in document}


def drop_void_status(actual: Dict[str, Any], expected: Dict[str, Any]) -> None:
    """Kinds without a status serialize none; an empty generated one matches that."""
    if "status" not in actual and not expected.get("status"):
        expected.pop("status", None)


class CompatibilityVerifier:
    """Checks that typed models preserve everything their CRD schema allows."""

    def __init__(
        self,
        loader: CrdLoader,
        overrides: Optional[OverrideRegistry] = None,
        config: Optional[VerifierConfig] = None,
    ):
        self.loader = loader
        self.overrides = overrides if overrides is not None else default_override_registry()
        self.config = config if config is not None else verifier_config

    def generate_fixture(self, schemas: ResourceSchemas) -> Dict[str, Any]:
        """Generate the expected ``spec``/``status`` payload for a kind."""
        generator = SchemaValueGenerator(random.Random(self.config.seed))
        expected: Dict[str, Any] = {}
        for key, raw_schema in (("spec", schemas.spec), ("status", schemas.status)):
            if raw_schema is None:
                continue
            value = generator.generate(getattr(schemas, f"{key}_node"))
            if value is None:
                continue
            if self.config.check_conformance:
                issues = check_fixture_conformance(raw_schema, value, root=key)
                if issues:
                    details = "\n".join(f"  - {i.message} (yaml_path={i.yaml_path})" for i in issues)
                    raise FixtureConformanceError(
                        f"{schemas.kind}: generated {key} does not match its schema:\n{details}"
                    )
            expected[key] = value
        return expected

    def verify(
        self,
        model: ResourceModel,
        on_stage: Optional[Callable[[Stage], None]] = None,
    ) -> None:
        """Run the full pipeline for ``model``.

        Raises:
            CrdCompatError: subclass describing the first failing stage
        """
        kind = model.kind

        def enter(stage: Stage) -> None:
            logger.debug(f"{kind}: {stage.value}")
            if on_stage is not None:
                on_stage(stage)

        enter(Stage.LOAD_SCHEMA)
        schemas = self.loader.load_resource_schemas(kind)

        enter(Stage.GENERATE_FIXTURE)
        expected = self.generate_fixture(schemas)

        enter(Stage.BUILD_ENVELOPE)
        envelope = build_envelope(
            expected,
            kind,
            api_version=self.config.api_version,
            name=self.config.resource_name,
            namespace=self.config.resource_namespace,
        )

        enter(Stage.ROUND_TRIP_MODEL)
        actual = extract_payload(model.round_trip(envelope))

        enter(Stage.NORMALIZE)
        strip_nulls(expected)
        strip_nulls(actual)

        enter(Stage.OVERRIDE)
        drop_void_status(actual, expected)
        self.overrides.apply(kind, actual, expected)

        enter(Stage.COMPARE)
        assert_documents_equal(expected, actual, kind=kind)

        enter(Stage.DONE)

    def check(self, model: ResourceModel) -> VerificationResult:
        """Verify ``model`` and capture the outcome instead of raising."""
        try:
            kind = model.kind
        except NotImplementedError as exc:
            result = VerificationResult(type(model).__name__)
            result.fail(Stage.FAILED.value, exc)
            logger.error(f"{result.kind}: {exc}")
            return result

        result = VerificationResult(kind)
        stages: List[Stage] = []
        logger.info(f"Verifying schema compatibility of {result.kind}")
        try:
            self.verify(model, on_stage=stages.append)
        except SchemaCompatibilityError as exc:
            result.fail(stages[-1].value, exc, exc.mismatch)
        except CrdCompatError as exc:
            result.fail(stages[-1].value if stages else Stage.FAILED.value, exc)

        if result.passed:
            logger.info(f"{result.kind}: compatible")
        else:
            logger.error(f"{result.kind}: failed at {result.stage}: {result.error}")
        return result

    def verify_all(self, models: Iterable[ResourceModel], jobs: Optional[int] = None) -> VerificationReport:
        """Verify every model; results keep the order of ``models``."""
        models = list(models)
        jobs = jobs if jobs is not None else self.config.jobs
        if jobs > 1 and len(models) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                results = list(executor.map(self.check, models))
        else:
            results = [self.check(model) for model in models]
        return VerificationReport(results, seed=self.config.seed)
