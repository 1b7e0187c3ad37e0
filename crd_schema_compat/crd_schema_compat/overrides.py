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

"""Per-kind reconciliation of accepted schema/model divergences.

Each hook receives the round-tripped (``actual``) and generated (``expected``)
documents after null stripping and adjusts both in place. Hooks are narrow:
they only touch the subtree they name, and they raise
:class:`SchemaDriftError` when that subtree is not where they expect it, which
usually means the CRD changed and the hook is stale.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from .comparator import PathToken, format_path
from .exceptions import CrdCompatError, SchemaDriftError

logger = logging.getLogger(__name__)

OverrideHook = Callable[[Dict[str, Any], Dict[str, Any]], None]

# Filled in by the cluster at runtime, never produced from the schema.
SERVICE_IGNORED_PROPERTIES = (
    "clusterIP",
    "clusterIPs",
    "externalName",
    "ports",
    "publishNotReadyAddresses",
    "selector",
)


def lookup(tree: Any, path: Sequence[PathToken]) -> Any:
    """Return the node at ``path``, or None when any step is missing."""
    node = tree
    for token in path:
        if isinstance(token, int):
            if not isinstance(node, list) or not 0 <= token < len(node):
                return None
        elif not isinstance(node, dict) or token not in node:
            return None
        node = node[token]
    return node


def require_path(tree: Any, path: Sequence[PathToken], side: str = "expected") -> Any:
    """Return the node at ``path`` or raise :class:`SchemaDriftError`."""
    node = tree
    for depth, token in enumerate(path):
        if isinstance(token, int):
            found = isinstance(node, list) and 0 <= token < len(node)
        else:
            found = isinstance(node, dict) and token in node
        if not found:
            raise SchemaDriftError(
                f"Override expected {format_path(path[:depth + 1])} in {side} document "
                f"but it is missing; the schema may have changed"
            )
        node = node[token]
    return node


def require_object(tree: Any, path: Sequence[PathToken], side: str = "expected") -> Dict[str, Any]:
    node = require_path(tree, path, side)
    if not isinstance(node, dict):
        raise SchemaDriftError(
            f"Override expected an object at {format_path(path)} in {side} document, "
            f"got {type(node).__name__}"
        )
    return node


def require_list(tree: Any, path: Sequence[PathToken], side: str = "expected") -> List[Any]:
    node = require_path(tree, path, side)
    if not isinstance(node, list):
        raise SchemaDriftError(
            f"Override expected an array at {format_path(path)} in {side} document, "
            f"got {type(node).__name__}"
        )
    return node


def remove_service_ignored_properties(service: Dict[str, Any]) -> None:
    for ignored in SERVICE_IGNORED_PROPERTIES:
        service.pop(ignored, None)


def neutralize_service(actual: Dict[str, Any], expected: Dict[str, Any], path: Sequence[PathToken]) -> None:
    """Drop the runtime-populated service fields at ``path``.

    The subtree is mandatory in ``expected``. In ``actual`` it is cleaned when it
    is an object; a missing or differently typed subtree is left for the
    comparison to report.
    """
    remove_service_ignored_properties(require_object(expected, path, "expected"))
    actual_service = lookup(actual, path)
    if not isinstance(actual_service, dict):
        return
    remove_service_ignored_properties(actual_service)
    logger.debug(f"Removed runtime service fields at {format_path(path)}")


class OverrideRegistry:
    """Explicit mapping from resource kind to its override hook."""

    def __init__(self):
        self._hooks: Dict[str, OverrideHook] = {}

    def register(self, kind: str, hook: Optional[OverrideHook] = None):
        """Register ``hook`` for ``kind``. Usable as a decorator."""
        def _register(func: OverrideHook) -> OverrideHook:
            if kind in self._hooks:
                raise ValueError(f"An override is already registered for kind '{kind}'")
            self._hooks[kind] = func
            return func

        if hook is None:
            return _register
        return _register(hook)

    def get(self, kind: str) -> Optional[OverrideHook]:
        return self._hooks.get(kind)

    def kinds(self) -> List[str]:
        return sorted(self._hooks)

    def __contains__(self, kind: str) -> bool:
        return kind in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)

    def apply(self, kind: str, actual: Dict[str, Any], expected: Dict[str, Any]) -> None:
        """Run the hook of ``kind``, if any.

        Raises:
            SchemaDriftError: If the hook fails; foreign exceptions are chained
        """
        hook = self._hooks.get(kind)
        if hook is None:
            return
        logger.debug(f"Applying override for {kind}")
        try:
            hook(actual, expected)
        except CrdCompatError:
            raise
        except Exception as exc:
            raise SchemaDriftError(
                f"Override for {kind} failed with {type(exc).__name__}: {exc}; the schema may have changed"
            ) from exc


# ---- StackGres overrides ----------------------------------------------------


def override_sg_config(actual: Dict[str, Any], expected: Dict[str, Any]) -> None:
    """Prometheus monitors carry a generated ServiceMonitor spec and owner
    references whose apiVersion/kind are assigned by the operator."""
    monitors_path = ("spec", "collector", "prometheusOperator", "monitors")
    expected_monitors = require_list(expected, monitors_path, "expected")
    require_list(actual, monitors_path, "actual")

    for index in range(len(expected_monitors)):
        monitor_path = monitors_path + (index,)
        expected_monitor = require_object(expected, monitor_path, "expected")
        actual_monitor = require_object(actual, monitor_path, "actual")
        expected_monitor["spec"] = None
        actual_monitor["spec"] = None

        references_path = ("metadata", "ownerReferences")
        expected_references = require_list(expected_monitor, references_path, "expected")
        for ref_index, expected_reference in enumerate(expected_references):
            actual_reference = require_object(actual_monitor, references_path + (ref_index,), "actual")
            if not isinstance(expected_reference, dict):
                raise SchemaDriftError(
                    f"Override expected an object at "
                    f"{format_path(monitor_path + references_path + (ref_index,))} in expected document"
                )
            for field in ("apiVersion", "kind"):
                if field in actual_reference:
                    expected_reference[field] = actual_reference[field]
                else:
                    expected_reference.pop(field, None)
    logger.debug(f"Neutralized {len(expected_monitors)} prometheus monitor(s)")


def override_sg_cluster(actual: Dict[str, Any], expected: Dict[str, Any]) -> None:
    neutralize_service(actual, expected, ("spec", "postgresServices", "primary"))
    neutralize_service(actual, expected, ("spec", "postgresServices", "replicas"))


def override_sg_distributed_logs(actual: Dict[str, Any], expected: Dict[str, Any]) -> None:
    neutralize_service(actual, expected, ("spec", "postgresServices", "primary"))
    neutralize_service(actual, expected, ("spec", "postgresServices", "replicas"))


def override_sg_sharded_cluster(actual: Dict[str, Any], expected: Dict[str, Any]) -> None:
    neutralize_service(actual, expected, ("spec", "postgresServices", "coordinator", "primary"))
    neutralize_service(actual, expected, ("spec", "postgresServices", "coordinator", "any"))
    neutralize_service(actual, expected, ("spec", "postgresServices", "shards", "primaries"))


def default_override_registry() -> OverrideRegistry:
    """Registry with the overrides known for the StackGres CRDs."""
    registry = OverrideRegistry()
    registry.register("SGConfig", override_sg_config)
    registry.register("SGCluster", override_sg_cluster)
    registry.register("SGDistributedLogs", override_sg_distributed_logs)
    registry.register("SGShardedCluster", override_sg_sharded_cluster)
    return registry
