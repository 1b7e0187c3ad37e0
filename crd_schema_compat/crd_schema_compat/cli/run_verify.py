#!/usr/bin/env python3
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

"""CLI entry point for verifying typed models against their CRD schemas."""

import argparse
import dataclasses
import importlib
import json
import logging
import sys
from typing import Any, List

from ..config import verifier_config
from ..file_io.template_renderer import TemplateRenderer
from ..models.crd_loader import CrdLoader
from ..models.resource_model import ResourceModel
from ..report import VerificationReport
from ..verifier import CompatibilityVerifier

logger = logging.getLogger(__name__)

REPORT_TEMPLATE = "report.md.j2"


def load_models(specs: List[str]) -> List[ResourceModel]:
    """Import resource models from ``package.module:ATTRIBUTE`` references.

    The attribute may be a single :class:`ResourceModel` or an iterable of them.
    """
    models: List[ResourceModel] = []
    for spec in specs:
        module_name, _, attribute = spec.partition(":")
        if not module_name or not attribute:
            raise ValueError(f"Invalid model reference '{spec}'. Expected 'package.module:ATTRIBUTE'")

        module = importlib.import_module(module_name)
        try:
            target: Any = getattr(module, attribute)
        except AttributeError as exc:
            raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'") from exc

        if isinstance(target, ResourceModel):
            candidates = [target]
        else:
            try:
                candidates = list(target)
            except TypeError as exc:
                raise ValueError(f"'{spec}' is neither a ResourceModel nor an iterable of them") from exc
        for candidate in candidates:
            if not isinstance(candidate, ResourceModel):
                raise ValueError(f"'{spec}' contains {candidate!r}, which is not a ResourceModel")
            models.append(candidate)
    return models


def format_report(report: VerificationReport, fmt: str) -> str:
    if fmt == 'json':
        return json.dumps(report.to_dict(), indent=2)

    if fmt == 'markdown':
        return TemplateRenderer().render_template(REPORT_TEMPLATE, report=report)

    lines = []
    if fmt == 'github-actions':
        for result in report.failed:
            lines.append(f"::error title={result.kind} schema compatibility::{result.error}")
        return "\n".join(lines)

    # human-readable
    for result in report.results:
        if result.passed:
            lines.append(f"PASS  {result.kind}")
            continue
        lines.append(f"FAIL  {result.kind} [{result.stage}] {result.error_type}")
        if result.mismatch is not None:
            lines.append(f"      path: {result.mismatch.path_str}")
            lines.append(f"      reason: {result.mismatch.reason}")
        else:
            for error_line in (result.error or "").splitlines():
                lines.append(f"      {error_line}")
    lines.append(
        f"\n{len(report.results) - len(report.failed)}/{len(report.results)} kinds compatible (seed {report.seed})."
    )
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the verification CLI."""
    parser = argparse.ArgumentParser(
        description='Verify that typed resource models round-trip their CRD schemas',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--model',
        dest='models',
        action='append',
        default=[],
        help='Resource model(s) to verify, as package.module:ATTRIBUTE (repeatable)',
    )
    parser.add_argument(
        '--crd-dir',
        default=None,
        help=f'Directory holding <KIND>.yaml CRD files (default: {verifier_config.crd_dir})',
    )
    parser.add_argument(
        '--kind',
        dest='kinds',
        action='append',
        default=[],
        help='Only verify this kind (repeatable)',
    )
    parser.add_argument('--seed', type=int, default=None, help='Random seed for fixture generation')
    parser.add_argument('--jobs', type=int, default=None, help='Number of kinds verified in parallel')
    parser.add_argument(
        '--no-conformance-check',
        action='store_true',
        help='Skip validating generated fixtures against their own schema',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions', 'markdown'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument('--output', default=None, help='Write the report to this file instead of stdout')
    parser.add_argument('--log-level', default=None, help='Logging level (default: from environment)')

    args = parser.parse_args(argv)

    config = dataclasses.replace(verifier_config)
    if args.crd_dir is not None:
        config.crd_dir = args.crd_dir
    if args.seed is not None:
        config.seed = args.seed
    if args.jobs is not None:
        config.jobs = args.jobs
    if args.no_conformance_check:
        config.check_conformance = False
    if args.log_level is not None:
        config.log_level = args.log_level
    config.set_logging()

    if not args.models:
        print("No resource models given; use --model package.module:ATTRIBUTE.", file=sys.stderr)
        sys.exit(2)

    try:
        models = load_models(args.models)
    except (ImportError, ValueError, TypeError) as exc:
        print(f"Failed to load resource models: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.kinds:
        unknown = sorted(set(args.kinds) - {model.kind for model in models})
        if unknown:
            print(f"Unknown kind(s): {', '.join(unknown)}", file=sys.stderr)
            sys.exit(2)
        models = [model for model in models if model.kind in args.kinds]

    loader = CrdLoader(config.crd_dir, cache_enabled=config.cache_enabled)
    verifier = CompatibilityVerifier(loader, config=config)
    report = verifier.verify_all(models)

    output = format_report(report, args.format)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output if output.endswith("\n") else output + "\n")
        logger.info(f"Report written to {args.output}")
    elif output:
        print(output)

    sys.exit(0 if report.passed else 1)


if __name__ == '__main__':
    main()
