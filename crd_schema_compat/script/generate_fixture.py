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

"""Dump the fixture generated for a CRD, to debug a failing kind."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml


SCRIPT_DIR = Path(__file__).resolve().parent
PACKAGE_ROOT = SCRIPT_DIR.parent
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))


from crd_schema_compat.config import verifier_config  # noqa: E402
from crd_schema_compat.exceptions import CrdCompatError  # noqa: E402
from crd_schema_compat.models.crd_loader import CrdLoader  # noqa: E402
from crd_schema_compat.verifier import CompatibilityVerifier  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate the random spec/status fixture of a CRD")
    parser.add_argument("crd", help="Path to the <KIND>.yaml CRD file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: from environment)")
    parser.add_argument("--output", default=None, help="Write the fixture to this file instead of stdout")
    args = parser.parse_args(argv)

    config = dataclasses.replace(verifier_config)
    if args.seed is not None:
        config.seed = args.seed
    config.set_logging()

    crd_path = Path(args.crd)
    loader = CrdLoader(crd_path.parent, cache_enabled=False)
    verifier = CompatibilityVerifier(loader, config=config)
    try:
        fixture = verifier.generate_fixture(loader.load_resource_schemas(crd_path.stem))
    except CrdCompatError as exc:
        logger.error(str(exc))
        return 1

    content = yaml.safe_dump(fixture, sort_keys=False)
    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        logger.info(f"Fixture written to {args.output}")
    else:
        sys.stdout.write(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
