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

"""Configuration for schema compatibility runs."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging, resolve_level

ENV_PREFIX = "CRD_SCHEMA_COMPAT_"

DEFAULT_SEED = 7


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_flag(name: str, default: str) -> bool:
    return _env(name, default).lower() == 'true'


@dataclass
class VerifierConfig:
    """Configuration class for a compatibility verification run."""
    seed: int = DEFAULT_SEED
    crd_dir: str = "crds"
    jobs: int = 1
    check_conformance: bool = True
    cache_enabled: bool = True
    log_level: str = "INFO"
    print_level: str = "ERROR"

    # placeholder identity of the generated resource envelope
    api_version: str = "stackgres.io/v1"
    resource_name: str = "test"
    resource_namespace: str = "test"

    @classmethod
    def from_env(cls) -> 'VerifierConfig':
        """Create configuration from environment variables."""
        return cls(
            seed=int(_env('SEED', str(DEFAULT_SEED))),
            crd_dir=_env('CRD_DIR', 'crds'),
            jobs=int(_env('JOBS', '1')),
            check_conformance=_env_flag('CHECK_CONFORMANCE', 'true'),
            cache_enabled=_env_flag('CACHE_ENABLED', 'true'),
            log_level=_env('LOG_LEVEL', 'INFO'),
            print_level=_env('PRINT_LEVEL', 'ERROR'),
            api_version=_env('API_VERSION', 'stackgres.io/v1'),
            resource_name=_env('NAME', 'test'),
            resource_namespace=_env('NAMESPACE', 'test'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = resolve_level(self.log_level, logging.INFO)
        stderr_level = resolve_level(self.print_level, logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('crd_schema_compat')


# Global configuration instance
verifier_config = VerifierConfig.from_env()
