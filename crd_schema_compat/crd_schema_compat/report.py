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

"""Verification results and the per-run report."""

from typing import Any, Dict, List, Optional

from .comparator import Mismatch


class VerificationResult:
    """Outcome of verifying a single resource kind."""

    def __init__(self, kind: str):
        """Initialize verification result.

        Args:
            kind: Resource kind being verified
        """
        self.kind = kind
        self.stage: Optional[str] = None
        self.error: Optional[str] = None
        self.error_type: Optional[str] = None
        self.mismatch: Optional[Mismatch] = None

    @property
    def passed(self) -> bool:
        return self.error is None

    def fail(self, stage: str, error: Exception, mismatch: Optional[Mismatch] = None):
        """Record the failure of the pipeline at ``stage``.

        Args:
            stage: Name of the stage that raised
            error: The raised exception
            mismatch: Structural divergence when the comparison failed
        """
        self.stage = stage
        self.error = str(error)
        self.error_type = type(error).__name__
        self.mismatch = mismatch

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'kind': self.kind, 'passed': self.passed}
        if not self.passed:
            result['stage'] = self.stage
            result['error_type'] = self.error_type
            result['error'] = self.error
        if self.mismatch is not None:
            result['mismatch'] = self.mismatch.to_dict()
        return result


class VerificationReport:
    """Collection of results for one verification run."""

    def __init__(self, results: Optional[List[VerificationResult]] = None, seed: Optional[int] = None):
        self.results: List[VerificationResult] = list(results or [])
        self.seed = seed

    def add(self, result: VerificationResult):
        self.results.append(result)

    @property
    def failed(self) -> List[VerificationResult]:
        return [r for r in self.results if not r.passed]

    @property
    def passed(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seed': self.seed,
            'kinds': len(self.results),
            'failures': len(self.failed),
            'results': [r.to_dict() for r in self.results],
        }
