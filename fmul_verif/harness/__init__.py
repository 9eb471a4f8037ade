#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Comparison harness for the multiplier.

Modules
-------
dut_interface
    DutOutputs and the FmulDut protocol the harness drives

comparator
    Value and flag comparison producing a Verdict

harness
    MultiplierHarness: per-case state machine, run phases, statistics
"""

from fmul_verif.harness.comparator import MismatchKind, Verdict, compare
from fmul_verif.harness.dut_interface import DutOutputs, FmulDut
from fmul_verif.harness.harness import (
    CasePhase,
    CaseRequest,
    HarnessStatistics,
    MultiplierHarness,
)

__all__ = [
    "CasePhase",
    "CaseRequest",
    "DutOutputs",
    "FmulDut",
    "HarnessStatistics",
    "MismatchKind",
    "MultiplierHarness",
    "Verdict",
    "compare",
]
