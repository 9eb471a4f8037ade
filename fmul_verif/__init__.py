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

"""Golden-model verification framework for a binary32 multiplier.

This package checks a single-precision floating-point multiplier that uses
denormals-are-zero, flush-to-zero and canonical-quiet-NaN semantics against
a bit-exact software reference, using CoCoTB (Coroutine-based Co-simulation
Testbench) for RTL runs.

Package Structure
-----------------

Subpackages:
    models
        Bit-level classification, the reference multiplier, a cast-based
        cross-check model and a two-tick pipeline model

    stimulus
        Directed edge-case vectors and the seeded boundary-biased generator

    harness
        DUT interface, comparator and the per-case state machine

    cocotb_tests
        CoCoTB adapter and regression test for simulated RTL

    utils
        Case/summary logging and validation helpers

Modules:
    config
        Central constants and the immutable RunConfig

    verification_types
        Type aliases for type safety (FloatBits, TickCount, etc.)

    exceptions
        Custom exception hierarchy for verification failures

    runner
        Command line entry point (loopback or simulator run)

Quick Start
-----------
Loopback run against the pipeline model::

    fmul-verif --n 10000

Run against RTL with flag checking::

    fmul-verif --rtl rtl/fmul.sv --toplevel fmul --check-flags
"""

# Re-export commonly used types for convenience
from fmul_verif.config import MASK32, RunConfig
from fmul_verif.verification_types import FloatBits

__all__ = [
    "FloatBits",
    "MASK32",
    "RunConfig",
]
