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

"""Software reference models for multiplier verification.

Modules
-------
fp_classify
    Field extraction, classification and packing of binary32 patterns,
    plus struct-based conversion to and from Python floats

fmul_model
    The authoritative bit-exact multiplier:
    - DAZ inputs, FTZ outputs, canonical qNaN
    - Round to nearest, ties to even
    - invalid/overflow/underflow/inexact flags

fmul_cast_model
    Independent formulation through a binary64 product, used only to
    cross-check the bit-level model

fmul_pipeline_model
    FmulDut implementation with the hardware's two-tick latency

Usage
-----
::

    from fmul_verif.models.fmul_model import fmul_reference

    result = fmul_reference(0x3FC00000, 0x40000000)  # 1.5 * 2.0
    assert result.y == 0x40400000 and not result.inexact
"""

from fmul_verif.models.fmul_model import MultiplyResult, fmul_reference
from fmul_verif.models.fp_classify import FpClass, classify

# Note: FmulPipelineModel is not imported at package level to avoid circular imports.
# Import directly when needed: from fmul_verif.models.fmul_pipeline_model import FmulPipelineModel

__all__ = [
    "FpClass",
    "MultiplyResult",
    "classify",
    "fmul_reference",
]
