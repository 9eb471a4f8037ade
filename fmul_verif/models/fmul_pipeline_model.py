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

"""Behavioural model of the multiplier with its two-tick pipeline.

Pipeline Model
==============

Implements the ``FmulDut`` interface on top of ``fmul_reference`` so the
harness can be exercised without a simulator: the command line tool uses
it for an in-process loopback run and the unit tests use it as a known-good
DUT.

Timing::

    set_inputs(a, b)
    tick 1: stage1 <- fmul(a, b)
    tick 2: stage2 <- stage1        -> read_outputs() reflects (a, b)

Outputs hold until the next input change has propagated through both
stages.
"""

from fmul_verif.harness.dut_interface import DutOutputs
from fmul_verif.models.fmul_model import MultiplyResult, fmul_reference
from fmul_verif.models.fp_classify import FP_POS_ZERO
from fmul_verif.utils.validation import assert_bit_width
from fmul_verif.verification_types import TickCount

_RESET_VALUE = MultiplyResult(FP_POS_ZERO)


class FmulPipelineModel:
    """Two-stage registered multiplier built from the reference model.

    Attributes:
        a: Operand currently driven on input a
        b: Operand currently driven on input b
        ticks: Number of ticks advanced since construction
    """

    def __init__(self) -> None:
        """Initialize with zero operands and reset pipeline registers."""
        self.a: int = 0
        self.b: int = 0
        self.ticks = TickCount(0)
        self._stage1: MultiplyResult = _RESET_VALUE
        self._stage2: MultiplyResult = _RESET_VALUE

    def set_inputs(self, a: int, b: int) -> None:
        """Drive operands; they are captured on the next tick."""
        assert_bit_width(a, 32, "operand a")
        assert_bit_width(b, 32, "operand b")
        self.a = a
        self.b = b

    def advance_tick(self) -> None:
        """Clock both pipeline registers."""
        self._stage2 = self._stage1
        self._stage1 = fmul_reference(self.a, self.b)
        self.ticks = TickCount(self.ticks + 1)

    def read_outputs(self) -> DutOutputs:
        """Return the contents of the output stage."""
        result = self._stage2
        return DutOutputs(
            result.y,
            result.invalid,
            result.overflow,
            result.underflow,
            result.inexact,
        )
