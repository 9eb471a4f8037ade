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

"""Minimal capability interface the harness needs from a multiplier DUT.

DUT Interface
=============

The harness never touches a simulator handle directly. Anything that can
accept two operands, advance its clock and report its outputs can be
verified: a behavioural model, a fake used in unit tests, or an adapter
around a simulated RTL design.

Contract:
    - ``set_inputs(a, b)`` drives both 32-bit operands
    - ``advance_tick()`` advances the synchronous clock by one tick
    - ``read_outputs()`` samples the result and status flags

Outputs are valid two ticks after the inputs change and stay stable for at
least two further ticks.
"""

from typing import NamedTuple, Protocol, runtime_checkable

from fmul_verif.verification_types import FloatBits


class DutOutputs(NamedTuple):
    """Outputs sampled from the DUT after the pipeline latency has elapsed."""

    y: FloatBits
    invalid: bool
    overflow: bool
    underflow: bool
    inexact: bool

    @property
    def flags(self) -> tuple[bool, bool, bool, bool]:
        """Flags as (invalid, overflow, underflow, inexact)."""
        return (self.invalid, self.overflow, self.underflow, self.inexact)


@runtime_checkable
class FmulDut(Protocol):
    """Synchronous multiplier device under test."""

    def set_inputs(self, a: int, b: int) -> None:
        """Drive operands a and b."""
        ...

    def advance_tick(self) -> None:
        """Advance the DUT clock by one tick."""
        ...

    def read_outputs(self) -> DutOutputs:
        """Sample y and the invalid/overflow/underflow/inexact flags."""
        ...
