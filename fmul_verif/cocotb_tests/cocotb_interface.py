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

"""CoCoTB adapter for a simulated multiplier toplevel.

Cocotb Interface
================

Wraps the simulator handle of the RTL multiplier behind the same three
operations as ``FmulDut`` (set inputs, advance a tick, read outputs), with
``advance_tick`` awaitable since simulated time only moves inside a
coroutine.

Expected toplevel ports:

    ===========  =========  ================================
    Port         Direction  Meaning
    ===========  =========  ================================
    a, b         in         32-bit operands
    y            out        32-bit result
    invalid      out        0 x Inf
    overflow     out        result rounded past max finite
    underflow    out        result flushed to zero
    inexact      out        any discarded bit was nonzero
    clk          in         optional clock
    ===========  =========  ================================

When the toplevel has a clock port a free-running ``Clock`` drives it and a
tick is one full period, from falling edge to falling edge. A purely
combinational toplevel has no clock, so a tick is a fixed ``Timer`` delay
instead.
"""

from typing import Any

import cocotb
from cocotb.clock import Clock
from cocotb.triggers import FallingEdge, RisingEdge, Timer

from fmul_verif.config import MASK32
from fmul_verif.harness.dut_interface import DutOutputs
from fmul_verif.utils.validation import assert_bit_width
from fmul_verif.verification_types import FloatBits, TickCount

DEFAULT_CLOCK_NAME = "clk"
DEFAULT_TICK_PERIOD_NS = 10


class CocotbFmulInterface:
    """Signal-level access to the multiplier toplevel.

    Attributes:
        dut: CoCoTB handle of the toplevel
        clock: Clock port handle, or None for a combinational toplevel
        tick_period_ns: Clock period, or Timer delay per tick
        ticks: Ticks advanced so far
    """

    def __init__(
        self,
        dut: Any,
        clock_name: str = DEFAULT_CLOCK_NAME,
        tick_period_ns: int = DEFAULT_TICK_PERIOD_NS,
    ) -> None:
        """Initialize the interface.

        Args:
            dut: CoCoTB SimHandle of the multiplier toplevel
            clock_name: Name of the clock port, if the toplevel has one
            tick_period_ns: Clock period / per-tick delay in nanoseconds
        """
        self.dut = dut
        self.clock = getattr(dut, clock_name, None)
        self.tick_period_ns = tick_period_ns
        self.ticks = TickCount(0)

    def start_clock(self) -> None:
        """Start a free-running clock if the toplevel has a clock port."""
        if self.clock is not None:
            cocotb.start_soon(
                Clock(self.clock, self.tick_period_ns, unit="ns").start()
            )

    def set_inputs(self, a: int, b: int) -> None:
        """Drive operands a and b."""
        assert_bit_width(a, 32, "operand a")
        assert_bit_width(b, 32, "operand b")
        self.dut.a.value = a
        self.dut.b.value = b

    async def advance_tick(self) -> None:
        """Advance one clock period, or one Timer period without a clock.

        A clocked tick ends on the falling edge, so registered outputs have
        settled when sampled and new inputs are stable before the next
        rising edge.
        """
        if self.clock is not None:
            await RisingEdge(self.clock)
            await FallingEdge(self.clock)
        else:
            await Timer(self.tick_period_ns, unit="ns")
        self.ticks = TickCount(self.ticks + 1)

    async def advance(self, ticks: int) -> None:
        """Advance several ticks."""
        for _ in range(ticks):
            await self.advance_tick()

    def read_outputs(self) -> DutOutputs:
        """Sample y and the status flags."""
        return DutOutputs(
            FloatBits(int(self.dut.y.value) & MASK32),
            bool(self.dut.invalid.value),
            bool(self.dut.overflow.value),
            bool(self.dut.underflow.value),
            bool(self.dut.inexact.value),
        )
