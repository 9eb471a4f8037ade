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

"""Structured logging for multiplier test cases and run summaries.

FP Case Logger
==============

Renders each reported case as a labeled block: both operands, then the DUT
and reference outputs side by side, each with hex pattern, decimal value,
field breakdown and status flags. Makes it easy to see which field of the
result is wrong and to correlate a failure with waveforms.

Example block::

    ===================== FAIL [rand (verbose)] =====================
      a        : 0x3f800001  +1.00000011920928955078e+00  | s=0x0 ...
      b        : 0x3fc00000  +1.50000000000000000000e+00  | s=0x0 ...

     ---------------------------- DUT ----------------------------
      y        : 0x3fc00001  ...
      flags    : invalid=0 overflow=0 underflow=0 inexact=1
    ...
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fmul_verif.config import LOGGER_NAME
from fmul_verif.models.fp_classify import (
    FP_FRAC_BITS,
    bits_to_float,
    exp_field,
    frac_field,
    is_inf,
    is_nan,
    sign_bit,
)

if TYPE_CHECKING:
    from fmul_verif.harness.dut_interface import DutOutputs
    from fmul_verif.models.fmul_cast_model import CrossCheckDivergence
    from fmul_verif.models.fmul_model import MultiplyResult
    from fmul_verif.stimulus.fmul_stimulus import StimulusPair

BANNER_WIDTH = 117
NOTE_VALUE_MISMATCH = (
    "NOTE: Flag checking is disabled (--check-flags not set). "
    "Failure is due to output y mismatch."
)
NOTE_FLAGS_IGNORED = (
    "NOTE: Output y matches, but flags differ and are ignored "
    "(flag checking disabled)."
)


def _banner(title: str, fill: str) -> str:
    padded = f" {title} "
    side = max((BANNER_WIDTH - len(padded)) // 2, 0)
    return f"{fill * side}{padded}{fill * (BANNER_WIDTH - side - len(padded))}"


class FpCaseLogger:
    """Formats and emits case reports for the multiplier harness.

    Formatting is done by static methods so reports can be built and
    inspected without logging; the instance only owns the sink.

    Attributes:
        log: Logger all reports are emitted on
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        """Initialize with a logger (default: the framework's cocotb child)."""
        self.log = log if log is not None else logging.getLogger(LOGGER_NAME)

    @staticmethod
    def format_fp(label: str, bits: int) -> str:
        """Format one binary32 pattern with its value and fields.

        Args:
            label: Name shown in the first column ("a", "b", "y")
            bits: Pattern to describe

        Returns:
            Single line: hex, decimal/NaN/Inf, raw fields, decoded fields
        """
        sign = sign_bit(bits)
        exp = exp_field(bits)
        man = frac_field(bits)
        sign_char = "-" if sign else "+"

        # Zero/subnormal: 0.mantissa * 2^-126; everything else 1.mantissa
        if exp == 0:
            unbiased = -126
            sig_int = man
        else:
            unbiased = exp - 127
            sig_int = (1 << FP_FRAC_BITS) | man

        if is_nan(bits):
            value = "NaN"
        elif is_inf(bits):
            value = f"{sign_char}Inf"
        else:
            value = f"{bits_to_float(bits):+.20e}"

        return (
            f"  {label:<8s} : 0x{bits:08x}  {value}"
            f"  | s=0x{sign:x} e=0x{exp:02x} m=0x{man:06x}"
            f"  | sgn={sign_char} ue={unbiased} m={sig_int:9d} / 2^{FP_FRAC_BITS}"
        )

    @staticmethod
    def format_flags(
        invalid: bool, overflow: bool, underflow: bool, inexact: bool
    ) -> str:
        """Format the four status flags as 0/1."""
        return (
            f"  flags    : invalid={int(invalid)} overflow={int(overflow)} "
            f"underflow={int(underflow)} inexact={int(inexact)}"
        )

    @staticmethod
    def format_case(
        status: str,
        pair: StimulusPair,
        dut: DutOutputs,
        ref: MultiplyResult,
    ) -> list[str]:
        """Build the full report block for one case.

        Args:
            status: "PASS" or "FAIL"
            pair: Operands and tag
            dut: Outputs sampled from the DUT
            ref: Reference multiplier result

        Returns:
            Report lines, without trailing newlines
        """
        return [
            "",
            _banner(f"{status} [{pair.tag}]", "="),
            FpCaseLogger.format_fp("a", pair.a),
            FpCaseLogger.format_fp("b", pair.b),
            "",
            _banner("DUT", "-"),
            FpCaseLogger.format_fp("y", dut.y),
            FpCaseLogger.format_flags(*dut.flags),
            "",
            _banner("REF", "-"),
            FpCaseLogger.format_fp("y", ref.y),
            FpCaseLogger.format_flags(*ref.flags),
            "=" * BANNER_WIDTH,
        ]

    @staticmethod
    def format_summary(
        tests: int, fails: int, check_flags: bool, divergences: int | None = None
    ) -> list[str]:
        """Build the trailing run summary.

        Args:
            tests: Number of test cases run
            fails: Number of failing cases
            check_flags: Whether flag checking was enabled
            divergences: Cross-check divergence count (omitted if None)
        """
        lines = [
            "",
            "-" * BANNER_WIDTH,
            f"Tests run : {tests}",
            f"Failures  : {fails}",
            "Flag check: "
            + ("ENABLED (--check-flags)" if check_flags else "DISABLED"),
        ]
        if divergences is not None:
            lines.append(f"Cross-check divergences: {divergences}")
        lines.append("-" * BANNER_WIDTH)
        return lines

    def log_case(
        self,
        status: str,
        pair: StimulusPair,
        dut: DutOutputs,
        ref: MultiplyResult,
    ) -> None:
        """Emit the report block for one case."""
        self.log.info("\n".join(self.format_case(status, pair, dut, ref)))

    def log_note(self, note: str) -> None:
        """Emit an informational note following a case block."""
        self.log.info(note)

    def log_mismatch(self, pair: StimulusPair, expected: int, actual: int) -> None:
        """Emit a one-line error for a failing case.

        Args:
            pair: Operands and tag of the failing case
            expected: Reference output pattern
            actual: DUT output pattern
        """
        self.log.error(
            f"MISMATCH [{pair.tag}] a=0x{pair.a:08x} b=0x{pair.b:08x}: "
            f"expected=0x{expected:08x}, actual=0x{actual:08x}"
        )

    def log_divergence(self, divergence: CrossCheckDivergence) -> None:
        """Warn that the bit-level and cast models disagree on an operand pair."""
        self.log.warning(
            f"Cross-check divergence a=0x{divergence.a:08x} b=0x{divergence.b:08x}: "
            f"bit-level y=0x{divergence.bit_level.y:08x} "
            f"flags={tuple(int(f) for f in divergence.bit_level.flags)}, "
            f"cast y=0x{divergence.cast.y:08x} "
            f"flags={tuple(int(f) for f in divergence.cast.flags)}"
        )

    def log_summary(
        self, tests: int, fails: int, check_flags: bool, divergences: int | None = None
    ) -> None:
        """Emit the run summary."""
        self.log.info(
            "\n".join(self.format_summary(tests, fails, check_flags, divergences))
        )
