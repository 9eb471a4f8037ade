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

"""Bit-exact reference model of the single-precision multiplier.

FMUL Model
==========

This module implements the golden model the hardware multiplier must match
bit-for-bit. The hardware is deliberately not IEEE 754 compliant:

    - Denormals are zero (DAZ): subnormal operands behave as signed zero
    - Flush to zero (FTZ): a result below the normal range becomes signed
      zero with underflow and inexact raised
    - qNaN only: every NaN output is the canonical quiet NaN 0x7FC00000,
      and NaN operands do not raise invalid

The product is computed with exact integer arithmetic instead of the host's
float multiply, which would reintroduce subnormal results and NaN payload
propagation the hardware never produces.

Special cases are resolved in priority order, first match wins:

    1. Either operand NaN           -> canonical NaN, no flags
    2. Inf x (zero or subnormal)    -> canonical NaN, invalid
    3. Either operand Inf           -> signed Inf, no flags
    4. Either operand zero/subnorm  -> signed zero, no flags
    5. Normal x normal              -> multiply, round, classify

Normal x normal datapath::

    sig  = 1.fraction (24 bits)          prod = sigA * sigB (48 bits)
    prod[47] set -> prod >>= 1, exp++    (product in [2, 4))
    keep prod[46:23]  G = prod[22]  R = prod[21]  S = |prod[20:0]
    round up iff G & (R | S | lsb)       (round to nearest, ties to even)
    carry out of 24 bits -> >>= 1, exp++
    exp > 127 -> overflow (Inf)          exp < -126 -> underflow (zero)
"""

from dataclasses import dataclass

from fmul_verif.models.fp_classify import (
    FP_CANONICAL_NAN,
    FP_FRAC_BITS,
    exp_field,
    frac_field,
    is_inf,
    is_nan,
    is_subnormal,
    is_zero,
    pack_fields,
    pack_signed_inf,
    pack_signed_zero,
    sign_bit,
)
from fmul_verif.verification_types import FloatBits, Significand

EXP_BIAS = 127
EXP_MAX_UNBIASED = 127
EXP_MIN_UNBIASED = -126

HIDDEN_BIT = 1 << FP_FRAC_BITS
SIG_MASK = (1 << (FP_FRAC_BITS + 1)) - 1  # 24-bit significand
PRODUCT_TOP_BIT = 47
GUARD_BIT = 22
ROUND_BIT = 21
STICKY_MASK = (1 << ROUND_BIT) - 1  # prod[20:0]


@dataclass(frozen=True)
class MultiplyResult:
    """Output of one multiply: result pattern and the four status flags.

    At most one of the invalid (NaN), overflow (Inf) and underflow (zero)
    terminal paths is taken per computation.
    """

    y: FloatBits
    invalid: bool = False
    overflow: bool = False
    underflow: bool = False
    inexact: bool = False

    @property
    def flags(self) -> tuple[bool, bool, bool, bool]:
        """Flags as (invalid, overflow, underflow, inexact)."""
        return (self.invalid, self.overflow, self.underflow, self.inexact)


def is_effectively_zero(bits: int) -> bool:
    """Zero or subnormal: both count as zero under DAZ."""
    return is_zero(bits) or is_subnormal(bits)


def significand(bits: int) -> Significand:
    """Return the 24-bit significand with the hidden bit set."""
    return Significand(HIDDEN_BIT | frac_field(bits))


def unbiased_exponent(bits: int) -> int:
    """Return the unbiased exponent of a normal pattern."""
    return exp_field(bits) - EXP_BIAS


def _multiply_normals(a_bits: int, b_bits: int, sign: int) -> MultiplyResult:
    """Multiply two normal operands with RNE rounding and FTZ/overflow."""
    exp = unbiased_exponent(a_bits) + unbiased_exponent(b_bits)
    prod = significand(a_bits) * significand(b_bits)

    # Product of two values in [1, 2) lies in [1, 4); bring it back to [1, 2)
    if prod >> PRODUCT_TOP_BIT:
        prod >>= 1
        exp += 1

    retained = (prod >> (GUARD_BIT + 1)) & SIG_MASK
    guard = (prod >> GUARD_BIT) & 1
    round_bit = (prod >> ROUND_BIT) & 1
    sticky = 1 if prod & STICKY_MASK else 0

    lsb = retained & 1
    retained += guard & (round_bit | sticky | lsb)

    # 1.111...1 + ulp = 10.000...0
    if retained >> (FP_FRAC_BITS + 1):
        retained >>= 1
        exp += 1

    inexact = bool(guard | round_bit | sticky)

    if exp > EXP_MAX_UNBIASED:
        return MultiplyResult(pack_signed_inf(sign), overflow=True, inexact=True)
    if exp < EXP_MIN_UNBIASED:
        return MultiplyResult(pack_signed_zero(sign), underflow=True, inexact=True)

    return MultiplyResult(
        pack_fields(sign, exp + EXP_BIAS, retained), inexact=inexact
    )


def fmul_reference(a_bits: int, b_bits: int) -> MultiplyResult:
    """Compute the bit-exact multiplier output for two binary32 operands.

    Total and side-effect free: every operand pair yields a result, and
    irregular cases are reported through the flags rather than raised.

    Args:
        a_bits: First operand pattern
        b_bits: Second operand pattern

    Returns:
        MultiplyResult with the output pattern and status flags

    Example:
        >>> fmul_reference(0x3FC00000, 0x40000000).y == 0x40400000  # 1.5 * 2
        True
    """
    sign = sign_bit(a_bits) ^ sign_bit(b_bits)

    if is_nan(a_bits) or is_nan(b_bits):
        return MultiplyResult(FP_CANONICAL_NAN)

    a_zero = is_effectively_zero(a_bits)
    b_zero = is_effectively_zero(b_bits)
    a_inf = is_inf(a_bits)
    b_inf = is_inf(b_bits)

    if (a_inf and b_zero) or (b_inf and a_zero):
        return MultiplyResult(FP_CANONICAL_NAN, invalid=True)

    if a_inf or b_inf:
        return MultiplyResult(pack_signed_inf(sign))

    if a_zero or b_zero:
        return MultiplyResult(pack_signed_zero(sign))

    return _multiply_normals(a_bits, b_bits, sign)
