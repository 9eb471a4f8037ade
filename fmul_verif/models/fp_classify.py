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

"""Bit-level classification of IEEE 754 single-precision patterns.

FP Classify
===========

Pure functions that split a 32-bit pattern into sign/exponent/fraction
fields and classify it as zero, subnormal, normal, infinity or NaN.

Every 32-bit pattern falls into exactly one class:

    ============  ==========  ===========
    Class         Exponent    Fraction
    ============  ==========  ===========
    ZERO          0x00        == 0
    SUBNORMAL     0x00        != 0
    NORMAL        0x01-0xFE   any
    INFINITY      0xFF        == 0
    NAN           0xFF        != 0
    ============  ==========  ===========

Also provides explicit bit reinterpretation between patterns and Python
floats. It uses the struct module to copy bytes, so a pattern is never
reinterpreted through shared storage.
"""

import enum
import math
import struct

from fmul_verif.config import MASK32
from fmul_verif.verification_types import (
    BiasedExponent,
    FloatBits,
    Fraction,
)

# IEEE 754 single-precision constants
FP_POS_ZERO = FloatBits(0x00000000)
FP_NEG_ZERO = FloatBits(0x80000000)
FP_POS_INF = FloatBits(0x7F800000)
FP_NEG_INF = FloatBits(0xFF800000)
FP_CANONICAL_NAN = FloatBits(0x7FC00000)  # The only NaN the multiplier emits

# Masks for IEEE 754 single-precision
FP_SIGN_MASK = 0x80000000
FP_EXP_MASK = 0x7F800000
FP_MANT_MASK = 0x007FFFFF

FP_EXP_MAX = 0xFF
FP_FRAC_BITS = 23


class FpClass(enum.Enum):
    """Class of a binary32 pattern, derived from its exponent and fraction."""

    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"
    INFINITY = "infinity"
    NAN = "nan"


def sign_bit(bits: int) -> int:
    """Return bit 31 (1 for negative)."""
    return (bits & FP_SIGN_MASK) >> 31


def exp_field(bits: int) -> BiasedExponent:
    """Return the 8-bit biased exponent field (bits 30-23)."""
    return BiasedExponent((bits & FP_EXP_MASK) >> FP_FRAC_BITS)


def frac_field(bits: int) -> Fraction:
    """Return the 23-bit fraction field (bits 22-0)."""
    return Fraction(bits & FP_MANT_MASK)


def classify(bits: int) -> FpClass:
    """Classify a 32-bit pattern.

    Args:
        bits: Raw binary32 pattern

    Returns:
        The single FpClass the pattern belongs to
    """
    exp = exp_field(bits)
    frac = frac_field(bits)
    if exp == 0:
        return FpClass.ZERO if frac == 0 else FpClass.SUBNORMAL
    if exp == FP_EXP_MAX:
        return FpClass.INFINITY if frac == 0 else FpClass.NAN
    return FpClass.NORMAL


def is_nan(bits: int) -> bool:
    """Check if bits represent a NaN value."""
    return exp_field(bits) == FP_EXP_MAX and frac_field(bits) != 0


def is_inf(bits: int) -> bool:
    """Check if bits represent an infinity value."""
    return exp_field(bits) == FP_EXP_MAX and frac_field(bits) == 0


def is_zero(bits: int) -> bool:
    """Check if bits represent a zero value (+0 or -0)."""
    return (bits & 0x7FFFFFFF) == 0


def is_subnormal(bits: int) -> bool:
    """Check if bits represent a subnormal (denormalized) number."""
    return exp_field(bits) == 0 and frac_field(bits) != 0


def is_normal(bits: int) -> bool:
    """Check if bits represent a normal finite number."""
    return 0 < exp_field(bits) < FP_EXP_MAX


def pack_fields(sign: int, biased_exp: int, fraction: int) -> FloatBits:
    """Assemble a pattern from sign, biased exponent and fraction fields."""
    return FloatBits(
        ((sign & 1) << 31)
        | ((biased_exp & FP_EXP_MAX) << FP_FRAC_BITS)
        | (fraction & FP_MANT_MASK)
    )


def pack_signed_zero(sign: int) -> FloatBits:
    """Return +0 or -0."""
    return FP_NEG_ZERO if sign else FP_POS_ZERO


def pack_signed_inf(sign: int) -> FloatBits:
    """Return +Inf or -Inf."""
    return FP_NEG_INF if sign else FP_POS_INF


def bits_to_float(bits: int) -> float:
    """Convert 32-bit integer to IEEE 754 single-precision float."""
    packed = struct.pack(">I", bits & MASK32)
    return struct.unpack(">f", packed)[0]


def float_to_bits(f: float) -> FloatBits:
    """Convert a Python float to the nearest binary32 pattern.

    Rounds to nearest even. Any NaN becomes the canonical quiet NaN, and
    magnitudes beyond the binary32 range saturate to signed infinity.
    Subnormal results are returned as-is (no flushing here).
    """
    if math.isnan(f):
        return FP_CANONICAL_NAN
    if math.isinf(f):
        return FP_NEG_INF if f < 0.0 else FP_POS_INF
    try:
        packed = struct.pack(">f", f)
    except OverflowError:
        # Value too large for float32: saturate to signed infinity.
        return FP_NEG_INF if f < 0.0 else FP_POS_INF
    return FloatBits(struct.unpack(">I", packed)[0])
