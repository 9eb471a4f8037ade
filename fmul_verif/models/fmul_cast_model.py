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

"""Cast-based multiplier model used as a differential cross-check.

FMUL Cast Model
===============

A second formulation of the multiplier: multiply the operands exactly in
binary64, narrow the product to binary32 with the host's IEEE rounding, then
reclassify the narrowed value to apply FTZ and the status flags.

The product of two binary32 significands needs at most 48 bits and the
exponent sum stays well inside the binary64 range, so the binary64 product
is exact and the only rounding step is the narrowing.

This model is NOT authoritative. It agrees with ``fmul_reference`` for almost
every operand pair. Known divergences:

    - It narrows onto the subnormal grid before checking for tininess, so
      products whose exact value lies in [2^-126 - 2^-150, 2^-126 - 2^-151)
      round up to the minimum normal here while the bit-level model
      flushes them.
    - The bit-level model drops product bit 0 when normalizing a product
      in [2, 4), so that bit never reaches sticky. This can change the
      inexact flag (0x3FFFFFFF squared is exact there and inexact here)
      and, on a tie, the rounding direction.

``cross_check`` reports such divergences instead of picking a winner.
"""

from typing import NamedTuple

from fmul_verif.models.fmul_model import (
    MultiplyResult,
    fmul_reference,
    is_effectively_zero,
)
from fmul_verif.models.fp_classify import (
    FP_CANONICAL_NAN,
    bits_to_float,
    float_to_bits,
    is_inf,
    is_nan,
    is_subnormal,
    is_zero,
    pack_signed_inf,
    pack_signed_zero,
    sign_bit,
)


class CrossCheckDivergence(NamedTuple):
    """Operands on which the two models disagree, with both results."""

    a: int
    b: int
    bit_level: MultiplyResult
    cast: MultiplyResult


def fmul_cast_reference(a_bits: int, b_bits: int) -> MultiplyResult:
    """Multiply via an exact binary64 product narrowed to binary32.

    Special operands follow the same priority rules as the bit-level model.
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

    exact = bits_to_float(a_bits) * bits_to_float(b_bits)
    narrowed = float_to_bits(exact)

    if is_inf(narrowed):
        return MultiplyResult(pack_signed_inf(sign), overflow=True, inexact=True)
    if is_zero(narrowed) or is_subnormal(narrowed):
        return MultiplyResult(pack_signed_zero(sign), underflow=True, inexact=True)

    return MultiplyResult(narrowed, inexact=bits_to_float(narrowed) != exact)


def cross_check(
    a_bits: int, b_bits: int, bit_level: MultiplyResult | None = None
) -> CrossCheckDivergence | None:
    """Run both models and return the divergence, if any.

    Args:
        a_bits: Operand a
        b_bits: Operand b
        bit_level: ``fmul_reference(a_bits, b_bits)`` if already computed

    Returns:
        None when the output pattern and all four flags agree
    """
    if bit_level is None:
        bit_level = fmul_reference(a_bits, b_bits)
    cast = fmul_cast_reference(a_bits, b_bits)
    if bit_level == cast:
        return None
    return CrossCheckDivergence(a_bits, b_bits, bit_level, cast)
