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

"""Tests for the bit-exact reference multiplier."""

import hypothesis.strategies as st
import pytest
from hypothesis import given

from fmul_verif.models.fmul_model import MultiplyResult, fmul_reference
from fmul_verif.models.fp_classify import (
    FP_CANONICAL_NAN,
    exp_field,
    frac_field,
    is_nan,
    is_subnormal,
    pack_fields,
    sign_bit,
)

words = st.integers(min_value=0, max_value=0xFFFFFFFF)
signs = st.integers(min_value=0, max_value=1)
mid_exponents = st.integers(min_value=64, max_value=190)


class TestSpecialOperands:
    """Priority order: NaN, Inf x zero, Inf, zero."""

    @pytest.mark.parametrize(
        "a, b",
        [
            (0x7FC00001, 0x3F800000),
            (0x3F800000, 0xFFFFFFFF),
            (0x7F800001, 0x00000000),  # NaN beats Inf x 0
            (0x7FC00000, 0x7F800000),
        ],
    )
    def test_nan_operand_gives_canonical_nan_without_flags(self, a: int, b: int) -> None:
        assert fmul_reference(a, b) == MultiplyResult(FP_CANONICAL_NAN)

    @pytest.mark.parametrize(
        "a, b",
        [
            (0x7F800000, 0x00000000),
            (0x80000000, 0xFF800000),
            (0xFF800000, 0x00000001),  # subnormal counts as zero
            (0x807FFFFF, 0x7F800000),
        ],
    )
    def test_inf_times_zero_is_invalid(self, a: int, b: int) -> None:
        assert fmul_reference(a, b) == MultiplyResult(FP_CANONICAL_NAN, invalid=True)

    def test_inf_takes_product_sign(self) -> None:
        assert fmul_reference(0xFF800000, 0x3F800000) == MultiplyResult(0xFF800000)
        assert fmul_reference(0x7F800000, 0xFF800000) == MultiplyResult(0xFF800000)
        assert fmul_reference(0xFF800000, 0xC0000000) == MultiplyResult(0x7F800000)

    def test_zero_takes_product_sign(self) -> None:
        assert fmul_reference(0x80000000, 0xBF800000) == MultiplyResult(0x00000000)
        assert fmul_reference(0x00000000, 0xBF800000) == MultiplyResult(0x80000000)

    def test_subnormal_input_is_zero_without_flags(self) -> None:
        assert fmul_reference(0x00000001, 0x3F800000) == MultiplyResult(0x00000000)
        assert fmul_reference(0x80000001, 0x3F800000) == MultiplyResult(0x80000000)


class TestNormalOperands:
    def test_exact_product(self) -> None:
        # 1.5 * 2.0 = 3.0
        assert fmul_reference(0x3FC00000, 0x40000000) == MultiplyResult(0x40400000)

    def test_tie_rounds_up_to_even(self) -> None:
        # (1 + 2^-23) * 1.5: guard=1, round=0, sticky=0, odd LSB
        assert fmul_reference(0x3F800001, 0x3FC00000) == MultiplyResult(
            0x3FC00002, inexact=True
        )

    def test_tie_stays_on_even(self) -> None:
        # (1 + 3 * 2^-23) * 1.5: tie with even LSB
        assert fmul_reference(0x3F800003, 0x3FC00000) == MultiplyResult(
            0x3FC00004, inexact=True
        )

    def test_tie_after_normalizing_shift(self) -> None:
        # Product in [2, 4) is shifted before the tie is seen
        assert fmul_reference(0x3FC00002, 0x3FC00000) == MultiplyResult(
            0x40100002, inexact=True
        )

    def test_rounding_carry_renormalizes(self) -> None:
        # (2 - 2^-22) * (1 + 2^-23) rounds up to exactly 2.0
        assert fmul_reference(0x3FFFFFFE, 0x3F800001) == MultiplyResult(
            0x40000000, inexact=True
        )

    def test_dropped_normalization_bit_does_not_set_inexact(self) -> None:
        # (2 - 2^-23)^2 = 4 - 2^-21 + 2^-46; only product bit 0 is lost
        assert fmul_reference(0x3FFFFFFF, 0x3FFFFFFF) == MultiplyResult(0x407FFFFE)

    def test_overflow_gives_signed_inf(self) -> None:
        assert fmul_reference(0x7F7FFFFF, 0x40000000) == MultiplyResult(
            0x7F800000, overflow=True, inexact=True
        )
        assert fmul_reference(0xFF7FFFFF, 0x40000000) == MultiplyResult(
            0xFF800000, overflow=True, inexact=True
        )

    def test_underflow_flushes_to_signed_zero(self) -> None:
        assert fmul_reference(0x00800000, 0x3F000000) == MultiplyResult(
            0x00000000, underflow=True, inexact=True
        )
        assert fmul_reference(0x80800000, 0x3F000000) == MultiplyResult(
            0x80000000, underflow=True, inexact=True
        )

    def test_just_below_min_normal_is_flushed(self) -> None:
        # Exact 2^-126 - 2^-150 rounds to itself at 24 bits, below the normal range
        assert fmul_reference(0x3F7FFFFF, 0x00800000) == MultiplyResult(
            0x00000000, underflow=True, inexact=True
        )

    def test_min_normal_is_kept(self) -> None:
        assert fmul_reference(0x00800000, 0x3F800000) == MultiplyResult(0x00800000)


class TestProperties:
    @given(words, words)
    def test_commutative(self, a: int, b: int) -> None:
        assert fmul_reference(a, b) == fmul_reference(b, a)

    @given(words, words)
    def test_output_is_never_subnormal_or_noncanonical_nan(self, a: int, b: int) -> None:
        y = fmul_reference(a, b).y
        assert not is_subnormal(y)
        assert not is_nan(y) or y == FP_CANONICAL_NAN

    @given(words, words)
    def test_non_nan_sign_is_xor_of_operand_signs(self, a: int, b: int) -> None:
        y = fmul_reference(a, b).y
        if not is_nan(y):
            assert sign_bit(y) == sign_bit(a) ^ sign_bit(b)

    @given(words, words)
    def test_at_most_one_terminal_flag(self, a: int, b: int) -> None:
        result = fmul_reference(a, b)
        assert result.invalid + result.overflow + result.underflow <= 1
        if result.overflow or result.underflow:
            assert result.inexact
        if result.invalid:
            assert not result.inexact

    @given(
        signs,
        mid_exponents,
        st.integers(min_value=0, max_value=0x2AAAAA // 2 - 1),
        signs,
        mid_exponents,
    )
    def test_ties_round_to_even(
        self, sign_a: int, exp_a: int, half_frac: int, sign_b: int, exp_b: int
    ) -> None:
        # Odd significand times 1.5 stays below 2 and ends exactly on a half
        a = pack_fields(sign_a, exp_a, 2 * half_frac + 1)
        b = pack_fields(sign_b, exp_b, 0x400000)
        significand = (1 << 23) | frac_field(a)

        result = fmul_reference(a, b)

        assert result.y & 1 == 0
        assert (1 << 23) | frac_field(result.y) in (
            3 * significand // 2,
            3 * significand // 2 + 1,
        )
        assert exp_field(result.y) == exp_a + exp_b - 127
        assert sign_bit(result.y) == sign_a ^ sign_b
        assert result.inexact
        assert not (result.overflow or result.underflow or result.invalid)
