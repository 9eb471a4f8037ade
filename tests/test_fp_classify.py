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

"""Tests for binary32 field extraction and classification."""

import math

import hypothesis.strategies as st
import pytest
from hypothesis import given

from fmul_verif.models.fp_classify import (
    FP_CANONICAL_NAN,
    FP_NEG_INF,
    FP_POS_INF,
    FpClass,
    bits_to_float,
    classify,
    exp_field,
    float_to_bits,
    frac_field,
    is_inf,
    is_nan,
    is_normal,
    is_subnormal,
    is_zero,
    pack_fields,
    sign_bit,
)

words = st.integers(min_value=0, max_value=0xFFFFFFFF)


@pytest.mark.parametrize(
    "bits, expected",
    [
        (0x00000000, FpClass.ZERO),
        (0x80000000, FpClass.ZERO),
        (0x00000001, FpClass.SUBNORMAL),
        (0x807FFFFF, FpClass.SUBNORMAL),
        (0x00800000, FpClass.NORMAL),
        (0x7F7FFFFF, FpClass.NORMAL),
        (0xBF800000, FpClass.NORMAL),
        (0x7F800000, FpClass.INFINITY),
        (0xFF800000, FpClass.INFINITY),
        (0x7FC00000, FpClass.NAN),
        (0x7F800001, FpClass.NAN),
        (0xFFFFFFFF, FpClass.NAN),
    ],
)
def test_classify(bits: int, expected: FpClass) -> None:
    assert classify(bits) is expected


@given(words)
def test_exactly_one_predicate_holds(bits: int) -> None:
    predicates = [is_zero, is_subnormal, is_normal, is_inf, is_nan]
    assert sum(p(bits) for p in predicates) == 1


@given(words)
def test_fields_repack_to_same_pattern(bits: int) -> None:
    assert pack_fields(sign_bit(bits), exp_field(bits), frac_field(bits)) == bits


def test_field_extraction() -> None:
    assert sign_bit(0xBF800000) == 1
    assert exp_field(0xBF800000) == 0x7F
    assert frac_field(0x3FC00000) == 0x400000
    assert sign_bit(0x3FC00000) == 0


def test_bits_to_float() -> None:
    assert bits_to_float(0x3F800000) == 1.0
    assert bits_to_float(0xC0000000) == -2.0
    assert math.isinf(bits_to_float(0x7F800000))
    assert math.isnan(bits_to_float(0x7FC00001))


def test_float_to_bits() -> None:
    assert float_to_bits(1.5) == 0x3FC00000
    assert float_to_bits(-0.0) == 0x80000000
    assert float_to_bits(float("nan")) == FP_CANONICAL_NAN
    assert float_to_bits(float("-inf")) == FP_NEG_INF


def test_float_to_bits_saturates_out_of_range() -> None:
    assert float_to_bits(1e300) == FP_POS_INF
    assert float_to_bits(-1e300) == FP_NEG_INF
