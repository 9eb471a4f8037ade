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

"""Tests for the cast-based cross-check model and its known divergences."""

import hypothesis.strategies as st
import pytest
from hypothesis import given

from fmul_verif.models.fmul_cast_model import (
    CrossCheckDivergence,
    cross_check,
    fmul_cast_reference,
)
from fmul_verif.models.fmul_model import MultiplyResult, fmul_reference
from fmul_verif.models.fp_classify import pack_fields
from fmul_verif.stimulus.fmul_stimulus import DIRECTED_VECTORS

AGREEING_PAIRS = [
    (0x3FC00000, 0x40000000),  # exact
    (0x3F800001, 0x3FC00000),  # tie, odd LSB
    (0x3F800003, 0x3FC00000),  # tie, even LSB
    (0x3FFFFFFE, 0x3F800001),  # rounding carry
    (0x7F7FFFFF, 0x40000000),  # overflow
    (0x00800000, 0x3F000000),  # underflow
]


@pytest.mark.parametrize("a, b", AGREEING_PAIRS)
def test_models_agree(a: int, b: int) -> None:
    assert fmul_cast_reference(a, b) == fmul_reference(a, b)
    assert cross_check(a, b) is None


@pytest.mark.parametrize("pair", DIRECTED_VECTORS, ids=lambda p: p.tag)
def test_models_agree_on_directed_vectors(pair) -> None:
    assert cross_check(pair.a, pair.b) is None


def test_divergence_just_below_min_normal() -> None:
    # Exact 2^-126 - 2^-150: ties to even onto the min normal when narrowed
    divergence = cross_check(0x3F7FFFFF, 0x00800000)
    assert divergence == CrossCheckDivergence(
        0x3F7FFFFF,
        0x00800000,
        MultiplyResult(0x00000000, underflow=True, inexact=True),
        MultiplyResult(0x00800000, inexact=True),
    )


def test_divergence_on_dropped_normalization_bit() -> None:
    divergence = cross_check(0x3FFFFFFF, 0x3FFFFFFF)
    assert divergence is not None
    assert divergence.bit_level == MultiplyResult(0x407FFFFE)
    assert divergence.cast == MultiplyResult(0x407FFFFE, inexact=True)


fields = st.tuples(
    st.integers(min_value=0, max_value=1),
    st.integers(min_value=64, max_value=190),
    # Significands below sqrt(2), so every product stays below 2
    st.integers(min_value=0, max_value=0x3504F2),
)


@given(fields, fields)
def test_models_agree_away_from_known_divergences(a_fields, b_fields) -> None:
    # Neither the normalization shift nor the min-normal boundary is involved
    assert cross_check(pack_fields(*a_fields), pack_fields(*b_fields)) is None
