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

"""Tests for directed vectors and the seeded random operand stream."""

import itertools

import pytest

from fmul_verif.config import DEFAULT_SEED
from fmul_verif.models.fp_classify import exp_field
from fmul_verif.stimulus.fmul_stimulus import (
    DIRECTED_VECTORS,
    RANDOM_NAN,
    RandomStimulusGenerator,
    random_operand,
)


class ScriptedRng:
    """Stands in for random.Random, returning fixed draws and logging calls."""

    def __init__(self, word: int, selector: int) -> None:
        self.word = word
        self.selector = selector
        self.calls: list[str] = []

    def getrandbits(self, k: int) -> int:
        self.calls.append("getrandbits")
        return self.word

    def randrange(self, stop: int) -> int:
        self.calls.append("randrange")
        return self.selector


def test_directed_vectors_in_order() -> None:
    assert [(p.a, p.b, p.tag) for p in DIRECTED_VECTORS] == [
        (0x7F800000, 0x00000000, "Inf*0"),
        (0x7FC00001, 0x3F800000, "NaN*1"),
        (0x00000001, 0x3F800000, "subnormal input DAZ"),
        (0x00800000, 0x3F000000, "min_norm*0.5 => FTZ"),
        (0x7F7FFFFF, 0x40000000, "max_finite*2 => overflow"),
    ]


@pytest.mark.parametrize(
    "selector, expected",
    [
        (0, 0x00000000),
        (1, 0x80000000),
        (2, 0x7F800000),
        (3, 0xFF800000),
        (4, 0x7FC00001),
        (5, 0xC0123456 & 0x807FFFFF),
        (6, (0xC0123456 & 0x807FFFFF) | (1 << 23)),
        (7, (0xC0123456 & 0x807FFFFF) | (254 << 23)),
        (8, 0xC0123456),
        (11, 0xC0123456),
    ],
)
def test_random_operand_categories(selector: int, expected: int) -> None:
    rng = ScriptedRng(0xC0123456, selector)
    assert random_operand(rng) == expected


def test_raw_word_drawn_before_selector() -> None:
    rng = ScriptedRng(0, 0)
    random_operand(rng)
    assert rng.calls == ["getrandbits", "randrange"]


def test_same_seed_same_stream() -> None:
    first = list(RandomStimulusGenerator(DEFAULT_SEED).take(500))
    second = list(RandomStimulusGenerator(DEFAULT_SEED).take(500))
    assert first == second


def test_different_seed_different_stream() -> None:
    first = list(RandomStimulusGenerator(1).take(50))
    second = list(RandomStimulusGenerator(2).take(50))
    assert first != second


def test_take_is_a_prefix_of_iteration() -> None:
    taken = list(RandomStimulusGenerator(7).take(20))
    iterated = list(itertools.islice(RandomStimulusGenerator(7), 20))
    assert taken == iterated
    assert all(p.tag == RandomStimulusGenerator.TAG for p in taken)


def test_take_zero_is_empty() -> None:
    assert list(RandomStimulusGenerator(7).take(0)) == []


def test_stream_covers_boundary_categories() -> None:
    operands = [
        x
        for pair in RandomStimulusGenerator(DEFAULT_SEED).take(2000)
        for x in (pair.a, pair.b)
    ]
    for special in (0x00000000, 0x80000000, 0x7F800000, 0xFF800000, RANDOM_NAN):
        assert special in operands
    exponents = {exp_field(x) for x in operands}
    assert {0x00, 0x01, 0xFE} <= exponents
