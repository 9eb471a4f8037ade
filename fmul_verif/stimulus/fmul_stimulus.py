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

"""Directed and constrained-random operand generation for the multiplier.

FMUL Stimulus
=============

Directed vectors target the documented edge cases one by one. The random
stream is biased toward boundary patterns, which a uniform 32-bit draw
would almost never hit.

Random operand categories (selector drawn uniformly from 0-11):

    ========  ==========================================
    Selector  Operand
    ========  ==========================================
    0         +0
    1         -0
    2         +Inf
    3         -Inf
    4         NaN (0x7FC00001)
    5         random sign/fraction, exponent 0
    6         random sign/fraction, exponent 1
    7         random sign/fraction, exponent 254
    8-11      uniformly random 32-bit word
    ========  ==========================================

The stream is fully determined by its seed, so a failing regression can be
replayed with the same ``--seed``.
"""

import random
from collections.abc import Iterator
from typing import NamedTuple

from fmul_verif.models.fp_classify import (
    FP_NEG_INF,
    FP_NEG_ZERO,
    FP_POS_INF,
    FP_POS_ZERO,
)
from fmul_verif.verification_types import FloatBits

RANDOM_NAN = FloatBits(0x7FC00001)
NUM_CATEGORIES = 12

_SIGN_AND_FRACTION = 0x807FFFFF


class StimulusPair(NamedTuple):
    """One operand pair and the label used when reporting it."""

    a: FloatBits
    b: FloatBits
    tag: str


DIRECTED_VECTORS: tuple[StimulusPair, ...] = (
    StimulusPair(FloatBits(0x7F800000), FloatBits(0x00000000), "Inf*0"),
    StimulusPair(FloatBits(0x7FC00001), FloatBits(0x3F800000), "NaN*1"),
    StimulusPair(FloatBits(0x00000001), FloatBits(0x3F800000), "subnormal input DAZ"),
    StimulusPair(FloatBits(0x00800000), FloatBits(0x3F000000), "min_norm*0.5 => FTZ"),
    StimulusPair(
        FloatBits(0x7F7FFFFF), FloatBits(0x40000000), "max_finite*2 => overflow"
    ),
)


def random_operand(rng: random.Random) -> FloatBits:
    """Draw one operand from the boundary-biased distribution."""
    # The raw word is drawn before the selector, whatever category wins
    r = rng.getrandbits(32)
    selector = rng.randrange(NUM_CATEGORIES)

    if selector == 0:
        return FP_POS_ZERO
    if selector == 1:
        return FP_NEG_ZERO
    if selector == 2:
        return FP_POS_INF
    if selector == 3:
        return FP_NEG_INF
    if selector == 4:
        return RANDOM_NAN
    if selector == 5:
        return FloatBits(r & _SIGN_AND_FRACTION)
    if selector == 6:
        return FloatBits((r & _SIGN_AND_FRACTION) | (1 << 23))
    if selector == 7:
        return FloatBits((r & _SIGN_AND_FRACTION) | (254 << 23))
    return FloatBits(r)


class RandomStimulusGenerator:
    """Seeded, unbounded stream of random operand pairs.

    Iterating yields StimulusPairs tagged ``"rand"`` forever; use ``take``
    for a bounded run. Two generators built with the same seed produce the
    same sequence.

    Attributes:
        seed: Seed the stream was created with
    """

    TAG = "rand"

    def __init__(self, seed: int) -> None:
        """Initialize the stream.

        Args:
            seed: RNG seed
        """
        self.seed = seed
        self._rng = random.Random(seed)

    def __iter__(self) -> Iterator[StimulusPair]:
        """Yield operand pairs indefinitely."""
        while True:
            yield self.next_pair()

    def next_pair(self) -> StimulusPair:
        """Draw operand a, then operand b."""
        a = random_operand(self._rng)
        b = random_operand(self._rng)
        return StimulusPair(a, b, self.TAG)

    def take(self, count: int) -> Iterator[StimulusPair]:
        """Yield exactly ``count`` operand pairs."""
        for _ in range(count):
            yield self.next_pair()
