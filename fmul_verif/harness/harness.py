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

"""Comparison harness driving a multiplier DUT against the reference model.

Harness
=======

Each test case walks the same state machine::

    IDLE -> STIMULUS_APPLIED -> EVALUATED -> COMPARED -> REPORTED -> IDLE

    1. Drive operands a and b into the DUT
    2. Advance TICKS_BEFORE_SAMPLE ticks so the pipeline settles
    3. Sample y and the four status flags
    4. Compute the reference result and compare
    5. Render the case if requested, then advance TICKS_AFTER_SAMPLE ticks

Run structure:
    - Directed vectors first, always all of them, verbose on failure
    - Then ``num_random`` random pairs from the seeded generator, quiet.
      The first random failure is replayed once verbosely, after which
      ``halt_requested`` is set and the random phase stops.

``directed_phase`` and ``random_phase`` hold this policy as generators of
``CaseRequest``s. ``drive`` executes them against an attached DUT; the
cocotb test executes the same phases with awaited ticks.

The harness owns the only mutable state of a run: the statistics counters
and, through its generator, the RNG. Everything else is passed in through
``RunConfig``.

Usage::

    harness = MultiplierHarness(FmulPipelineModel(), RunConfig(num_random=1000))
    stats = harness.run()
    sys.exit(harness.exit_code())
"""

from __future__ import annotations

import enum
from collections.abc import Generator, Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from fmul_verif.config import TICKS_AFTER_SAMPLE, TICKS_BEFORE_SAMPLE, RunConfig
from fmul_verif.harness.comparator import Verdict, compare
from fmul_verif.harness.dut_interface import DutOutputs, FmulDut
from fmul_verif.models.fmul_cast_model import cross_check
from fmul_verif.models.fmul_model import MultiplyResult, fmul_reference
from fmul_verif.stimulus.fmul_stimulus import (
    DIRECTED_VECTORS,
    RandomStimulusGenerator,
    StimulusPair,
)
from fmul_verif.utils.fp_case_logger import (
    NOTE_FLAGS_IGNORED,
    NOTE_VALUE_MISMATCH,
    FpCaseLogger,
)
from fmul_verif.utils.validation import assert_bit_width

VERBOSE_RETRY_SUFFIX = " (verbose)"


class CaseState(enum.Enum):
    """Where the harness is within the current test case."""

    IDLE = "idle"
    STIMULUS_APPLIED = "stimulus_applied"
    EVALUATED = "evaluated"
    COMPARED = "compared"
    REPORTED = "reported"


@dataclass
class HarnessStatistics:
    """Run-level pass/fail counters.

    Attributes:
        tests: Test cases executed (verbose replays are not counted)
        fails: Test cases whose verdict was not ok
        divergences: Cases where the cast model disagreed with the bit-level one
        first_failure: Stimulus of the first failing case, if any
    """

    tests: int = 0
    fails: int = 0
    divergences: int = 0
    first_failure: StimulusPair | None = None

    def record(self, pair: StimulusPair, ok: bool) -> None:
        """Count one executed case."""
        self.tests += 1
        if not ok:
            self.fails += 1
            if self.first_failure is None:
                self.first_failure = pair

    @property
    def passed(self) -> bool:
        """True if no case failed."""
        return self.fails == 0


def verbose_retry(pair: StimulusPair) -> StimulusPair:
    """Return the same stimulus, retagged for its verbose replay."""
    return pair._replace(tag=pair.tag + VERBOSE_RETRY_SUFFIX)


class CaseRequest(NamedTuple):
    """One case a run phase asks its executor to drive.

    Attributes:
        pair: Operands and tag
        verbose_on_fail: Render the case if it fails
        counted: False for the verbose replay, which is not a new test
    """

    pair: StimulusPair
    verbose_on_fail: bool
    counted: bool = True


CasePhase = Generator[CaseRequest, bool, None]
"""A run phase: yields CaseRequests, receives each case's pass/fail."""


class MultiplierHarness:
    """Drives a DUT with stimulus and checks it against ``fmul_reference``.

    The DUT is optional: a harness without one can still evaluate outputs
    sampled elsewhere (``check_outputs``), which is how the cocotb test
    shares the comparison and accounting logic with the synchronous loop.

    Attributes:
        dut: Device under test, or None for evaluate-only use
        config: Immutable run configuration
        case_logger: Sink for case reports and summaries
        stats: Counters for the current run
        state: Current per-case state
        halt_requested: Set after the first random failure
    """

    def __init__(
        self,
        dut: FmulDut | None,
        config: RunConfig,
        case_logger: FpCaseLogger | None = None,
    ) -> None:
        """Initialize the harness.

        Args:
            dut: Device under test implementing the FmulDut interface
            config: Run configuration (print_ok, check_flags, seed, ...)
            case_logger: Report sink; defaults to the framework logger
        """
        self.dut = dut
        self.config = config
        self.case_logger = case_logger if case_logger is not None else FpCaseLogger()
        self.stats = HarnessStatistics()
        self.state = CaseState.IDLE
        self.halt_requested = False

    # ------------------------------------------------------------------
    # Single case
    # ------------------------------------------------------------------

    def _advance(self, ticks: int) -> None:
        for _ in range(ticks):
            self.dut.advance_tick()

    def run_one(self, pair: StimulusPair, verbose_on_fail: bool) -> Verdict:
        """Apply one stimulus, sample the DUT and compare. Not counted.

        Args:
            pair: Operands and tag
            verbose_on_fail: Render the case if it fails

        Returns:
            Verdict for the case
        """
        _, _, verdict = self._run_case(pair, verbose_on_fail)
        return verdict

    def _run_case(
        self, pair: StimulusPair, verbose_on_fail: bool
    ) -> tuple[DutOutputs, MultiplyResult, Verdict]:
        if self.dut is None:
            raise ValueError("running a case needs a DUT; use check_outputs instead")
        assert_bit_width(pair.a, 32, "operand a")
        assert_bit_width(pair.b, 32, "operand b")

        self.dut.set_inputs(pair.a, pair.b)
        self.state = CaseState.STIMULUS_APPLIED

        self._advance(TICKS_BEFORE_SAMPLE)
        self.state = CaseState.EVALUATED
        outputs = self.dut.read_outputs()

        expected, verdict = self._evaluate(pair, outputs, verbose_on_fail)

        self._advance(TICKS_AFTER_SAMPLE)
        self.state = CaseState.IDLE
        return outputs, expected, verdict

    def evaluate(
        self, pair: StimulusPair, outputs: DutOutputs, verbose_on_fail: bool
    ) -> Verdict:
        """Compare sampled outputs with the reference and render if requested.

        Rendering happens for failures when ``verbose_on_fail`` is set and
        for passes when ``print_ok`` is set. With flag checking disabled, a
        rendered mismatch is followed by a note saying whether the value or
        only the (ignored) flags differed.
        """
        _, verdict = self._evaluate(pair, outputs, verbose_on_fail)
        return verdict

    def _evaluate(
        self, pair: StimulusPair, outputs: DutOutputs, verbose_on_fail: bool
    ) -> tuple[MultiplyResult, Verdict]:
        expected = fmul_reference(pair.a, pair.b)
        verdict = compare(expected, outputs, self.config.check_flags)
        self.state = CaseState.COMPARED

        if (not verdict.ok and verbose_on_fail) or (verdict.ok and self.config.print_ok):
            self.case_logger.log_case(
                "PASS" if verdict.ok else "FAIL", pair, outputs, expected
            )
            if not self.config.check_flags:
                if not verdict.value_ok:
                    self.case_logger.log_note(NOTE_VALUE_MISMATCH)
                elif not verdict.flags_ok:
                    self.case_logger.log_note(NOTE_FLAGS_IGNORED)

        self.state = CaseState.REPORTED
        return expected, verdict

    # ------------------------------------------------------------------
    # Accounting
    # ------------------------------------------------------------------

    def record(
        self,
        pair: StimulusPair,
        outputs: DutOutputs,
        expected: MultiplyResult,
        verdict: Verdict,
    ) -> bool:
        """Count a case, log a failure line and run the optional cross-check.

        Returns:
            The verdict's ok
        """
        self.stats.record(pair, verdict.ok)
        if not verdict.ok:
            self.case_logger.log_mismatch(pair, expected.y, outputs.y)
        if self.config.cross_check:
            divergence = cross_check(pair.a, pair.b, bit_level=expected)
            if divergence is not None:
                self.stats.divergences += 1
                self.case_logger.log_divergence(divergence)
        return verdict.ok

    def check(self, pair: StimulusPair, verbose_on_fail: bool = True) -> bool:
        """Run and count one case against the attached DUT."""
        outputs, expected, verdict = self._run_case(pair, verbose_on_fail)
        return self.record(pair, outputs, expected, verdict)

    def check_outputs(
        self, pair: StimulusPair, outputs: DutOutputs, verbose_on_fail: bool = True
    ) -> bool:
        """Evaluate and count outputs that were sampled by the caller."""
        expected, verdict = self._evaluate(pair, outputs, verbose_on_fail)
        self.state = CaseState.IDLE
        return self.record(pair, outputs, expected, verdict)

    def request_halt(self) -> None:
        """Stop the random phase before its next case."""
        self.halt_requested = True

    # ------------------------------------------------------------------
    # Run phases
    # ------------------------------------------------------------------

    def directed_phase(
        self, vectors: Iterable[StimulusPair] = DIRECTED_VECTORS
    ) -> CasePhase:
        """Every directed vector, verbose on failure. Never halted early."""
        for pair in vectors:
            yield CaseRequest(pair, verbose_on_fail=True)

    def random_phase(self, pairs: Iterable[StimulusPair]) -> CasePhase:
        """Random cases until exhausted or the first failure.

        On the first failure the identical stimulus is replayed once with
        full diagnostics (not counted) and the phase halts.
        """
        self.halt_requested = False
        for pair in pairs:
            if self.halt_requested:
                break
            ok = yield CaseRequest(pair, verbose_on_fail=False)
            if not ok:
                yield CaseRequest(verbose_retry(pair), verbose_on_fail=True, counted=False)
                self.request_halt()

    def random_stimulus(self) -> Iterator[StimulusPair]:
        """The configured number of pairs from the seeded generator."""
        return RandomStimulusGenerator(self.config.seed).take(self.config.num_random)

    def execute(self, request: CaseRequest) -> bool:
        """Run one requested case against the attached DUT."""
        if request.counted:
            return self.check(request.pair, request.verbose_on_fail)
        return self.run_one(request.pair, request.verbose_on_fail).ok

    def drive(self, phase: CasePhase) -> None:
        """Execute every request of a phase against the attached DUT."""
        request = next(phase, None)
        while request is not None:
            try:
                request = phase.send(self.execute(request))
            except StopIteration:
                request = None

    def run_directed(self, vectors: Iterable[StimulusPair] = DIRECTED_VECTORS) -> None:
        """Run the directed phase against the attached DUT."""
        self.drive(self.directed_phase(vectors))

    def run_random(self, pairs: Iterable[StimulusPair]) -> None:
        """Run the random phase against the attached DUT."""
        self.drive(self.random_phase(pairs))

    def run(self) -> HarnessStatistics:
        """Run the directed phase, then the seeded random phase, then summarize."""
        self.run_directed()
        self.run_random(self.random_stimulus())
        self.log_summary()
        return self.stats

    def log_summary(self) -> None:
        """Emit test count, failure count and flag-check mode."""
        self.case_logger.log_summary(
            self.stats.tests,
            self.stats.fails,
            self.config.check_flags,
            self.stats.divergences if self.config.cross_check else None,
        )

    def exit_code(self) -> int:
        """Process exit status: 0 iff no failures."""
        return 0 if self.stats.passed else 1
