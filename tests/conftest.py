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

"""Shared fixtures: fake DUTs and harness factories."""

import logging

import pytest

from fmul_verif.config import LOGGER_NAME, RunConfig
from fmul_verif.harness.dut_interface import DutOutputs
from fmul_verif.harness.harness import MultiplierHarness
from fmul_verif.models.fmul_pipeline_model import FmulPipelineModel
from fmul_verif.verification_types import FloatBits


class ValueFaultDut(FmulPipelineModel):
    """Pipeline model that flips the result LSB for one operand a."""

    def __init__(self, faulty_a: int) -> None:
        super().__init__()
        self.faulty_a = faulty_a

    def read_outputs(self) -> DutOutputs:
        outputs = super().read_outputs()
        if self.a == self.faulty_a:
            return outputs._replace(y=FloatBits(outputs.y ^ 1))
        return outputs


class AlwaysWrongDut(FmulPipelineModel):
    """Pipeline model whose every result is off by one LSB."""

    def read_outputs(self) -> DutOutputs:
        outputs = super().read_outputs()
        return outputs._replace(y=FloatBits(outputs.y ^ 1))


class FlagBlindDut(FmulPipelineModel):
    """Pipeline model that never raises a status flag."""

    def read_outputs(self) -> DutOutputs:
        return super().read_outputs()._replace(
            invalid=False, overflow=False, underflow=False, inexact=False
        )


@pytest.fixture
def value_fault_dut():
    """Factory for a DUT that corrupts the result for one operand a."""
    return ValueFaultDut


@pytest.fixture
def always_wrong_dut() -> AlwaysWrongDut:
    return AlwaysWrongDut()


@pytest.fixture
def flag_blind_dut() -> FlagBlindDut:
    return FlagBlindDut()


@pytest.fixture
def fmul_log(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture INFO and above from the framework logger."""
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    return caplog


@pytest.fixture
def make_harness():
    """Build a harness around a DUT with a small default run."""

    def _make(dut=None, **overrides) -> MultiplierHarness:
        overrides.setdefault("num_random", 200)
        config = RunConfig(**overrides)
        return MultiplierHarness(dut if dut is not None else FmulPipelineModel(), config)

    return _make
