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

"""Central configuration for the multiplier verification framework.

Config
======

Constants shared by the models, the harness and the simulator runner, plus
the immutable ``RunConfig`` value that replaces per-run global switches.

A ``RunConfig`` is built exactly once per run, either from parsed command
line options (``RunConfig.from_args``) or, inside a cocotb simulation, from
the environment the runner exported (``RunConfig.from_env``). It is then
passed explicitly into the harness.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass

from fmul_verif.exceptions import ConfigurationError
from fmul_verif.utils.validation import assert_bit_width, assert_in_range

# Bit masks
MASK32 = 0xFFFFFFFF

# DUT timing: the multiplier has a fixed two-tick latency, and outputs stay
# stable for at least two further ticks.
TICKS_BEFORE_SAMPLE = 2
TICKS_AFTER_SAMPLE = 2

# Run defaults
DEFAULT_NUM_RANDOM = 200_000
DEFAULT_SEED = 0xC001D00D

# Logger under the cocotb hierarchy so reports land in the simulator log
LOGGER_NAME = "cocotb.fmul"

# Environment variables used to hand a RunConfig to a cocotb test process
ENV_NUM_RANDOM = "FMUL_NUM_RANDOM"
ENV_SEED = "FMUL_SEED"
ENV_PRINT_OK = "FMUL_PRINT_OK"
ENV_CHECK_FLAGS = "FMUL_CHECK_FLAGS"
ENV_TRACE = "FMUL_TRACE"
ENV_CROSS_CHECK = "FMUL_CROSS_CHECK"

_TRUE_STRINGS = ("1", "true", "yes", "y", "on")
_FALSE_STRINGS = ("0", "false", "no", "n", "off", "")


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_STRINGS:
        return True
    if normalized in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"{name}={value!r} is not a boolean", variable=name)


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None:
        return default
    try:
        return int(value.strip(), 0)
    except ValueError as e:
        raise ConfigurationError(
            f"{name}={value!r} is not an integer", variable=name
        ) from e


@dataclass(frozen=True)
class RunConfig:
    """Immutable options for one verification run.

    Attributes:
        num_random: Number of randomized test cases after the directed ones
        seed: Seed for the random stimulus stream
        print_ok: Render passing cases as well as failing ones
        check_flags: Treat status-flag mismatches as failures
        trace: Request waveform capture from the simulator
        cross_check: Also run the cast-based model and log divergences
    """

    num_random: int = DEFAULT_NUM_RANDOM
    seed: int = DEFAULT_SEED
    print_ok: bool = False
    check_flags: bool = False
    trace: bool = False
    cross_check: bool = False

    def __post_init__(self) -> None:
        """Validate numeric fields."""
        assert_in_range(self.num_random, 0, 2**63 - 1, "num_random")
        assert_bit_width(self.seed, 64, "seed")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> RunConfig:
        """Build a configuration from parsed command line options."""
        return cls(
            num_random=args.n,
            seed=args.seed,
            print_ok=args.print_ok,
            check_flags=args.check_flags,
            trace=args.trace,
            cross_check=args.cross_check,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> RunConfig:
        """Build a configuration from environment variables.

        Missing variables fall back to the defaults.

        Raises:
            ConfigurationError: If a variable is present but malformed
        """
        if env is None:
            env = os.environ
        return cls(
            num_random=_env_int(env, ENV_NUM_RANDOM, DEFAULT_NUM_RANDOM),
            seed=_env_int(env, ENV_SEED, DEFAULT_SEED),
            print_ok=_env_bool(env, ENV_PRINT_OK, False),
            check_flags=_env_bool(env, ENV_CHECK_FLAGS, False),
            trace=_env_bool(env, ENV_TRACE, False),
            cross_check=_env_bool(env, ENV_CROSS_CHECK, False),
        )

    def to_env(self) -> dict[str, str]:
        """Export the configuration as environment variables for a simulator."""
        return {
            ENV_NUM_RANDOM: str(self.num_random),
            ENV_SEED: str(self.seed),
            ENV_PRINT_OK: "1" if self.print_ok else "0",
            ENV_CHECK_FLAGS: "1" if self.check_flags else "0",
            ENV_TRACE: "1" if self.trace else "0",
            ENV_CROSS_CHECK: "1" if self.cross_check else "0",
        }
