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

"""Run the multiplier regression, in-process or against RTL in a simulator.

Without ``--rtl`` the harness checks ``FmulPipelineModel`` (a loopback run
that exercises stimulus, comparison and reporting end to end). With
``--rtl`` the sources are built with the cocotb runner and the cocotb test
module is run against the given toplevel; the run configuration travels to
the simulator process through FMUL_* environment variables.

Exit status is 0 iff every test case passed.
"""

import argparse
import logging
import sys
from pathlib import Path

from fmul_verif.config import DEFAULT_NUM_RANDOM, DEFAULT_SEED, RunConfig
from fmul_verif.exceptions import VerificationError
from fmul_verif.harness.harness import MultiplierHarness
from fmul_verif.models.fmul_pipeline_model import FmulPipelineModel

COCOTB_TEST_MODULE = "fmul_verif.cocotb_tests.test_fmul"

log = logging.getLogger(__name__)


def _non_negative_int(text: str) -> int:
    """Parse a non-negative decimal test count."""
    try:
        value = int(text, 10)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid test count: {text!r}") from e
    if value < 0:
        raise argparse.ArgumentTypeError(f"test count must be >= 0, got {value}")
    return value


def _seed(text: str) -> int:
    """Parse a seed in any base Python accepts (0x..., 0o..., decimal)."""
    try:
        value = int(text, 0)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid seed: {text!r}") from e
    if not 0 <= value < 1 << 64:
        raise argparse.ArgumentTypeError(f"seed must fit in 64 bits, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Verify a DAZ/FTZ binary32 multiplier against its golden model"
    )
    parser.add_argument(
        "--n",
        type=_non_negative_int,
        default=DEFAULT_NUM_RANDOM,
        help=f"Number of random test cases (default: {DEFAULT_NUM_RANDOM})",
    )
    parser.add_argument(
        "--seed",
        type=_seed,
        default=DEFAULT_SEED,
        help=f"Random stimulus seed (default: 0x{DEFAULT_SEED:X})",
    )
    parser.add_argument(
        "--print-ok", action="store_true", help="Report passing cases too"
    )
    parser.add_argument(
        "--check-flags",
        action="store_true",
        help="Fail on status flag mismatches, not only on result mismatches",
    )
    parser.add_argument(
        "--trace", action="store_true", help="Dump waveforms (simulator runs only)"
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Compare the bit-level model against the cast-based model per case",
    )
    parser.add_argument(
        "--rtl",
        nargs="+",
        type=Path,
        default=None,
        help="HDL sources of the multiplier; omit for an in-process loopback run",
    )
    parser.add_argument(
        "--toplevel", default="fmul", help="HDL toplevel name (default: fmul)"
    )
    parser.add_argument(
        "--sim", default="verilator", help="cocotb simulator (default: verilator)"
    )
    parser.add_argument(
        "--build-dir",
        type=Path,
        default=Path("sim_build"),
        help="Simulator build directory (default: sim_build)",
    )
    return parser


def run_loopback(config: RunConfig) -> int:
    """Run the regression against the in-process pipeline model.

    Returns:
        Process exit status
    """
    if config.trace:
        log.warning("--trace has no effect without --rtl; no waveform is produced")
    harness = MultiplierHarness(FmulPipelineModel(), config)
    harness.run()
    return harness.exit_code()


def run_simulator(
    config: RunConfig,
    sources: list[Path],
    toplevel: str,
    simulator: str,
    build_dir: Path,
) -> int:
    """Build the RTL and run the cocotb regression in a simulator.

    Args:
        config: Run configuration, exported to the test via the environment
        sources: HDL source files
        toplevel: HDL toplevel module name
        simulator: cocotb simulator name (verilator, icarus, ...)
        build_dir: Build and results directory

    Returns:
        Process exit status
    """
    missing = [str(path) for path in sources if not path.is_file()]
    if missing:
        log.error(f"HDL source not found: {', '.join(missing)}")
        return 2

    from cocotb_tools.check_results import get_results
    from cocotb_tools.runner import get_runner

    runner = get_runner(simulator)
    runner.build(
        sources=sources,
        hdl_toplevel=toplevel,
        build_dir=build_dir,
        always=True,
        waves=config.trace,
    )
    results_xml = runner.test(
        hdl_toplevel=toplevel,
        test_module=COCOTB_TEST_MODULE,
        extra_env=config.to_env(),
        waves=config.trace,
        seed=config.seed & 0xFFFFFFFF,
    )

    num_tests, num_failed = get_results(Path(results_xml))
    log.info(f"cocotb: {num_tests} test(s), {num_failed} failed")
    return 0 if num_tests > 0 and num_failed == 0 else 1


def main(argv: list[str] | None = None) -> int:
    """Parse options, run the regression and return the exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    try:
        config = RunConfig.from_args(args)
    except (VerificationError, AssertionError) as e:
        log.error(f"Invalid configuration: {e}")
        return 2

    if args.rtl is None:
        return run_loopback(config)
    return run_simulator(config, args.rtl, args.toplevel, args.sim, args.build_dir)


if __name__ == "__main__":
    sys.exit(main())
