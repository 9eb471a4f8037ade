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

"""Compare DUT outputs against the reference multiplier result."""

import enum
from dataclasses import dataclass

from fmul_verif.harness.dut_interface import DutOutputs
from fmul_verif.models.fmul_model import MultiplyResult


class MismatchKind(enum.Enum):
    """What differed between DUT and reference."""

    NONE = "none"
    VALUE_MISMATCH = "value"
    FLAG_MISMATCH = "flags"
    BOTH = "both"


@dataclass(frozen=True)
class Verdict:
    """Outcome of one comparison.

    ``mismatch_kind`` always describes the raw comparison. ``ok`` only
    counts flag differences when flag checking is enabled, so a case can be
    ok while its mismatch kind is FLAG_MISMATCH.
    """

    ok: bool
    mismatch_kind: MismatchKind

    @property
    def value_ok(self) -> bool:
        """Output patterns matched exactly."""
        return self.mismatch_kind in (MismatchKind.NONE, MismatchKind.FLAG_MISMATCH)

    @property
    def flags_ok(self) -> bool:
        """All four status flags matched."""
        return self.mismatch_kind in (MismatchKind.NONE, MismatchKind.VALUE_MISMATCH)


def compare(
    expected: MultiplyResult, actual: DutOutputs, check_flags: bool
) -> Verdict:
    """Diff DUT outputs against the reference result.

    Args:
        expected: Reference multiplier result
        actual: Outputs sampled from the DUT
        check_flags: Whether flag mismatches make the case fail

    Returns:
        Verdict for the case
    """
    value_ok = int(actual.y) == int(expected.y)
    flags_ok = tuple(bool(f) for f in actual.flags) == expected.flags

    if value_ok and flags_ok:
        kind = MismatchKind.NONE
    elif flags_ok:
        kind = MismatchKind.VALUE_MISMATCH
    elif value_ok:
        kind = MismatchKind.FLAG_MISMATCH
    else:
        kind = MismatchKind.BOTH

    ok = value_ok and (flags_ok or not check_flags)
    return Verdict(ok, kind)
