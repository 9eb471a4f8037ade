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

"""Utility functions for the verification framework.

Modules
-------
fp_case_logger
    Structured logging for multiplier test cases:
    - Operand/result blocks with hex, value and field breakdown
    - Mismatch and cross-check divergence lines
    - Run summary

validation
    Enhanced assertion utilities:
    - ValidationError carrying a context dict
    - Range and bit-width checks
"""

from fmul_verif.utils.validation import (
    ValidationError,
    assert_bit_width,
    assert_in_range,
)

# Note: FpCaseLogger is not imported at package level to avoid circular imports.
# Import directly when needed: from fmul_verif.utils.fp_case_logger import FpCaseLogger

__all__ = [
    "ValidationError",
    "assert_bit_width",
    "assert_in_range",
]
