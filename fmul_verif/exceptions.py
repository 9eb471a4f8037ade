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

"""Custom exceptions for verification errors.

Exceptions
==========

This module defines a hierarchy of exception types for the verification
framework. The reference multiplier itself never raises: every operand pair
has a well-defined result. These exceptions cover the plumbing around it
(run configuration, simulator-driven test outcome).
"""


class VerificationError(Exception):
    """Base exception for all verification-related failures.

    All verification-specific exceptions inherit from this base class,
    allowing callers to catch all verification errors with a single handler.
    """

    pass


class ConfigurationError(VerificationError):
    """Malformed run configuration.

    Raised when a run configuration value read from the environment cannot
    be parsed (e.g. a non-numeric random test count).
    """

    def __init__(self, message: str, variable: str | None = None):
        """Initialize configuration error with the offending variable.

        Args:
            message: Error description
            variable: Name of the environment variable or option at fault
        """
        super().__init__(message)
        self.variable = variable


class MismatchError(VerificationError):
    """Hardware-software mismatch detected.

    Raised at the end of a simulator run when the DUT output differed from
    the reference multiplier for at least one test case.
    """

    def __init__(
        self,
        message: str,
        expected_value: int | None = None,
        actual_value: int | None = None,
        cycle: int | None = None,
    ):
        """Initialize mismatch error with comparison context.

        Args:
            message: Error description
            expected_value: Expected value from software model
            actual_value: Actual value from hardware
            cycle: Simulation tick when mismatch occurred
        """
        super().__init__(message)
        self.expected_value = expected_value
        self.actual_value = actual_value
        self.cycle = cycle
