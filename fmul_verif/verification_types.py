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

"""Type aliases and custom types for verification framework.

Types
=====

This module defines type aliases and NewTypes for better type safety and
code clarity throughout the multiplier verification framework.
"""

from typing import NewType

# Operand/result types
FloatBits = NewType("FloatBits", int)
"""Raw 32-bit binary32 pattern (0 to 2^32-1). No implicit interpretation."""

BiasedExponent = NewType("BiasedExponent", int)
"""8-bit biased exponent field (0-255)."""

Fraction = NewType("Fraction", int)
"""23-bit fraction field (hidden bit not included)."""

Significand = NewType("Significand", int)
"""24-bit significand with the hidden bit made explicit."""

# Simulation counters
TickCount = NewType("TickCount", int)
"""Number of DUT clock ticks advanced."""
