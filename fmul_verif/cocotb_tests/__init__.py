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

"""CoCoTB test cases for the multiplier RTL.

Test Modules
------------
    test_fmul
        Directed + seeded random regression against the reference model

Infrastructure:
    cocotb_interface
        CocotbFmulInterface: drives operands, advances ticks, samples outputs

Running Tests
-------------
Through the command line runner, which builds the RTL and exports the run
configuration::

    fmul-verif --rtl rtl/fmul.sv --n 200000
"""

from fmul_verif.cocotb_tests.cocotb_interface import CocotbFmulInterface

__all__ = [
    "CocotbFmulInterface",
]
