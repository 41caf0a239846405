#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

from .phase import Phase, PhaseConflict

from .abstract_op import AbstractOp, AbstractPauli, InvalidLabel, InvalidOperator

from .pauli import Pauli

from .pauli_index import PauliI

from .fermi_op import FermiOp

from .op_term import (
    FermiTerm,
    LengthMismatch,
    OpTerm,
    PauliTerm,
    UnsupportedMixedStorage,
    dense_op,
    sparse_op,
)

from .op_sum import FermiSum, OpSum, PauliSum, sum_class_for
