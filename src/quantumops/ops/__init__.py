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
"""
This module contains the single-site operator alphabets, the phase algebra,
and the term and sum types built on them, together with representations
that store operators as coefficient tensors.
"""
from .operators import (
    AbstractOp,
    AbstractPauli,
    FermiOp,
    FermiSum,
    FermiTerm,
    InvalidLabel,
    InvalidOperator,
    LengthMismatch,
    OpSum,
    OpTerm,
    Pauli,
    PauliI,
    PauliSum,
    PauliTerm,
    Phase,
    PhaseConflict,
    UnsupportedMixedStorage,
    dense_op,
    sparse_op,
    sum_class_for,
)

from .representations import (
    DimensionMismatch,
    InteractionOperator,
    get_tensors_from_integrals,
)
