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
"""Pauli operators encoded by their integer index."""
from quantumops.ops.operators.abstract_op import AbstractPauli
from quantumops.ops.operators.phase import Phase

# Define products of all Pauli operators for symbolic multiplication.
_PAULI_OPERATOR_PRODUCTS = {
    ('I', 'I'): (1., 'I'),
    ('I', 'X'): (1., 'X'),
    ('X', 'I'): (1., 'X'),
    ('I', 'Y'): (1., 'Y'),
    ('Y', 'I'): (1., 'Y'),
    ('I', 'Z'): (1., 'Z'),
    ('Z', 'I'): (1., 'Z'),
    ('X', 'X'): (1., 'I'),
    ('Y', 'Y'): (1., 'I'),
    ('Z', 'Z'): (1., 'I'),
    ('X', 'Y'): (1.j, 'Z'),
    ('X', 'Z'): (-1.j, 'Y'),
    ('Y', 'X'): (-1.j, 'Z'),
    ('Y', 'Z'): (1.j, 'X'),
    ('Z', 'X'): (1.j, 'Y'),
    ('Z', 'Y'): (-1.j, 'X'),
}

_PAULI_MATRICES = {
    'I': ((1, 0), (0, 1)),
    'X': ((0, 1), (1, 0)),
    'Y': ((0, -1j), (1j, 0)),
    'Z': ((1, 0), (0, -1)),
}


class PauliI(AbstractPauli):
    """A single-qubit Pauli operator stored as its index 0, 1, 2 or 3.

    This encoding is interchangeable with Pauli; products are read from a
    lookup table instead of being computed from bits.
    """

    __slots__ = ('_index',)

    @classmethod
    def _make(cls, index):
        pauli = object.__new__(cls)
        pauli._index = index
        return pauli

    @property
    def index(self):
        return self._index

    def mul_with_phase(self, other):
        self._check_same_alphabet(other)
        return _PRODUCTS[self._index][other._index]

    def phase_matrix(self):
        return _PHASE_MATRICES[self._index]


PauliI._values = tuple(PauliI._make(index) for index in range(4))

_PRODUCTS = tuple(
    tuple((PauliI.from_label(_PAULI_OPERATOR_PRODUCTS[a, b][1]),
           Phase(_PAULI_OPERATOR_PRODUCTS[a, b][0])) for b in PauliI.labels)
    for a in PauliI.labels)
_PHASE_MATRICES = tuple(
    tuple(tuple(Phase(entry) for entry in row) for row in _PAULI_MATRICES[label])
    for label in PauliI.labels)

I, X, Y, Z = PauliI._values
