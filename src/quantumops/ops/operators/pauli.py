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
"""Pauli operators encoded by a pair of bits."""
from quantumops.ops.operators.abstract_op import AbstractPauli
from quantumops.ops.operators.phase import Phase

# Single-qubit matrices of X and Z as Phase values.
_PHASE_IDENTITY = ((Phase.ONE, Phase.ZERO), (Phase.ZERO, Phase.ONE))
_PHASE_X = ((Phase.ZERO, Phase.ONE), (Phase.ONE, Phase.ZERO))
_PHASE_Z = ((Phase.ONE, Phase.ZERO), (Phase.ZERO, Phase.MINUS_ONE))


def _phase_matmul(left, right):
    # Each sum has at most one nonzero contribution; Phase.add checks it.
    return tuple(
        tuple(
            sum((left[row][k] * right[k][col] for k in range(2)), Phase.ZERO)
            for col in range(2))
        for row in range(2))


class Pauli(AbstractPauli):
    r"""A single-qubit Pauli operator stored as the bits (x, z).

    The operator represented is i^{x z} X^x Z^z, so that I = (0, 0),
    X = (1, 0), Y = (1, 1) and Z = (0, 1). Products are computed from the
    bits: the result is (x1 ^ x2, z1 ^ z2) and the phase is

        i^{x1 z1 + x2 z2 - x3 z3 + 2 z1 x2}.

    Values are created with ``Pauli.from_index``, ``Pauli.from_label``,
    ``Pauli.from_bits``, or imported as ``I, X, Y, Z`` from this module.
    """

    __slots__ = ('x', 'z', '_index')

    @classmethod
    def _make(cls, x, z, index):
        pauli = object.__new__(cls)
        pauli.x = x
        pauli.z = z
        pauli._index = index
        return pauli

    @classmethod
    def from_bits(cls, x, z):
        return _BY_BITS[x & 1, z & 1]

    @property
    def index(self):
        return self._index

    def mul_with_phase(self, other):
        self._check_same_alphabet(other)
        x = self.x ^ other.x
        z = self.z ^ other.z
        power = self.x * self.z + other.x * other.z - x * z + 2 * self.z * other.x
        return _BY_BITS[x, z], Phase.from_power(power)

    def phase_matrix(self):
        matrix = _phase_matmul(_PHASE_X if self.x else _PHASE_IDENTITY,
                               _PHASE_Z if self.z else _PHASE_IDENTITY)
        factor = Phase.from_power(self.x * self.z)
        return tuple(tuple(factor * entry for entry in row) for row in matrix)


Pauli._values = (Pauli._make(0, 0, 0), Pauli._make(1, 0, 1), Pauli._make(1, 1, 2),
                 Pauli._make(0, 1, 3))
_BY_BITS = {(pauli.x, pauli.z): pauli for pauli in Pauli._values}

I, X, Y, Z = Pauli._values
