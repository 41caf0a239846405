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
"""Operators on a single fermionic mode."""
import numpy

from quantumops.ops.operators.abstract_op import AbstractOp
from quantumops.ops.operators.phase import Phase

# Nonzero products of non-identity operators, as (sign, result). Products
# that are missing here vanish. The sign is only needed for products with
# the diagonal operator Z = N - E.
_FERMI_OPERATOR_PRODUCTS = {
    ('N', 'N'): (1, 'N'),
    ('N', '+'): (1, '+'),
    ('N', 'Z'): (1, 'N'),
    ('E', 'E'): (1, 'E'),
    ('E', '-'): (1, '-'),
    ('E', 'Z'): (-1, 'E'),
    ('+', 'E'): (1, '+'),
    ('+', '-'): (1, 'N'),
    ('+', 'Z'): (-1, '+'),
    ('-', 'N'): (1, '-'),
    ('-', '+'): (1, 'E'),
    ('-', 'Z'): (1, '-'),
    ('Z', 'N'): (1, 'N'),
    ('Z', 'E'): (-1, 'E'),
    ('Z', '+'): (1, '+'),
    ('Z', '-'): (-1, '-'),
    ('Z', 'Z'): (1, 'I'),
}

# Matrices in the occupation basis (|0> empty, |1> occupied).
_FERMI_MATRICES = {
    'I': ((1, 0), (0, 1)),
    'N': ((0, 0), (0, 1)),
    'E': ((1, 0), (0, 0)),
    '+': ((0, 0), (1, 0)),
    '-': ((0, 1), (0, 0)),
    '0': ((0, 0), (0, 0)),
    'Z': ((-1, 0), (0, 1)),
}


class FermiOp(AbstractOp):
    """An operator on one fermionic mode.

    The alphabet, with index and label, is

    ====== ===== ===========================================
    index  label meaning
    ====== ===== ===========================================
    0      I     identity
    1      N     number operator a^dagger a
    2      E     complement of the number operator, 1 - N
    3      +     raising operator a^dagger
    4      -     lowering operator a
    5      0     zero
    6      Z     N - E
    ====== ===== ===========================================

    Zero absorbs everything it multiplies. Products carry the phase +1
    except Z * E, E * Z, + * Z and Z * -, which carry -1 (e.g. Z * E = -E
    since (N - E) E = -E). This departs from the convention in which every
    Fermi product has phase +1: with it the table matches the matrices, so
    FermiTerm('Z') * FermiTerm('E') == FermiTerm('E', -1) and the
    Jordan-Wigner image of a product of even terms is the product of their
    images.
    """

    __slots__ = ('_index',)
    labels = 'INE+-0Z'

    @classmethod
    def _make(cls, index):
        fermi_op = object.__new__(cls)
        fermi_op._index = index
        return fermi_op

    @property
    def index(self):
        return self._index

    @property
    def parity(self):
        """1 for the raising and lowering operators, 0 for the others."""
        return 1 if self._index in (3, 4) else 0

    def is_zero(self):
        return self._index == 5

    def mul_with_phase(self, other):
        self._check_same_alphabet(other)
        return _PRODUCTS[self._index][other._index]

    def adjoint(self):
        if self._index == 3:
            return Lower
        if self._index == 4:
            return Raise
        return self

    def matrix(self):
        return numpy.array(_FERMI_MATRICES[self.label], dtype=complex)


FermiOp._values = tuple(FermiOp._make(index) for index in range(7))


def _product(left, right):
    if left == 'I':
        return FermiOp.from_label(right), Phase.ONE
    if right == 'I':
        return FermiOp.from_label(left), Phase.ONE
    sign, result = _FERMI_OPERATOR_PRODUCTS.get((left, right), (1, '0'))
    return FermiOp.from_label(result), Phase(sign)


_PRODUCTS = tuple(tuple(_product(a, b) for b in FermiOp.labels) for a in FermiOp.labels)

(Identity, NumberOp, EmptyOp, Raise, Lower, ZeroOp, NumberMinusEmpty) = FermiOp._values
