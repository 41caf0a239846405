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
"""Base classes for the alphabets of single-site operators."""
import numbers

import numpy


class InvalidOperator(ValueError):
    pass


class InvalidLabel(InvalidOperator):
    pass


class AbstractOp(object):
    """A value from a small, closed alphabet of operators on a single site.

    Subclasses define the alphabet. Every value has an integer index and a
    one-character label, and the values of one alphabet are interned
    singletons, so they compare by identity and may be used as dict keys.

    The product of two values is again a value of the alphabet, up to a
    factor returned as a Phase by mul_with_phase. The * operator drops that
    factor::

        X * Y  # Z, the phase i is not tracked

    Subclasses must set:
        labels (str): The label of each value, in index order.
        _values (tuple): The interned values, in index order. The value of
            index 0 is the identity.
    """

    __slots__ = ()
    labels = ''
    _values = ()

    @classmethod
    def alphabet(cls):
        """All values of the alphabet in index order."""
        return cls._values

    @classmethod
    def identity(cls):
        return cls._values[0]

    @classmethod
    def from_index(cls, index):
        if (not isinstance(index, numbers.Integral) or isinstance(index, bool) or
                not 0 <= index < len(cls._values)):
            raise InvalidOperator('Invalid index {!r} for {}. Valid indices are 0 to {}.'.format(
                index, cls.__name__, len(cls._values) - 1))
        return cls._values[int(index)]

    @classmethod
    def from_label(cls, label):
        if not isinstance(label, str) or len(label) != 1 or label not in cls.labels:
            raise InvalidLabel('Invalid label {!r} for {}. Valid labels are: {}'.format(
                label, cls.__name__, ', '.join(cls.labels)))
        return cls._values[cls.labels.index(label)]

    @classmethod
    def coerce(cls, value):
        """Return the value of this alphabet given by a value, index or label."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_label(value)
        if isinstance(value, AbstractOp):
            raise InvalidOperator('Expected a {} value, got the {} value {}.'.format(
                cls.__name__, type(value).__name__, value))
        return cls.from_index(value)

    @property
    def index(self):
        raise NotImplementedError

    @property
    def label(self):
        return self.labels[self.index]

    def mul_with_phase(self, other):
        """Return the product self * other as a pair (value, phase)."""
        raise NotImplementedError

    def _check_same_alphabet(self, other):
        if type(other) is not type(self):
            raise TypeError('Cannot multiply {} with {}.'.format(
                type(self).__name__, type(other).__name__))

    def __mul__(self, other):
        if not isinstance(other, AbstractOp):
            return NotImplemented
        return self.mul_with_phase(other)[0]

    @property
    def parity(self):
        """1 if the operator is fermion-odd, 0 otherwise."""
        return 0

    def adjoint(self):
        return self

    def is_identity(self):
        return self.index == 0

    def is_zero(self):
        return False

    def __reduce__(self):
        return type(self).from_index, (self.index,)

    def __str__(self):
        return self.label

    def __repr__(self):
        return '{}.from_label({!r})'.format(type(self).__name__, self.label)


class AbstractPauli(AbstractOp):
    """Capability shared by the encodings of the single-qubit Pauli operators.

    Terms, sums and transforms only use the methods defined here, so any
    encoding may be used in their place.
    """

    __slots__ = ()
    labels = 'IXYZ'

    def phase_matrix(self):
        """The 2 x 2 matrix of the operator as nested tuples of Phase values."""
        raise NotImplementedError

    def matrix(self):
        return numpy.array([[complex(entry) for entry in row] for row in self.phase_matrix()],
                           dtype=complex)

    def commutes(self, other):
        self._check_same_alphabet(other)
        return self.is_identity() or other.is_identity() or self is other
