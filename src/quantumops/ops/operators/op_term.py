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
"""OpTerm stores a string of single-site operators and a coefficient."""
import numbers
import types

import sympy

from quantumops.config import EQ_TOLERANCE
from quantumops.ops.operators.abstract_op import AbstractOp, AbstractPauli
from quantumops.ops.operators.fermi_op import FermiOp
from quantumops.ops.operators.pauli import Pauli
from quantumops.ops.operators.phase import Phase

COEFFICIENT_TYPES = (numbers.Number, sympy.Basic)


class LengthMismatch(ValueError):
    pass


class UnsupportedMixedStorage(TypeError):
    pass


def _conjugate(coefficient):
    conjugate = getattr(coefficient, 'conjugate', None)
    if conjugate is None:
        return coefficient
    return conjugate()


def _infer_op_type(ops):
    values = ops.values() if isinstance(ops, dict) else ops
    for value in values:
        if isinstance(value, AbstractOp):
            return type(value)
    raise ValueError('Cannot infer the operator type of {!r}; pass op_type.'.format(ops))


class OpTerm(object):
    """A product of single-site operators, one per site, times a coefficient.

    A term on n sites is written as

        coefficient * op[0] op[1] ... op[n-1]

    where op[j] is a value of one alphabet (the op_type), e.g. Pauli or
    FermiOp. For fermionic terms the factors are understood to be in
    ascending site order, so FermiTerm('+-INE') is a^dagger_0 a_1 N_3 E_4.

    The string is stored either densely, as a tuple holding one value per
    site, or sparsely, as a dict from site to value where the identity is
    never stored. Both storages describe the same operator and compare
    equal; converting between them is lossless.

    The coefficient may be of any type that supports + and *, e.g. int,
    float, complex, fractions.Fraction or a sympy expression. It defaults to
    the integer 1.

    Terms are treated as immutable: arithmetic returns new terms. The only
    exception is OpSum, which updates the coefficient of a term it owns in
    place.

    Example:
        .. code-block:: python

            PauliTerm('XIYIZ') * PauliTerm('YXIZZ')  # 1j [ZXYZI]
            FermiTerm('+-', 0.5, sparse=True)

    Attributes:
        op_type (type): The alphabet of the operators, a subclass of
            AbstractOp.
        n_sites (int): The length of the operator string.
        coefficient: The coefficient of the term.
    """

    default_op_type = None

    def __init__(self, ops=(), coefficient=1, op_type=None, n_sites=None, sparse=False):
        """
        Args:
            ops: The operator string. One of
                a string with one label per site, e.g. 'XIZ' or '+-N';
                a sequence of operator values or integer indices;
                a dict from site to operator value, index or label, in which
                case n_sites is required.
            coefficient: The coefficient of the term.
            op_type (type): The alphabet. Inferred from the values in ops
                when not given.
            n_sites (int): The expected length of the string.
            sparse (bool): Whether to store the string sparsely.

        Raises:
            InvalidLabel: An unrecognized label character.
            InvalidOperator: An index outside the alphabet.
            LengthMismatch: The string length disagrees with n_sites, or a
                site of a dict lies outside range(n_sites).
        """
        if op_type is None:
            op_type = self.default_op_type or _infer_op_type(ops)
        if not (isinstance(op_type, type) and issubclass(op_type, AbstractOp)):
            raise TypeError('op_type must be a subclass of AbstractOp, not {!r}.'.format(op_type))
        self.op_type = op_type
        self.coefficient = coefficient
        self._sparse = bool(sparse)

        if isinstance(ops, dict):
            if n_sites is None:
                raise ValueError('n_sites is required to build a term from a dict.')
            sparse_ops = {}
            for site, value in ops.items():
                if (not isinstance(site, numbers.Integral) or isinstance(site, bool) or
                        not 0 <= site < n_sites):
                    raise LengthMismatch('Site {!r} is outside a string of length {}.'.format(
                        site, n_sites))
                value = op_type.coerce(value)
                if not value.is_identity():
                    sparse_ops[int(site)] = value
            self.n_sites = n_sites
            if self._sparse:
                self._ops = sparse_ops
            else:
                self._ops = _densify(sparse_ops, n_sites, op_type)
            return

        if isinstance(ops, str):
            values = tuple(op_type.from_label(label) for label in ops)
        else:
            values = tuple(op_type.coerce(value) for value in ops)
        if n_sites is not None and len(values) != n_sites:
            raise LengthMismatch('Got {} operators for a string of length {}.'.format(
                len(values), n_sites))
        self.n_sites = len(values)
        if self._sparse:
            self._ops = _sparsify(values)
        else:
            self._ops = values

    @classmethod
    def _from_storage(cls, op_type, ops, coefficient, n_sites, sparse):
        """Build a term from already validated storage, without copying."""
        term = cls.__new__(cls)
        term.op_type = op_type
        term.coefficient = coefficient
        term.n_sites = n_sites
        term._sparse = sparse
        term._ops = ops
        return term

    def _new(self, ops, coefficient, sparse=None):
        if sparse is None:
            sparse = self._sparse
        return type(self)._from_storage(self.op_type, ops, coefficient, self.n_sites, sparse)

    @classmethod
    def identity(cls, n_sites, coefficient=1, op_type=None, sparse=False):
        """The identity string on n_sites sites."""
        op_type = op_type or cls.default_op_type
        if op_type is None:
            raise ValueError('op_type is required.')
        if sparse:
            ops = {}
        else:
            ops = (op_type.identity(),) * n_sites
        return cls._from_storage(op_type, ops, coefficient, n_sites, bool(sparse))

    @property
    def is_sparse(self):
        return self._sparse

    @property
    def ops(self):
        """The stored string: a tuple, or a read-only mapping when sparse."""
        if self._sparse:
            return types.MappingProxyType(self._ops)
        return self._ops

    def dense_ops(self):
        """The operator string as a tuple with one value per site."""
        if self._sparse:
            return _densify(self._ops, self.n_sites, self.op_type)
        return self._ops

    def sparse_ops(self):
        """The non-identity operators as a new dict from site to value."""
        if self._sparse:
            return dict(self._ops)
        return _sparsify(self._ops)

    def labels(self):
        """The operator string as a label string, e.g. 'XIZ'."""
        return ''.join(op.label for op in self.dense_ops())

    def canonical_key(self):
        """A key that orders terms by their operator string only.

        The key is the tuple of alphabet indices, so comparing keys is the
        same as comparing the strings read as base-len(alphabet) integers.
        """
        if self._sparse:
            key = [0] * self.n_sites
            for site, op in self._ops.items():
                key[site] = op.index
            return tuple(key)
        return tuple(op.index for op in self._ops)

    def to_dense(self):
        return self._new(self.dense_ops(), self.coefficient, sparse=False)

    def to_sparse(self):
        return self._new(self.sparse_ops(), self.coefficient, sparse=True)

    def copy(self):
        ops = dict(self._ops) if self._sparse else self._ops
        return self._new(ops, self.coefficient)

    def weight(self):
        """The number of sites with a non-identity operator."""
        if self._sparse:
            return len(self._ops)
        return sum(1 for op in self._ops if not op.is_identity())

    def iszero(self):
        """Whether the term vanishes: a zero coefficient or a zero factor."""
        if self.coefficient == 0:
            return True
        values = self._ops.values() if self._sparse else self._ops
        return any(op.is_zero() for op in values)

    def __len__(self):
        return self.n_sites

    def __iter__(self):
        return iter(self.dense_ops())

    def __getitem__(self, site):
        if self._sparse:
            if not -self.n_sites <= site < self.n_sites:
                raise IndexError('Site {} is outside a string of length {}.'.format(
                    site, self.n_sites))
            return self._ops.get(site % self.n_sites, self.op_type.identity())
        return self._ops[site]

    def _check_compatible(self, other):
        if other.op_type is not self.op_type:
            raise UnsupportedMixedStorage('Cannot combine a term of {} with a term of {}.'.format(
                self.op_type.__name__, other.op_type.__name__))
        if other._sparse != self._sparse:
            raise UnsupportedMixedStorage(
                'Cannot combine a sparse term with a dense term; convert one of them first.')
        if other.n_sites != self.n_sites:
            raise LengthMismatch('Cannot combine terms of lengths {} and {}.'.format(
                self.n_sites, other.n_sites))

    def _multiply(self, other):
        self._check_compatible(other)
        phase = Phase.ONE
        vanishes = False
        if self._sparse:
            ops = dict(self._ops)
            for site, right in other._ops.items():
                left = ops.get(site)
                if left is None:
                    ops[site] = right
                    continue
                op, factor = left.mul_with_phase(right)
                phase *= factor
                if op.is_identity():
                    del ops[site]
                else:
                    ops[site] = op
            vanishes = any(op.is_zero() for op in ops.values())
        else:
            products = []
            for left, right in zip(self._ops, other._ops):
                op, factor = left.mul_with_phase(right)
                phase *= factor
                vanishes = vanishes or op.is_zero()
                products.append(op)
            ops = tuple(products)

        coefficient = self.coefficient * other.coefficient
        if vanishes:
            coefficient = coefficient * 0
        else:
            coefficient = phase.apply(coefficient)
        return self._new(ops, coefficient)

    def __mul__(self, multiplier):
        """Return self * multiplier for a term of the same kind or a scalar.

        Raises:
            UnsupportedMixedStorage: The terms differ in alphabet or in
                storage mode.
            LengthMismatch: The terms differ in length.
            TypeError: Object of invalid type cannot multiply with OpTerm.
        """
        if isinstance(multiplier, OpTerm):
            return self._multiply(multiplier)
        from quantumops.ops.operators.op_sum import OpSum
        if isinstance(multiplier, OpSum):
            return NotImplemented
        if not isinstance(multiplier, COEFFICIENT_TYPES):
            raise TypeError('Object of invalid type cannot multiply with {}.'.format(
                type(self).__name__))
        return self._new(self._storage_copy(), self.coefficient * multiplier)

    def __rmul__(self, multiplier):
        if not isinstance(multiplier, COEFFICIENT_TYPES):
            raise TypeError('Object of invalid type cannot multiply with {}.'.format(
                type(self).__name__))
        return self._new(self._storage_copy(), multiplier * self.coefficient)

    def __truediv__(self, divisor):
        if not isinstance(divisor, COEFFICIENT_TYPES):
            raise TypeError('Cannot divide {} by non-scalar type.'.format(type(self).__name__))
        return self._new(self._storage_copy(), self.coefficient / divisor)

    def __neg__(self):
        return self._new(self._storage_copy(), -self.coefficient)

    def __pow__(self, exponent):
        if not isinstance(exponent, int) or exponent < 0:
            raise ValueError('exponent must be a non-negative int, but was {} {}'.format(
                type(exponent), repr(exponent)))
        result = type(self).identity(self.n_sites, op_type=self.op_type, sparse=self._sparse)
        for _ in range(exponent):
            result = result * self
        return result

    def _storage_copy(self):
        return dict(self._ops) if self._sparse else self._ops

    def __add__(self, addend):
        from quantumops.ops.operators.op_sum import OpSum
        if not isinstance(addend, (OpTerm, OpSum)):
            return NotImplemented
        summand = OpSum.from_term(self)
        summand += addend
        return summand

    def __radd__(self, addend):
        # Allows the builtin sum() over terms, which starts from 0.
        if isinstance(addend, numbers.Number) and addend == 0:
            from quantumops.ops.operators.op_sum import OpSum
            return OpSum.from_term(self)
        return NotImplemented

    def __sub__(self, subtrahend):
        from quantumops.ops.operators.op_sum import OpSum
        if not isinstance(subtrahend, (OpTerm, OpSum)):
            return NotImplemented
        minuend = OpSum.from_term(self)
        minuend -= subtrahend
        return minuend

    def __eq__(self, other):
        if not isinstance(other, OpTerm):
            return NotImplemented
        return (self.op_type is other.op_type and self.n_sites == other.n_sites and
                self.canonical_key() == other.canonical_key() and
                bool(self.coefficient == other.coefficient))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def isclose(self, other, rel_tol=EQ_TOLERANCE, abs_tol=EQ_TOLERANCE):
        """Whether other has the same string and a close coefficient."""
        if not isinstance(other, OpTerm):
            raise TypeError('Cannot compare a {} with a {}'.format(
                type(self).__name__, type(other).__name__))
        if (self.op_type is not other.op_type or self.n_sites != other.n_sites or
                self.canonical_key() != other.canonical_key()):
            return False
        a, b = self.coefficient, other.coefficient
        return abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    def adjoint(self):
        """Return the Hermitian conjugate of the term.

        The coefficient is conjugated and every factor is replaced by its
        adjoint. Reversing a product of fermionic factors and restoring
        ascending site order moves the k fermion-odd factors past each other,
        which gives the sign (-1)^(k (k - 1) / 2).
        """
        if self._sparse:
            ops = {site: op.adjoint() for site, op in self._ops.items()}
            n_odd = sum(op.parity for op in self._ops.values())
        else:
            ops = tuple(op.adjoint() for op in self._ops)
            n_odd = sum(op.parity for op in self._ops)
        coefficient = _conjugate(self.coefficient)
        if (n_odd * (n_odd - 1) // 2) % 2:
            coefficient = -coefficient
        return self._new(ops, coefficient)

    def commutes(self, other):
        """Whether two Pauli terms commute.

        Two Pauli strings commute when the number of sites on which their
        operators anticommute is even.
        """
        if not issubclass(self.op_type, AbstractPauli):
            raise TypeError('commutes is only defined for Pauli terms.')
        self._check_compatible(other)
        anticommuting = sum(
            1 for left, right in zip(self.dense_ops(), other.dense_ops())
            if not left.commutes(right))
        return anticommuting % 2 == 0

    def __str__(self):
        if self._sparse:
            factors = ' '.join('{}{}'.format(self._ops[site].label, site)
                               for site in sorted(self._ops))
            return '{} [{}]'.format(self.coefficient, factors)
        return '{} [{}]'.format(self.coefficient, self.labels())

    def __repr__(self):
        arguments = [repr(self.labels()), repr(self.coefficient)]
        if self.op_type is not self.default_op_type:
            arguments.append('op_type={}'.format(self.op_type.__name__))
        if self._sparse:
            arguments.append('sparse=True')
        return '{}({})'.format(type(self).__name__, ', '.join(arguments))


class PauliTerm(OpTerm):
    """An OpTerm of Pauli operators.

    The encoding defaults to Pauli; PauliI is accepted as op_type.
    """

    default_op_type = Pauli

    def __init__(self, ops=(), coefficient=1, op_type=None, n_sites=None, sparse=False):
        if op_type is not None and not (isinstance(op_type, type) and
                                        issubclass(op_type, AbstractPauli)):
            raise TypeError('The op_type of a PauliTerm must be a Pauli encoding.')
        super(PauliTerm, self).__init__(ops, coefficient, op_type, n_sites, sparse)


class FermiTerm(OpTerm):
    """An OpTerm of fermionic operators (FermiOp)."""

    default_op_type = FermiOp

    def __init__(self, ops=(), coefficient=1, op_type=None, n_sites=None, sparse=False):
        if op_type is not None and op_type is not FermiOp:
            raise TypeError('The op_type of a FermiTerm must be FermiOp.')
        super(FermiTerm, self).__init__(ops, coefficient, op_type, n_sites, sparse)


def sparse_op(term):
    """Return a copy of a term (or sum) that stores its strings sparsely."""
    return term.to_sparse()


def dense_op(term):
    """Return a copy of a term (or sum) that stores its strings densely."""
    return term.to_dense()


def _sparsify(values):
    return {site: op for site, op in enumerate(values) if not op.is_identity()}


def _densify(sparse_ops, n_sites, op_type):
    values = [op_type.identity()] * n_sites
    for site, op in sparse_ops.items():
        values[site] = op
    return tuple(values)
