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
"""OpSum stores a sum of OpTerms in canonical order."""
import bisect
import numbers

from quantumops.config import EQ_TOLERANCE
from quantumops.ops.operators.abstract_op import AbstractOp, AbstractPauli
from quantumops.ops.operators.fermi_op import FermiOp
from quantumops.ops.operators.op_term import (COEFFICIENT_TYPES, FermiTerm, LengthMismatch, OpTerm,
                                              PauliTerm, UnsupportedMixedStorage)


def _is_additive_identity(coefficient):
    return bool(coefficient == 0)


class OpSum(object):
    """A linear combination of OpTerms of a single kind.

    The terms are kept sorted by OpTerm.canonical_key and no two of them
    share an operator string. A term whose coefficient becomes exactly zero
    is removed, and terms with a zero coefficient or a zero factor are never
    stored.

    Storage is a list of terms with a parallel list of keys. Adding a term
    finds its place by binary search, O(log n), and inserting or deleting
    shifts the tail of the list, O(n). Multiplying two sums costs
    len(s1) * len(s2) term products, each inserted into the result as soon
    as it is computed, so cancellations happen early and the result never
    holds more than one entry per operator string.

    The terms of a sum share an alphabet (op_type), a length (n_sites) and
    a storage mode. An empty sum adopts these from the first term added
    unless they were given to the constructor.

    Example:
        .. code-block:: python

            ham = PauliSum([('XX', 0.5), ('ZZ', 0.25), ('XX', 0.5)])
            # 1.0 [XX] +
            # 0.25 [ZZ]
            ham.add(PauliTerm('ZZ', -0.25))
            # 1.0 [XX]
    """

    term_class = OpTerm
    _op_type_base = AbstractOp

    def __init__(self, terms=None, op_type=None, n_sites=None, sparse=None):
        """
        Args:
            terms: An iterable of OpTerms or of (ops, coefficient) pairs,
                where ops is anything the term constructor accepts. Terms
                with the same string are merged by adding coefficients.
            op_type (type): The alphabet of the terms.
            n_sites (int): The length of the terms.
            sparse (bool): The storage mode of the terms.

        Raises:
            UnsupportedMixedStorage: Terms of different alphabets or storage
                modes.
            LengthMismatch: Terms of different lengths.
        """
        if op_type is not None and not (isinstance(op_type, type) and
                                        issubclass(op_type, self._op_type_base)):
            raise TypeError('{} cannot hold terms of {!r}.'.format(type(self).__name__, op_type))
        self._op_type = op_type
        self.n_sites = n_sites
        self._sparse = sparse
        self._terms = []
        self._keys = []
        if terms is not None:
            merged = {}
            for item in terms:
                term = self._as_term(item)
                key = term.canonical_key()
                if key in merged:
                    merged[key].coefficient = merged[key].coefficient + term.coefficient
                else:
                    merged[key] = term
            for key in sorted(merged):
                if not merged[key].iszero():
                    self._keys.append(key)
                    self._terms.append(merged[key])

    @classmethod
    def from_term(cls, term):
        """A sum holding a copy of one term, of the sum class for its kind."""
        if cls is OpSum:
            cls = sum_class_for(term.op_type)
        op_sum = cls(op_type=term.op_type, n_sites=term.n_sites, sparse=term.is_sparse)
        op_sum.add(term)
        return op_sum

    @classmethod
    def zero(cls, op_type=None, n_sites=None, sparse=None):
        """The additive identity: a sum without terms."""
        return cls(op_type=op_type, n_sites=n_sites, sparse=sparse)

    @classmethod
    def identity(cls, n_sites, op_type=None, sparse=False):
        """The multiplicative identity on n_sites sites."""
        op_type = op_type or cls.term_class.default_op_type
        term = cls.term_class.identity(n_sites, op_type=op_type, sparse=sparse)
        return cls([term], op_type=op_type, n_sites=n_sites, sparse=sparse)

    @property
    def op_type(self):
        return self._op_type or self.term_class.default_op_type

    @property
    def is_sparse(self):
        return bool(self._sparse)

    def _like(self):
        return type(self)(op_type=self._op_type, n_sites=self.n_sites, sparse=self._sparse)

    def _as_term(self, item):
        if isinstance(item, OpTerm):
            term = item.copy()
        else:
            try:
                ops, coefficient = item
            except (TypeError, ValueError):
                raise TypeError(
                    'Expected an OpTerm or an (ops, coefficient) pair, got {!r}.'.format(item))
            term = self.term_class(ops, coefficient, op_type=self._op_type, n_sites=self.n_sites,
                                   sparse=bool(self._sparse))
        self._check_term(term)
        return term

    def _check_term(self, term):
        if not isinstance(term, OpTerm):
            raise TypeError('Cannot add {} to {}.'.format(type(term).__name__, type(self).__name__))
        if self._op_type is None:
            if not issubclass(term.op_type, self._op_type_base):
                raise UnsupportedMixedStorage('{} cannot hold terms of {}.'.format(
                    type(self).__name__, term.op_type.__name__))
            self._op_type = term.op_type
        elif term.op_type is not self._op_type:
            raise UnsupportedMixedStorage('Cannot add a term of {} to a sum of {}.'.format(
                term.op_type.__name__, self._op_type.__name__))
        if self.n_sites is None:
            self.n_sites = term.n_sites
        elif term.n_sites != self.n_sites:
            raise LengthMismatch('Cannot add a term of length {} to a sum of length {}.'.format(
                term.n_sites, self.n_sites))
        if self._sparse is None:
            self._sparse = term.is_sparse
        elif term.is_sparse != self._sparse:
            raise UnsupportedMixedStorage(
                'Cannot add a sparse term to a dense sum or a dense term to a sparse sum.')

    def _insert(self, key, term, owned):
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            existing = self._terms[index]
            coefficient = existing.coefficient + term.coefficient
            if _is_additive_identity(coefficient):
                del self._keys[index]
                del self._terms[index]
            else:
                existing.coefficient = coefficient
        elif not term.iszero():
            self._keys.insert(index, key)
            self._terms.insert(index, term if owned else term.copy())

    def add(self, term):
        """Add a single term in place, keeping the canonical order.

        If a term with the same string is present the coefficients are
        added, and the entry is removed when the sum is zero. Otherwise a
        copy of the term is inserted at its sorted position.

        Returns:
            The mutated sum, so that calls may be chained.
        """
        self._check_term(term)
        self._insert(term.canonical_key(), term, owned=False)
        return self

    def _add_owned(self, term):
        self._check_term(term)
        self._insert(term.canonical_key(), term, owned=True)

    @property
    def terms(self):
        """A tuple with a copy of each term, in canonical order."""
        return tuple(term.copy() for term in self._terms)

    def keys(self):
        """The canonical keys of the terms, in order."""
        return tuple(self._keys)

    def coefficients(self):
        return [term.coefficient for term in self._terms]

    def _key_of(self, ops):
        if isinstance(ops, OpTerm):
            return ops.canonical_key()
        return self.term_class(ops, op_type=self.op_type, n_sites=self.n_sites).canonical_key()

    def coefficient(self, ops):
        """The coefficient of a string, given as a term or label string, or 0."""
        key = self._key_of(ops)
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return self._terms[index].coefficient
        return 0

    def __contains__(self, ops):
        key = self._key_of(ops)
        index = bisect.bisect_left(self._keys, key)
        return index < len(self._keys) and self._keys[index] == key

    def __len__(self):
        return len(self._terms)

    def __iter__(self):
        for term in self._terms:
            yield term.copy()

    def __getitem__(self, index):
        return self._terms[index].copy()

    def copy(self):
        new = self._like()
        new._keys = list(self._keys)
        new._terms = [term.copy() for term in self._terms]
        return new

    def _mapped(self, function):
        # For maps that keep every string, and so the order, unchanged.
        new = self._like()
        for key, term in zip(self._keys, self._terms):
            mapped = function(term)
            if not mapped.iszero():
                new._keys.append(key)
                new._terms.append(mapped)
        return new

    def to_dense(self):
        new = self._mapped(lambda term: term.to_dense())
        new._sparse = False if self._sparse is not None else None
        return new

    def to_sparse(self):
        new = self._mapped(lambda term: term.to_sparse())
        new._sparse = True if self._sparse is not None else None
        return new

    def _product(self, left_terms, right_terms, result):
        for left in left_terms:
            for right in right_terms:
                result._add_owned(left * right)
        return result

    def __iadd__(self, addend):
        """In-place method for += addition of a term or a sum.

        Raises:
            TypeError: Cannot add invalid type.
        """
        if isinstance(addend, OpTerm):
            self.add(addend)
        elif isinstance(addend, OpSum):
            # Snapshot, addend may be self.
            for key, term in list(zip(addend._keys, addend._terms)):
                self._check_term(term)
                self._insert(key, term, owned=False)
        else:
            raise TypeError('Cannot add invalid type to {}.'.format(type(self)))
        return self

    def __add__(self, addend):
        if not isinstance(addend, (OpTerm, OpSum)):
            return NotImplemented
        summand = self.copy()
        summand += addend
        return summand

    def __radd__(self, addend):
        # Allows the builtin sum() over sums, which starts from 0.
        if isinstance(addend, numbers.Number) and addend == 0:
            return self.copy()
        return NotImplemented

    def __isub__(self, subtrahend):
        """In-place method for -= subtraction of a term or a sum.

        Raises:
            TypeError: Cannot subtract invalid type.
        """
        if isinstance(subtrahend, OpTerm):
            self.add(-subtrahend)
        elif isinstance(subtrahend, OpSum):
            # Snapshot, subtrahend may be self.
            for key, term in list(zip(subtrahend._keys, subtrahend._terms)):
                self._check_term(term)
                self._insert(key, -term, owned=True)
        else:
            raise TypeError('Cannot subtract invalid type from {}.'.format(type(self)))
        return self

    def __sub__(self, subtrahend):
        if not isinstance(subtrahend, (OpTerm, OpSum)):
            return NotImplemented
        minuend = self.copy()
        minuend -= subtrahend
        return minuend

    def __neg__(self):
        return self._mapped(lambda term: -term)

    def _check_scalar(self, scalar):
        if not isinstance(scalar, COEFFICIENT_TYPES):
            raise TypeError('Object of invalid type cannot multiply with {}.'.format(
                type(self).__name__))

    def __imul__(self, multiplier):
        """In-place multiply (*=) with a scalar, a term or a sum."""
        if isinstance(multiplier, OpSum):
            product = self._product(self._terms, multiplier._terms, self._like())
        elif isinstance(multiplier, OpTerm):
            product = self._product(self._terms, [multiplier], self._like())
        else:
            self._check_scalar(multiplier)
            product = self._mapped(lambda term: term * multiplier)
        self._keys = product._keys
        self._terms = product._terms
        self._sparse = product._sparse
        self._op_type = product._op_type
        self.n_sites = product.n_sites
        return self

    def __mul__(self, multiplier):
        """Return self * multiplier for a scalar, a term or a sum.

        Every pair of terms is multiplied and the product is added to the
        result at once, see OpTerm.__mul__ for the term product.
        """
        if isinstance(multiplier, OpSum):
            return self._product(self._terms, multiplier._terms, self._like())
        if isinstance(multiplier, OpTerm):
            return self._product(self._terms, [multiplier], self._like())
        self._check_scalar(multiplier)
        return self._mapped(lambda term: term * multiplier)

    def __rmul__(self, multiplier):
        if isinstance(multiplier, OpTerm):
            return self._product([multiplier], self._terms, self._like())
        self._check_scalar(multiplier)
        return self._mapped(lambda term: multiplier * term)

    def __truediv__(self, divisor):
        if isinstance(divisor, (OpTerm, OpSum)):
            return NotImplemented
        self._check_scalar(divisor)
        return self._mapped(lambda term: term / divisor)

    def __itruediv__(self, divisor):
        if isinstance(divisor, (OpTerm, OpSum)):
            raise TypeError('Cannot divide {} by non-scalar type.'.format(type(self).__name__))
        quotient = self / divisor
        self._keys = quotient._keys
        self._terms = quotient._terms
        return self

    def __pow__(self, exponent):
        """Exponentiate the sum.

        Raises:
            ValueError: Can only raise an OpSum to non-negative integer
                powers, and a sum of unknown length only to positive ones.
        """
        if not isinstance(exponent, int) or exponent < 0:
            raise ValueError('exponent must be a non-negative int, but was {} {}'.format(
                type(exponent), repr(exponent)))
        if self.n_sites is None:
            if exponent == 0:
                raise ValueError('The identity of a sum of unknown length is undefined.')
            return self.copy()
        result = type(self).identity(self.n_sites, op_type=self.op_type, sparse=self.is_sparse)
        for _ in range(exponent):
            result = result * self
        return result

    def __eq__(self, other):
        if not isinstance(other, OpSum):
            return NotImplemented
        if not self._terms or not other._terms:
            return not self._terms and not other._terms
        return (self.op_type is other.op_type and self.n_sites == other.n_sites and
                self._keys == other._keys and
                all(bool(a.coefficient == b.coefficient)
                    for a, b in zip(self._terms, other._terms)))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def isclose(self, other, rel_tol=EQ_TOLERANCE, abs_tol=EQ_TOLERANCE):
        """
        Returns True if other (OpSum) is close to self.

        Comparison is done for each term individually. Return True
        if the difference between each term in self and other is
        less than the relative tolerance w.r.t. either other or self
        (symmetric test) or if the difference is less than the absolute
        tolerance.

        Args:
            other(OpSum): OpSum to compare against.
            rel_tol(float): Relative tolerance, must be greater than 0.0
            abs_tol(float): Absolute tolerance, must be at least 0.0
        """
        if not isinstance(other, OpSum):
            raise TypeError('Cannot compare a {} with a {}'.format(
                type(self).__name__, type(other).__name__))
        mine = dict(zip(self._keys, self.coefficients()))
        theirs = dict(zip(other._keys, other.coefficients()))
        if mine and theirs and (self.op_type is not other.op_type or
                                self.n_sites != other.n_sites):
            return False
        for key in set(mine).intersection(theirs):
            a = mine[key]
            b = theirs[key]
            if not abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol):
                return False
        for key in set(mine).symmetric_difference(theirs):
            coefficient = mine.get(key, theirs.get(key))
            if not abs(coefficient) <= abs_tol:
                return False
        return True

    def compress(self, abs_tol=EQ_TOLERANCE):
        """
        Eliminates all terms with coefficients close to zero and removes
        small imaginary and real parts.

        Symbolic coefficients are left untouched.

        Args:
            abs_tol(float): Absolute tolerance, must be at least 0.0
        """
        keys = []
        terms = []
        for key, term in zip(self._keys, self._terms):
            coeff = term.coefficient
            if isinstance(coeff, numbers.Complex):
                # Remove small imaginary and real parts
                if abs(coeff.imag) <= abs_tol:
                    coeff = coeff.real
                if abs(coeff.real) <= abs_tol:
                    coeff = 1.j * coeff.imag
                # Add the term if the coefficient is large enough
                if abs(coeff) <= abs_tol:
                    continue
                term.coefficient = coeff
            keys.append(key)
            terms.append(term)
        self._keys = keys
        self._terms = terms

    def induced_norm(self, order=1):
        r"""
        Compute the induced p-norm of the operator.

        If we represent an operator as
        :math: `\sum_{j} w_j H_j`
        where :math: `w_j` are scalar coefficients then this norm is
        :math: `\left(\sum_{j} \| w_j \|^p \right)^{\frac{1}{p}}
        where :math: `p` is the order of the induced norm

        Args:
            order(int): the order of the induced norm.
        """
        norm = 0.
        for term in self._terms:
            norm += abs(term.coefficient)**order
        return norm**(1. / order)

    def adjoint(self):
        """Return the Hermitian conjugate, re-sorted into canonical order."""
        return type(self)((term.adjoint() for term in self._terms), op_type=self._op_type,
                          n_sites=self.n_sites, sparse=self._sparse)

    def __str__(self):
        """Return an easy-to-read string representation."""
        if not self._terms:
            return '0'
        return ' +\n'.join(str(term) for term in self._terms)

    def __repr__(self):
        arguments = ['[{}]'.format(', '.join(
            '({!r}, {!r})'.format(term.labels(), term.coefficient) for term in self._terms))]
        if self._op_type is not None and self._op_type is not self.term_class.default_op_type:
            arguments.append('op_type={}'.format(self._op_type.__name__))
        if self._sparse:
            arguments.append('sparse=True')
        return '{}({})'.format(type(self).__name__, ', '.join(arguments))


class PauliSum(OpSum):
    """A sum of PauliTerms."""

    term_class = PauliTerm
    _op_type_base = AbstractPauli


class FermiSum(OpSum):
    """A sum of FermiTerms."""

    term_class = FermiTerm
    _op_type_base = FermiOp


def sum_class_for(op_type):
    """The most specific sum class that holds terms of op_type."""
    if issubclass(op_type, FermiOp):
        return FermiSum
    if issubclass(op_type, AbstractPauli):
        return PauliSum
    return OpSum
