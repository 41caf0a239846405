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
"""This module provides generic tools for the classes in ops/"""
import itertools

import numpy
from scipy.sparse import spmatrix

from quantumops.config import EQ_TOLERANCE
from quantumops.ops.operators import OpSum, OpTerm, Pauli, PauliTerm
from quantumops.ops.representations import InteractionOperator


def count_sites(operator):
    """Return the number of sites of an operator.

    Args:
        operator: OpTerm, OpSum or InteractionOperator.

    Returns:
        n_sites (int): The length of the operator strings. An empty sum of
            unknown length has 0 sites.

    Raises:
       TypeError: Operator of invalid type.
    """
    if isinstance(operator, (OpTerm, InteractionOperator)):
        return operator.n_sites
    if isinstance(operator, OpSum):
        return operator.n_sites or 0
    raise TypeError('Operator of invalid type.')


def hermitian_conjugated(operator):
    """Return the Hermitian conjugate of a term, a sum, an
    InteractionOperator, a numpy array or a scipy sparse matrix.

    Raises:
        TypeError: Operator of unsupported type.
    """
    if isinstance(operator, (OpTerm, OpSum)):
        return operator.adjoint()
    if isinstance(operator, InteractionOperator):
        # Reversing the axes maps h_{p,q,r,s} to the coefficient of the
        # reversed product a^dagger_s a^dagger_r a_q a_p.
        return type(operator)(numpy.conj(operator.constant),
                              hermitian_conjugated(operator.one_body_tensor),
                              hermitian_conjugated(operator.two_body_tensor))
    if isinstance(operator, spmatrix):
        return operator.conj().transpose()
    if isinstance(operator, numpy.ndarray):
        return operator.T.conj()
    raise TypeError('Taking the hermitian conjugate of a {} is not supported.'.format(
        type(operator).__name__))


def is_hermitian(operator):
    """Test if operator is Hermitian.

    Terms, sums and InteractionOperators are compared with their conjugate
    using ==. A matrix is Hermitian when no entry of M - M^dagger exceeds
    EQ_TOLERANCE in absolute value.
    """
    if isinstance(operator, (OpTerm, OpSum, InteractionOperator)):
        return operator == hermitian_conjugated(operator)
    if isinstance(operator, spmatrix):
        difference = operator - hermitian_conjugated(operator)
        return not difference.nnz or bool(abs(difference.data).max() < EQ_TOLERANCE)
    if isinstance(operator, numpy.ndarray):
        return bool(numpy.allclose(operator, hermitian_conjugated(operator), rtol=0.,
                                   atol=EQ_TOLERANCE))
    raise TypeError('Checking whether a {} is hermitian is not supported.'.format(
        type(operator).__name__))


def _check_same_type(operator_a, operator_b):
    if type(operator_a) is not type(operator_b):
        raise TypeError('operator_a and operator_b are not of the same type.')


def commutator(operator_a, operator_b):
    """Compute the commutator [a, b] = a b - b a.

    Args:
        operator_a, operator_b: Operators of one type that support * and -:
            OpTerms, OpSums or scipy sparse matrices. 2D numpy arrays are
            multiplied with dot. The commutator of two terms is a sum.

    Raises:
        TypeError: operator_a and operator_b are not of the same type.
    """
    _check_same_type(operator_a, operator_b)
    if isinstance(operator_a, numpy.ndarray):
        return operator_a.dot(operator_b) - operator_b.dot(operator_a)
    return operator_a * operator_b - operator_b * operator_a


def anticommutator(operator_a, operator_b):
    """Compute the anticommutator {a, b} = a b + b a.

    Raises:
        TypeError: operator_a and operator_b are not of the same type.
    """
    _check_same_type(operator_a, operator_b)
    if isinstance(operator_a, numpy.ndarray):
        return operator_a.dot(operator_b) + operator_b.dot(operator_a)
    return operator_a * operator_b + operator_b * operator_a


def pauli_basis(n_sites, op_type=Pauli, sparse=False):
    """Generate all 4 ** n_sites Pauli strings in canonical order.

    Each string is yielded as a PauliTerm with coefficient 1.
    """
    for ops in itertools.product(op_type.alphabet(), repeat=n_sites):
        yield PauliTerm(ops, op_type=op_type, sparse=sparse)
