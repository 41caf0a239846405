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
"""This module builds dense and scipy.sparse matrices of operators and
decomposes matrices into Pauli strings."""
import functools
import logging

import numpy
import scipy
import scipy.sparse

from quantumops.ops.operators import (AbstractPauli, FermiOp, OpSum, OpTerm, Pauli, PauliSum,
                                      Phase)
from quantumops.ops.representations import DimensionMismatch
from quantumops.transforms.opconversions import jordan_wigner
from quantumops.utils.operator_utils import pauli_basis
from quantumops.utils.parallel import get_operator_groups

# Powers of i, indexed by the exponent.
_POWERS_OF_I = numpy.array([1, 1j, -1, -1j], dtype=complex)


@functools.lru_cache(maxsize=None)
def _site_action(op):
    """The column and power of i selected by each row of a Pauli matrix."""
    columns = []
    powers = []
    for row in op.phase_matrix():
        # Exactly one entry of each row of a Pauli matrix is nonzero.
        entry = functools.reduce(lambda a, b: a + b, row, Phase.ZERO)
        columns.append(0 if row[0] else 1)
        powers.append(entry.power)
    return numpy.array(columns), numpy.array(powers)


def pauli_string_action(term):
    """Return the nonzero pattern of a Pauli string.

    The matrix of a Pauli string has exactly one nonzero entry per row. Site
    0 is the most significant bit of the row and column index, which matches
    the Kronecker product op[0] (x) op[1] (x) ... (x) op[n-1].

    Args:
        term(OpTerm): A term of a Pauli encoding. The coefficient is ignored.

    Returns:
        rows, columns, powers: Integer arrays of length 2 ** n_sites. The
        string has entry i ** powers[k] at (rows[k], columns[k]).
    """
    n_sites = term.n_sites
    rows = numpy.arange(2 ** n_sites)
    columns = numpy.zeros(2 ** n_sites, dtype=rows.dtype)
    powers = numpy.zeros(2 ** n_sites, dtype=rows.dtype)
    for site, op in enumerate(term.dense_ops()):
        shift = n_sites - 1 - site
        bits = (rows >> shift) & 1
        site_columns, site_powers = _site_action(op)
        columns |= site_columns[bits] << shift
        powers += site_powers[bits]
    return rows, columns, powers % 4


def _as_pauli(operator):
    if isinstance(operator, OpSum) and operator.n_sites is None:
        raise ValueError('Cannot build the matrix of an empty sum of unknown length.')
    if isinstance(operator, (OpTerm, OpSum)) and operator.op_type is FermiOp:
        return jordan_wigner(operator)
    if isinstance(operator, OpTerm):
        if not issubclass(operator.op_type, AbstractPauli):
            raise TypeError('Cannot build the matrix of a term of {}.'.format(
                operator.op_type.__name__))
        return operator
    if isinstance(operator, OpSum):
        if len(operator) and not issubclass(operator.op_type, AbstractPauli):
            raise TypeError('Cannot build the matrix of a sum of {}.'.format(
                operator.op_type.__name__))
        return operator
    raise TypeError('Operator must be an OpTerm or an OpSum.')


def _term_values(term, powers, dtype):
    values = numpy.array([Phase.from_power(k).apply(term.coefficient) for k in range(4)],
                         dtype=dtype)
    return values[powers]


def _pauli_term_matrix(term, dtype):
    rows, columns, powers = pauli_string_action(term)
    matrix = numpy.zeros((rows.size, rows.size), dtype=dtype)
    matrix[rows, columns] = _term_values(term, powers, dtype)
    return matrix


def _pauli_sum_matrix(op_sum, dtype):
    dimension = 2 ** op_sum.n_sites
    matrix = numpy.zeros((dimension, dimension), dtype=dtype)
    for term in op_sum:
        rows, columns, powers = pauli_string_action(term)
        matrix[rows, columns] += _term_values(term, powers, dtype)
    return matrix


def get_dense_matrix(operator, dtype=complex, options=None):
    """Return the dense matrix of a term or a sum.

    Fermionic operators are mapped with the Jordan-Wigner transform first,
    so the result is the matrix of the fermionic operator in the occupation
    basis. The matrix has side 2 ** n_sites, so time and memory grow
    exponentially with the number of sites.

    Args:
        operator: An OpTerm or an OpSum.
        dtype: The numpy dtype of the matrix. Use object to keep exact or
            symbolic coefficients.
        options(ParallelOptions): When given, the terms of a sum are split
            over a pool of workers and the partial matrices are added.

    Returns:
        matrix(numpy.ndarray)

    Raises:
        TypeError: Operator of invalid type.
        ValueError: An empty sum of unknown length.
    """
    operator = _as_pauli(operator)
    dimension = 2 ** operator.n_sites
    n_terms = 1 if isinstance(operator, OpTerm) else len(operator)
    logging.info('Building a dense %d x %d matrix from %d terms.', dimension, dimension, n_terms)
    if isinstance(operator, OpTerm):
        return _pauli_term_matrix(operator, dtype)
    if options is None or len(operator) < 2:
        return _pauli_sum_matrix(operator, dtype)

    groups = get_operator_groups(operator, options.processes)
    matrices = options.map(functools.partial(_pauli_sum_matrix, dtype=dtype), groups)
    return functools.reduce(numpy.add, matrices)


def get_sparse_operator(operator):
    """Initialize a Scipy sparse matrix from a term or a sum.

    Args:
        operator: An OpTerm or an OpSum. Fermionic operators are mapped with
            the Jordan-Wigner transform first.

    Returns:
        The corresponding Scipy sparse matrix, in csc format.
    """
    operator = _as_pauli(operator)
    terms = [operator] if isinstance(operator, OpTerm) else list(operator)
    n_hilbert = 2 ** operator.n_sites

    values_list = [numpy.zeros(0, dtype=complex)]
    row_list = [numpy.zeros(0, dtype=int)]
    column_list = [numpy.zeros(0, dtype=int)]
    for term in terms:
        rows, columns, powers = pauli_string_action(term)
        values_list.append(_term_values(term, powers, complex))
        row_list.append(rows)
        column_list.append(columns)

    # Duplicate entries are summed by the conversion to csc.
    values_list = numpy.concatenate(values_list)
    row_list = numpy.concatenate(row_list)
    column_list = numpy.concatenate(column_list)
    sparse_operator = scipy.sparse.coo_matrix(
        (values_list, (row_list, column_list)),
        shape=(n_hilbert, n_hilbert)).tocsc(copy=False)
    sparse_operator.eliminate_zeros()
    return sparse_operator


def pauli_decomposition(matrix, op_type=Pauli, atol=None, sparse=False):
    r"""Decompose a matrix into a sum of Pauli strings.

    The Pauli strings on n sites are an orthogonal basis of the matrices of
    side 2 ** n, so the coefficient of the string P is

        $$
            c_P = \mathrm{tr}(P M) / 2^n.
        $$

    All 4 ** n strings are projected, so the cost grows as 8 ** n.

    Args:
        matrix: A square numpy array or scipy sparse matrix of side 2 ** n.
            Arrays of dtype object are projected with exact arithmetic on
            their entries.
        op_type(type): The Pauli encoding of the result.
        atol(float): When given, coefficients with absolute value at most
            atol are dropped. Otherwise only exact zeros are dropped.
        sparse(bool): Whether the terms of the result are sparse.

    Returns:
        pauli_sum(PauliSum)

    Raises:
        DimensionMismatch: The matrix is not square with a side that is a
            power of 2.
    """
    if scipy.sparse.issparse(matrix):
        matrix = matrix.toarray()
    matrix = numpy.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise DimensionMismatch('Expected a square matrix, got shape {}.'.format(matrix.shape))
    dimension = matrix.shape[0]
    if dimension < 1 or dimension & (dimension - 1):
        raise DimensionMismatch('The side of the matrix must be a power of 2, got {}.'.format(
            dimension))
    n_sites = dimension.bit_length() - 1
    exact = matrix.dtype == object
    logging.info('Projecting a %d x %d matrix on %d Pauli strings.', dimension, dimension,
                 4 ** n_sites)

    pauli_sum = PauliSum(op_type=op_type, n_sites=n_sites, sparse=sparse)
    for term in pauli_basis(n_sites, op_type, sparse):
        rows, columns, powers = pauli_string_action(term)
        if exact:
            trace = sum((Phase.from_power(power).apply(matrix[column, row])
                         for row, column, power in zip(rows, columns, powers)), 0)
        else:
            trace = complex(numpy.sum(_POWERS_OF_I[powers] * matrix[columns, rows]))
        coefficient = trace / dimension
        if atol is None:
            if coefficient == 0:
                continue
        elif abs(coefficient) <= atol:
            continue
        term.coefficient = coefficient
        pauli_sum.add(term)
    return pauli_sum
