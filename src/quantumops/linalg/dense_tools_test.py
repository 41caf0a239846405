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
"""Tests for dense_tools.py."""
import fractions
import unittest

import numpy
import pytest
import scipy.sparse
import sympy

from quantumops.linalg.dense_tools import (get_dense_matrix, get_sparse_operator,
                                           pauli_decomposition, pauli_string_action)
from quantumops.ops.operators import (FermiOp, FermiSum, FermiTerm, Pauli, PauliI, PauliSum,
                                      PauliTerm)
from quantumops.ops.representations import DimensionMismatch
from quantumops.testing import random_hermitian_matrix, random_op_sum
from quantumops.utils import ParallelOptions

_PAULI_MATRICES = {
    'I': numpy.eye(2),
    'X': numpy.array([[0, 1], [1, 0]]),
    'Y': numpy.array([[0, -1j], [1j, 0]]),
    'Z': numpy.diag([1, -1]),
}


class PauliStringActionTest(unittest.TestCase):

    def test_y(self):
        rows, columns, powers = pauli_string_action(PauliTerm('Y'))
        self.assertEqual(list(rows), [0, 1])
        self.assertEqual(list(columns), [1, 0])
        self.assertEqual(list(powers), [3, 1])

    def test_two_sites(self):
        rows, columns, powers = pauli_string_action(PauliTerm('XZ'))
        self.assertEqual(list(columns), [2, 3, 0, 1])
        self.assertEqual(list(powers), [0, 2, 0, 2])

    def test_identity(self):
        rows, columns, powers = pauli_string_action(PauliTerm('III'))
        self.assertEqual(list(rows), list(columns))
        self.assertFalse(powers.any())


@pytest.mark.parametrize('op_type', [Pauli, PauliI])
@pytest.mark.parametrize('label', list('IXYZ'))
def test_single_site_matrices(op_type, label):
    matrix = get_dense_matrix(PauliTerm(label, op_type=op_type))
    numpy.testing.assert_array_equal(matrix, _PAULI_MATRICES[label])
    numpy.testing.assert_array_equal(matrix, op_type.from_label(label).matrix())


def test_site_zero_is_most_significant():
    matrix = get_dense_matrix(PauliTerm('XIY', 2.))
    expected = 2. * numpy.kron(numpy.kron(_PAULI_MATRICES['X'], numpy.eye(2)),
                               _PAULI_MATRICES['Y'])
    numpy.testing.assert_array_equal(matrix, expected)


def test_sparse_term_matrix():
    dense_term = PauliTerm('IZIX', -1j)
    numpy.testing.assert_array_equal(get_dense_matrix(dense_term.to_sparse()),
                                     get_dense_matrix(dense_term))


@pytest.mark.parametrize('label', list(FermiOp.labels))
def test_fermi_single_site_matrices(label):
    numpy.testing.assert_array_equal(get_dense_matrix(FermiTerm(label)),
                                     FermiOp.from_label(label).matrix())


def test_fermi_parity_string():
    lowering = numpy.array([[0, 1], [0, 0]])
    expected = numpy.kron(numpy.diag([1, -1]), lowering)
    numpy.testing.assert_array_equal(get_dense_matrix(FermiTerm('I-')), expected)
    numpy.testing.assert_array_equal(get_dense_matrix(FermiTerm('N-')),
                                     numpy.kron(numpy.diag([0, -1]), lowering))


def test_sum_is_sum_of_term_matrices():
    for op_type in (Pauli, FermiOp):
        op_sum = random_op_sum(3, op_type=op_type, seed=11)
        expected = sum(get_dense_matrix(term) for term in op_sum)
        numpy.testing.assert_allclose(get_dense_matrix(op_sum), expected, atol=1e-12)


def test_empty_sums():
    numpy.testing.assert_array_equal(get_dense_matrix(PauliSum(n_sites=2)),
                                     numpy.zeros((4, 4)))
    with pytest.raises(ValueError):
        get_dense_matrix(PauliSum())


def test_bad_input():
    with pytest.raises(TypeError):
        get_dense_matrix(numpy.eye(2))
    with pytest.raises(TypeError):
        get_sparse_operator('X')


def test_parallel_matches_sequential():
    op_sum = random_op_sum(4, max_num_terms=40, seed=7)
    numpy.testing.assert_allclose(get_dense_matrix(op_sum, options=ParallelOptions(processes=3)),
                                  get_dense_matrix(op_sum), atol=1e-12)


def test_object_dtype_keeps_symbols():
    theta = sympy.Symbol('theta')
    matrix = get_dense_matrix(PauliTerm('Y', theta), dtype=object)
    assert matrix[0, 1] == -sympy.I * theta
    assert matrix[1, 0] == sympy.I * theta
    assert matrix[0, 0] == 0


class SparseOperatorTest(unittest.TestCase):

    def test_matches_dense(self):
        for op_type in (Pauli, PauliI, FermiOp):
            op_sum = random_op_sum(3, op_type=op_type, seed=4)
            sparse_operator = get_sparse_operator(op_sum)
            self.assertTrue(scipy.sparse.isspmatrix_csc(sparse_operator))
            numpy.testing.assert_allclose(sparse_operator.toarray(), get_dense_matrix(op_sum),
                                          atol=1e-12)

    def test_term(self):
        sparse_operator = get_sparse_operator(PauliTerm('ZX', 3.))
        self.assertEqual(sparse_operator.nnz, 4)
        numpy.testing.assert_array_equal(sparse_operator.toarray(),
                                         get_dense_matrix(PauliTerm('ZX', 3.)))

    def test_cancellation_is_eliminated(self):
        sparse_operator = get_sparse_operator(PauliSum([('I', 1.), ('Z', 1.)]))
        self.assertEqual(sparse_operator.nnz, 1)
        self.assertEqual(sparse_operator[0, 0], 2.)

    def test_hopping(self):
        hopping = FermiSum([('+-', 1.), ('-+', -1.)])
        expected = numpy.zeros((4, 4))
        expected[1, 2] = expected[2, 1] = 1.
        numpy.testing.assert_array_equal(get_sparse_operator(hopping).toarray(), expected)


class PauliDecompositionTest(unittest.TestCase):

    def test_identity_plus_noise(self):
        prng = numpy.random.RandomState(3)
        matrix = numpy.eye(2) + 1e-3 * prng.randn(2, 2)
        decomposition = pauli_decomposition(matrix)
        self.assertAlmostEqual(decomposition.coefficient('I'), matrix.trace() / 2.)
        numpy.testing.assert_allclose(get_dense_matrix(decomposition), matrix, atol=1e-12)

    def test_integer_matrix_is_exact(self):
        matrix = numpy.array([[3, 1], [1, 1]])
        decomposition = pauli_decomposition(matrix)
        self.assertEqual(decomposition, PauliSum([('I', 2), ('X', 1), ('Z', 1)]))
        numpy.testing.assert_array_equal(get_dense_matrix(decomposition), matrix)

    def test_object_matrix_is_exact(self):
        half = fractions.Fraction(1, 2)
        matrix = numpy.array([[half, 0], [0, half]], dtype=object)
        decomposition = pauli_decomposition(matrix)
        self.assertEqual(len(decomposition), 1)
        self.assertEqual(decomposition.coefficient('I'), fractions.Fraction(1, 2))
        self.assertIsInstance(decomposition.coefficient('I'), fractions.Fraction)

    def test_symbolic_matrix(self):
        a, b = sympy.symbols('a b')
        matrix = numpy.array([[a, b], [b, -a]], dtype=object)
        decomposition = pauli_decomposition(matrix)
        self.assertEqual(len(decomposition), 2)
        self.assertEqual(decomposition.coefficient('X'), b)
        self.assertEqual(decomposition.coefficient('Z'), a)
        self.assertEqual(get_dense_matrix(decomposition, dtype=object)[0, 0], a)

    def test_reconstructs_random_sum(self):
        op_sum = random_op_sum(3, seed=9)
        decomposition = pauli_decomposition(get_dense_matrix(op_sum))
        self.assertTrue(decomposition.isclose(op_sum))

    def test_hermitian_matrix_has_real_coefficients(self):
        decomposition = pauli_decomposition(random_hermitian_matrix(4, seed=1), atol=1e-12)
        for coefficient in decomposition.coefficients():
            self.assertAlmostEqual(coefficient.imag, 0.)

    def test_atol(self):
        matrix = numpy.diag([1., 1. + 1e-10])
        self.assertEqual(len(pauli_decomposition(matrix)), 2)
        self.assertEqual(len(pauli_decomposition(matrix, atol=1e-8)), 1)

    def test_sparse_input_and_output(self):
        matrix = scipy.sparse.csc_matrix(numpy.array([[0., 1.], [1., 0.]]))
        decomposition = pauli_decomposition(matrix, op_type=PauliI, sparse=True)
        self.assertIs(decomposition.op_type, PauliI)
        self.assertTrue(decomposition.is_sparse)
        self.assertEqual(decomposition, PauliSum([('X', 1.)], op_type=PauliI))

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            pauli_decomposition(numpy.eye(3))
        with self.assertRaises(DimensionMismatch):
            pauli_decomposition(numpy.zeros((2, 4)))
        with self.assertRaises(DimensionMismatch):
            pauli_decomposition(numpy.zeros(4))
