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
"""Tests for operator_utils.py."""
import unittest

import numpy
import scipy.sparse

from quantumops.linalg import get_dense_matrix, get_sparse_operator
from quantumops.ops.operators import (FermiSum, FermiTerm, Pauli, PauliI, PauliSum, PauliTerm)
from quantumops.ops.representations import InteractionOperator
from quantumops.testing import random_fermi_term, random_interaction_operator
from quantumops.transforms import get_fermi_sum, jordan_wigner
from quantumops.utils.operator_utils import (anticommutator, commutator, count_sites,
                                             hermitian_conjugated, is_hermitian, pauli_basis)


class OperatorUtilsTest(unittest.TestCase):

    def setUp(self):
        self.n_sites = 5
        self.fermi_term = FermiTerm('I++--', -3.17)
        self.fermi_sum = self.fermi_term + hermitian_conjugated(self.fermi_term)
        self.pauli_sum = jordan_wigner(self.fermi_sum)
        self.interaction_operator = random_interaction_operator(self.n_sites, seed=2)

    def test_n_sites_single_fermi_term(self):
        self.assertEqual(self.n_sites, count_sites(self.fermi_term))

    def test_n_sites_fermi_sum(self):
        self.assertEqual(self.n_sites, count_sites(self.fermi_sum))

    def test_n_sites_pauli_sum(self):
        self.assertEqual(self.n_sites, count_sites(self.pauli_sum))

    def test_n_sites_interaction_operator(self):
        self.assertEqual(self.n_sites, count_sites(self.interaction_operator))

    def test_n_sites_empty_sum(self):
        self.assertEqual(0, count_sites(PauliSum()))
        self.assertEqual(3, count_sites(PauliSum(n_sites=3)))

    def test_n_sites_bad_type(self):
        with self.assertRaises(TypeError):
            count_sites('twelve')


class HermitianConjugatedTest(unittest.TestCase):

    def test_hermitian_conjugated_pauli_term(self):
        self.assertEqual(hermitian_conjugated(PauliTerm('XYZ', 2j)), PauliTerm('XYZ', -2j))

    def test_hermitian_conjugated_pauli_sum(self):
        op_sum = PauliSum([('XI', 1. + 1j), ('ZY', -2.)])
        self.assertEqual(hermitian_conjugated(op_sum),
                         PauliSum([('XI', 1. - 1j), ('ZY', -2.)]))

    def test_hermitian_conjugated_fermi_term(self):
        # (a^dagger_0 a_1)^dagger = a^dagger_1 a_0 = -a_0 a^dagger_1
        self.assertEqual(hermitian_conjugated(FermiTerm('+-', 1j)), FermiTerm('-+', 1j))
        self.assertEqual(hermitian_conjugated(FermiTerm('N+I', 2.)), FermiTerm('N-I', 2.))

    def test_hermitian_conjugated_empty(self):
        self.assertEqual(len(hermitian_conjugated(FermiSum())), 0)

    def test_hermitian_conjugated_matches_matrices(self):
        for seed in range(10):
            term = random_fermi_term(3, seed=seed)
            numpy.testing.assert_allclose(get_dense_matrix(hermitian_conjugated(term)),
                                          get_dense_matrix(term).T.conj(), atol=1e-12)

    def test_hermitian_conjugated_commutes_with_jordan_wigner(self):
        for seed in range(10):
            term = random_fermi_term(4, seed=seed)
            self.assertTrue(hermitian_conjugated(jordan_wigner(term)).isclose(
                jordan_wigner(hermitian_conjugated(term))))

    def test_hermitian_conjugated_interaction_operator(self):
        one_body = numpy.array([[1., 2j], [0., 1.]])
        two_body = numpy.zeros((2,) * 4, dtype=complex)
        two_body[0, 1, 1, 0] = 1j
        operator = InteractionOperator(1j, one_body, two_body)
        conjugate = hermitian_conjugated(operator)
        self.assertEqual(conjugate.constant, -1j)
        self.assertEqual(conjugate.one_body_tensor[1, 0], -2j)
        self.assertEqual(conjugate.two_body_tensor[0, 1, 1, 0], -1j)
        self.assertTrue(get_fermi_sum(conjugate).isclose(
            hermitian_conjugated(get_fermi_sum(operator))))

    def test_hermitian_conjugated_matrices(self):
        matrix = numpy.array([[0., 1j], [2., 0.]])
        numpy.testing.assert_array_equal(hermitian_conjugated(matrix),
                                         numpy.array([[0., 2.], [-1j, 0.]]))
        sparse_matrix = scipy.sparse.csc_matrix(matrix)
        numpy.testing.assert_array_equal(hermitian_conjugated(sparse_matrix).toarray(),
                                         numpy.array([[0., 2.], [-1j, 0.]]))

    def test_exceptions(self):
        with self.assertRaises(TypeError):
            hermitian_conjugated('a')
        with self.assertRaises(TypeError):
            hermitian_conjugated(1)


class IsHermitianTest(unittest.TestCase):

    def test_fermi_sum_zero(self):
        self.assertTrue(is_hermitian(FermiSum()))

    def test_fermi_term_identity(self):
        self.assertTrue(is_hermitian(FermiTerm('II', 2.)))

    def test_fermi_term_nonhermitian(self):
        self.assertFalse(is_hermitian(FermiTerm('+-')))
        self.assertFalse(is_hermitian(FermiTerm('NN', 1j)))

    def test_fermi_sum_hermitian(self):
        hopping = FermiSum([('+-', 1.), ('-+', -1.)])
        self.assertTrue(is_hermitian(hopping))
        self.assertTrue(is_hermitian(jordan_wigner(hopping)))

    def test_pauli_sum_nonhermitian(self):
        self.assertFalse(is_hermitian(PauliSum([('XY', 1j)])))

    def test_interaction_operator(self):
        operator = random_interaction_operator(3, seed=0)
        self.assertTrue(is_hermitian(operator))
        self.assertTrue(is_hermitian(get_sparse_operator(jordan_wigner(operator))))

    def test_sparse_matrix_and_numpy_array_identity(self):
        self.assertTrue(is_hermitian(numpy.eye(4)))
        self.assertTrue(is_hermitian(scipy.sparse.identity(4, format='csc')))

    def test_sparse_matrix_and_numpy_array_nonhermitian(self):
        matrix = numpy.array([[0., 1j], [1j, 0.]])
        self.assertFalse(is_hermitian(matrix))
        self.assertFalse(is_hermitian(scipy.sparse.csc_matrix(matrix)))

    def test_bad_type(self):
        with self.assertRaises(TypeError):
            is_hermitian('a')


class CommutatorTest(unittest.TestCase):

    def test_pauli_terms(self):
        self.assertEqual(commutator(PauliTerm('X'), PauliTerm('Y')), PauliSum([('Z', 2j)]))
        self.assertEqual(len(commutator(PauliTerm('XX'), PauliTerm('YY'))), 0)

    def test_pauli_sums(self):
        op_sum = PauliSum([('XI', 1.), ('IZ', 1.)])
        self.assertEqual(commutator(op_sum, op_sum), PauliSum(n_sites=2))

    def test_anticommutator(self):
        self.assertEqual(len(anticommutator(PauliTerm('X'), PauliTerm('Y'))), 0)
        self.assertEqual(anticommutator(PauliTerm('Z', 2.), PauliTerm('Z')),
                         PauliSum([('I', 4.)]))

    def test_canonical_anticommutation(self):
        lowering = FermiTerm('-')
        raising = FermiTerm('+')
        numpy.testing.assert_array_equal(get_dense_matrix(anticommutator(lowering, raising)),
                                         numpy.eye(2))
        numpy.testing.assert_array_equal(get_dense_matrix(anticommutator(lowering, lowering)),
                                         numpy.zeros((2, 2)))

    def test_matrices(self):
        x = numpy.array([[0, 1], [1, 0]])
        z = numpy.diag([1, -1])
        numpy.testing.assert_array_equal(commutator(x, z), 2 * x.dot(z))
        numpy.testing.assert_array_equal(anticommutator(x, z), numpy.zeros((2, 2)))

    def test_different_types(self):
        with self.assertRaises(TypeError):
            commutator(PauliTerm('X'), PauliSum([('X', 1.)]))
        with self.assertRaises(TypeError):
            anticommutator(FermiTerm('+'), numpy.eye(2))


class PauliBasisTest(unittest.TestCase):

    def test_two_sites(self):
        basis = list(pauli_basis(2))
        self.assertEqual(len(basis), 16)
        self.assertEqual([term.labels() for term in basis[:5]],
                         ['II', 'IX', 'IY', 'IZ', 'XI'])
        self.assertTrue(all(term.coefficient == 1 for term in basis))
        keys = [term.canonical_key() for term in basis]
        self.assertEqual(keys, sorted(keys))

    def test_orthogonal(self):
        matrices = [get_dense_matrix(term) for term in pauli_basis(2)]
        for i, left in enumerate(matrices):
            for j, right in enumerate(matrices):
                trace = numpy.trace(left.conj().T.dot(right))
                self.assertAlmostEqual(trace, 4. if i == j else 0.)

    def test_encoding_and_storage(self):
        basis = list(pauli_basis(3, op_type=PauliI, sparse=True))
        self.assertTrue(all(term.op_type is PauliI and term.is_sparse for term in basis))
        self.assertEqual(basis[0].weight(), 0)
        self.assertIs(next(pauli_basis(1)).op_type, Pauli)
