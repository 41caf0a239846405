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
"""Tests for interaction_operator.py."""
import unittest

import numpy

from quantumops.ops.representations.interaction_operator import (DimensionMismatch,
                                                                 InteractionOperator,
                                                                 get_tensors_from_integrals)


class InteractionOperatorTest(unittest.TestCase):

    def setUp(self):
        self.n_sites = 2
        self.constant = 1.
        self.one_body = numpy.zeros((self.n_sites, self.n_sites), float)
        self.one_body[0, 1] = 2.
        self.one_body[1, 0] = 2.
        self.two_body = numpy.zeros((self.n_sites,) * 4, float)
        self.two_body[0, 1, 1, 0] = 3.
        self.interaction_operator = InteractionOperator(self.constant, self.one_body,
                                                        self.two_body)

    def test_n_sites(self):
        self.assertEqual(self.interaction_operator.n_sites, 2)

    def test_bad_shapes(self):
        with self.assertRaises(DimensionMismatch):
            InteractionOperator(0., numpy.zeros((2, 3)), numpy.zeros((2,) * 4))
        with self.assertRaises(DimensionMismatch):
            InteractionOperator(0., numpy.zeros((2, 2)), numpy.zeros((3,) * 4))
        with self.assertRaises(ValueError):
            InteractionOperator(0., numpy.zeros(2), numpy.zeros((2,) * 4))

    def test_ladder_terms_order(self):
        terms = list(self.interaction_operator.ladder_terms())
        self.assertEqual(terms, [
            ((), 1.),
            (((0, 1), (1, 0)), 2.),
            (((1, 1), (0, 0)), 2.),
            (((0, 1), (1, 1), (1, 0), (0, 0)), 3.),
        ])

    def test_ladder_terms_tolerance(self):
        self.one_body[0, 0] = 1e-10
        operator = InteractionOperator(1e-12, self.one_body, self.two_body)
        terms = list(operator.ladder_terms())
        self.assertEqual(len(terms), 3)
        self.assertEqual(len(list(operator.ladder_terms(tolerance=0.))), 5)
        self.assertEqual(len(list(operator.ladder_terms(tolerance=2.5))), 1)

    def test_zero(self):
        zero = InteractionOperator.zero(3)
        self.assertEqual(zero.n_sites, 3)
        self.assertEqual(list(zero.ladder_terms()), [])

    def test_eq(self):
        same = InteractionOperator(self.constant, self.one_body.copy(), self.two_body.copy())
        self.assertTrue(same == self.interaction_operator)
        self.assertFalse(same != self.interaction_operator)
        other = InteractionOperator(2., self.one_body, self.two_body)
        self.assertFalse(other == self.interaction_operator)
        self.assertFalse(InteractionOperator.zero(3) == self.interaction_operator)
        self.assertFalse(self.interaction_operator == 1)

    def test_repr(self):
        self.assertEqual(repr(self.interaction_operator),
                         'InteractionOperator(n_sites=2, constant=1.0)')


class GetTensorsFromIntegralsTest(unittest.TestCase):

    def test_single_orbital(self):
        one_body, two_body = get_tensors_from_integrals(numpy.array([[-1.5]]),
                                                        numpy.full((1, 1, 1, 1), 0.6))
        numpy.testing.assert_array_equal(one_body, numpy.diag([-1.5, -1.5]))
        expected = numpy.zeros((2,) * 4)
        for index in [(0, 0, 0, 0), (0, 1, 1, 0), (1, 0, 0, 1), (1, 1, 1, 1)]:
            expected[index] = 0.3
        numpy.testing.assert_allclose(two_body, expected)

    def test_spin_conservation(self):
        n_orbitals = 2
        one_body_integrals = numpy.arange(1., 5.).reshape(2, 2)
        two_body_integrals = numpy.arange(1., 17.).reshape((n_orbitals,) * 4)
        one_body, two_body = get_tensors_from_integrals(one_body_integrals,
                                                        two_body_integrals)
        self.assertEqual(one_body.shape, (4, 4))
        self.assertEqual(two_body.shape, (4,) * 4)
        self.assertEqual(one_body[2, 0], 3.)
        self.assertEqual(one_body[3, 1], 3.)
        self.assertEqual(one_body[2, 1], 0.)
        self.assertEqual(two_body[0, 3, 1, 2], two_body_integrals[0, 1, 0, 1] / 2)
        self.assertEqual(two_body[0, 3, 2, 1], 0.)

    def test_truncation(self):
        one_body, _ = get_tensors_from_integrals(numpy.array([[1e-10]]),
                                                 numpy.zeros((1, 1, 1, 1)))
        self.assertEqual(one_body[0, 0], 0.)

    def test_bad_shapes(self):
        with self.assertRaises(DimensionMismatch):
            get_tensors_from_integrals(numpy.zeros((2, 2)), numpy.zeros((2, 2)))
        with self.assertRaises(DimensionMismatch):
            get_tensors_from_integrals(numpy.zeros((2, 3)), numpy.zeros((2,) * 4))
