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
"""Class and functions to store interaction operators."""
import itertools

import numpy

from quantumops.config import EQ_TOLERANCE


class DimensionMismatch(ValueError):
    pass


class InteractionOperator(object):
    r"""Class for storing 'interaction operators' which are defined to be
    fermionic operators consisting of one-body and two-body terms. The
    most common examples of data that will use this structure are molecular
    Hamiltonians, whose tensors come from an external integral provider.
    The operators stored in this class take the form:

        $$
            constant + \sum_{p, q} h_{p, q} a^\dagger_p a_q +
            \sum_{p, q, r, s} h_{p, q, r, s} a^\dagger_p a^\dagger_q a_r a_s.
        $$

    Attributes:
        constant: The constant term, e.g. the nuclear repulsion energy.
        one_body_tensor: The coefficients of the one-body terms
            ($h_{p, q}$). This is an n_sites x n_sites numpy array.
        two_body_tensor: The coefficients of the two-body terms
            ($h_{p, q, r, s}$). This is an n_sites x n_sites x n_sites x
            n_sites numpy array.
    """

    def __init__(self, constant, one_body_tensor, two_body_tensor):
        """
        Initialize the InteractionOperator class.

        Args:
            constant: A constant term in the operator given as a number.
            one_body_tensor: The coefficients of the one-body terms
                ($h_{p,q}$), an array of shape (n, n).
            two_body_tensor: The coefficients of the two-body terms
                ($h_{p, q, r, s}$), an array of shape (n, n, n, n).

        Raises:
            DimensionMismatch: The tensors are not of shape (n, n) and
                (n, n, n, n) for a common n.
        """
        one_body_tensor = numpy.asarray(one_body_tensor)
        two_body_tensor = numpy.asarray(two_body_tensor)
        if one_body_tensor.ndim != 2 or one_body_tensor.shape[0] != one_body_tensor.shape[1]:
            raise DimensionMismatch('The one-body tensor must be square, got shape {}.'.format(
                one_body_tensor.shape))
        n_sites = one_body_tensor.shape[0]
        if two_body_tensor.shape != (n_sites,) * 4:
            raise DimensionMismatch('The two-body tensor must have shape {}, got {}.'.format(
                (n_sites,) * 4, two_body_tensor.shape))
        self.constant = constant
        self.one_body_tensor = one_body_tensor
        self.two_body_tensor = two_body_tensor

    @property
    def n_sites(self):
        return self.one_body_tensor.shape[0]

    @classmethod
    def zero(cls, n_sites):
        return cls(0, numpy.zeros((n_sites,) * 2, dtype=numpy.complex128),
                   numpy.zeros((n_sites,) * 4, dtype=numpy.complex128))

    def ladder_terms(self, tolerance=EQ_TOLERANCE):
        """Yield the terms of the operator as (ladder_ops, coefficient).

        ladder_ops is a tuple of (site, action) pairs with action 1 for
        raising and 0 for lowering, in the order of the product. Terms come
        in a fixed order: the constant, then the one-body terms, then the
        two-body terms, each in itertools.product order of the indices.
        Coefficients with absolute value at most tolerance are skipped.
        """
        if abs(self.constant) > tolerance:
            yield (), self.constant
        for p, q in itertools.product(range(self.n_sites), repeat=2):
            coefficient = self.one_body_tensor[p, q]
            if abs(coefficient) > tolerance:
                yield ((p, 1), (q, 0)), coefficient
        for p, q, r, s in itertools.product(range(self.n_sites), repeat=4):
            coefficient = self.two_body_tensor[p, q, r, s]
            if abs(coefficient) > tolerance:
                yield ((p, 1), (q, 1), (r, 0), (s, 0)), coefficient

    def __eq__(self, other):
        if not isinstance(other, InteractionOperator):
            return NotImplemented
        if self.n_sites != other.n_sites:
            return False
        return bool(
            abs(self.constant - other.constant) <= EQ_TOLERANCE and
            numpy.allclose(self.one_body_tensor, other.one_body_tensor, atol=EQ_TOLERANCE) and
            numpy.allclose(self.two_body_tensor, other.two_body_tensor, atol=EQ_TOLERANCE))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return 'InteractionOperator(n_sites={}, constant={!r})'.format(self.n_sites, self.constant)


def get_tensors_from_integrals(one_body_integrals, two_body_integrals):
    '''Converts one and two-body integrals over spatial orbitals into
    coefficient tensors over spin orbitals.

    Spin orbital 2 * p is spatial orbital p with spin up and 2 * p + 1 is
    spatial orbital p with spin down. One-body terms connect orbitals of the
    same spin. Two-body terms are halved, so that the two-body tensor
    h_{p, q, r, s} multiplies a^\\dagger_p a^\\dagger_q a_r a_s with
    two_body_integrals[p, q, r, s] / 2 for each spin assignment that
    conserves spin along (p, s) and (q, r).

    Arguments:
        one_body_integrals [numpy array] -- the one-body integrals
            of the given Hamiltonian, shape (n, n)
        two_body_integrals [numpy array] -- the two-body integrals
            of the given Hamiltonian, shape (n, n, n, n)

    Returns:
        one_body_coefficients, two_body_coefficients: arrays of shape
        (2n, 2n) and (2n, 2n, 2n, 2n).

    Raises:
        DimensionMismatch: The integrals are not of shape (n, n) and
            (n, n, n, n).
    '''
    one_body_integrals = numpy.asarray(one_body_integrals)
    two_body_integrals = numpy.asarray(two_body_integrals)
    n_orbitals = one_body_integrals.shape[0]
    if one_body_integrals.shape != (n_orbitals,) * 2:
        raise DimensionMismatch('The one-body integrals must be square, got shape {}.'.format(
            one_body_integrals.shape))
    if two_body_integrals.shape != (n_orbitals,) * 4:
        raise DimensionMismatch('The two-body integrals must have shape {}, got {}.'.format(
            (n_orbitals,) * 4, two_body_integrals.shape))

    n_sites = 2 * n_orbitals
    dtype = numpy.result_type(one_body_integrals, two_body_integrals, float)
    one_body_coefficients = numpy.zeros((n_sites, n_sites), dtype=dtype)
    two_body_coefficients = numpy.zeros((n_sites,) * 4, dtype=dtype)

    for p, q in itertools.product(range(n_orbitals), repeat=2):
        # Require p and q to have the same spin.
        for spin in (0, 1):
            one_body_coefficients[2 * p + spin, 2 * q + spin] = one_body_integrals[p, q]

        for r, s in itertools.product(range(n_orbitals), repeat=2):
            value = two_body_integrals[p, q, r, s] / 2.
            # Spin of p equals spin of s, spin of q equals spin of r.
            for spin_ps, spin_qr in itertools.product((0, 1), repeat=2):
                two_body_coefficients[2 * p + spin_ps, 2 * q + spin_qr, 2 * r + spin_qr,
                                      2 * s + spin_ps] = value

    # Truncate.
    one_body_coefficients[numpy.absolute(one_body_coefficients) < EQ_TOLERANCE] = 0.
    two_body_coefficients[numpy.absolute(two_body_coefficients) < EQ_TOLERANCE] = 0.

    return one_body_coefficients, two_body_coefficients
