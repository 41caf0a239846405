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
"""Conversions from ladder-operator products and tensors to FermiSums."""
import logging

from quantumops.config import EQ_TOLERANCE
from quantumops.ops.operators import (FermiOp, FermiSum, FermiTerm, InvalidOperator,
                                      LengthMismatch, Phase)
from quantumops.ops.representations import InteractionOperator

_LADDER_OPS = {1: FermiOp.from_label('+'), 0: FermiOp.from_label('-')}


def fermi_term_from_ladder(ladder_ops, n_sites, coefficient=1, sparse=False):
    r"""Place a product of ladder operators at fixed sites.

    The product ladder_ops[0] ladder_ops[1] ... is reordered so that sites
    ascend. Ladder operators on different sites anticommute, so every pair
    that changes its relative order contributes a factor -1. Operators on
    the same site keep their order and are multiplied with the FermiOp
    table, e.g. a^\dagger_p a_p becomes N at site p and a_p a_p becomes 0.

    Args:
        ladder_ops: A sequence of (site, action) pairs, action 1 for
            raising and 0 for lowering.
        n_sites (int): The number of modes.
        coefficient: The coefficient of the product.
        sparse (bool): Whether the returned term is sparse.

    Returns:
        A FermiTerm. It has a zero factor, and a zero coefficient, when the
        product vanishes.

    Raises:
        LengthMismatch: A site outside range(n_sites).
        InvalidOperator: An action other than 0 or 1.
    """
    ladder_ops = tuple(ladder_ops)
    for site, action in ladder_ops:
        if not 0 <= site < n_sites:
            raise LengthMismatch('Site {} is outside a string of length {}.'.format(
                site, n_sites))
        if action not in _LADDER_OPS:
            raise InvalidOperator('Invalid ladder action {!r}; use 1 to raise and 0 to lower.'
                                  .format(action))

    n_inversions = sum(
        1 for i, (left_site, _) in enumerate(ladder_ops)
        for right_site, _ in ladder_ops[i + 1:] if left_site > right_site)

    ops = {}
    phase = Phase.ONE
    for site, action in sorted(ladder_ops, key=lambda factor: factor[0]):
        value, factor = ops.get(site, FermiOp.identity()).mul_with_phase(_LADDER_OPS[action])
        ops[site] = value
        phase *= factor

    if any(value.is_zero() for value in ops.values()):
        coefficient = coefficient * 0
    else:
        coefficient = phase.apply(coefficient)
        if n_inversions % 2:
            coefficient = -coefficient
    return FermiTerm(ops, coefficient, n_sites=n_sites, sparse=sparse)


def get_fermi_sum(operator, tolerance=EQ_TOLERANCE, sparse=False):
    """Enumerate the FermiSum of an InteractionOperator.

    The terms are generated in the order of InteractionOperator.ladder_terms
    and placed with fermi_term_from_ladder. Coefficients with absolute value
    at most tolerance are skipped, and products that vanish, such as
    a^dagger_p a^dagger_p a_r a_s, are dropped by the sum.

    Args:
        operator (InteractionOperator): The operator to convert.
        tolerance (float): Coefficients at or below this size are skipped.
        sparse (bool): Whether the terms of the sum are sparse.

    Returns:
        FermiSum

    Raises:
        TypeError: Operator must be an InteractionOperator.
    """
    if not isinstance(operator, InteractionOperator):
        raise TypeError('Operator must be an InteractionOperator.')
    n_sites = operator.n_sites
    fermi_sum = FermiSum(op_type=FermiOp, n_sites=n_sites, sparse=sparse)
    n_candidates = 0
    for ladder_ops, coefficient in operator.ladder_terms(tolerance):
        fermi_sum.add(fermi_term_from_ladder(ladder_ops, n_sites, coefficient, sparse=sparse))
        n_candidates += 1
    logging.debug('Built FermiSum with %d terms from %d tensor entries.', len(fermi_sum),
                  n_candidates)
    return fermi_sum
