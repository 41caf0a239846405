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
"""Jordan-Wigner transform on fermionic operators."""
from quantumops.config import EQ_TOLERANCE
from quantumops.ops.operators import (AbstractPauli, FermiOp, OpSum, OpTerm, Pauli, PauliSum,
                                      PauliTerm)
from quantumops.ops.representations import InteractionOperator
from quantumops.transforms.opconversions.conversions import get_fermi_sum

# The image of each FermiOp on its own site as (Pauli label, coefficient)
# pairs. Raise and lower also carry a string of Z on every earlier site.
_LOCAL_IMAGES = {
    'I': (('I', 1),),
    'N': (('I', .5), ('Z', -.5)),
    'E': (('I', .5), ('Z', .5)),
    '+': (('X', .5), ('Y', -.5j)),
    '-': (('X', .5), ('Y', .5j)),
    '0': (),
    'Z': (('Z', -1),),
}


def jordan_wigner(operator, pauli_type=Pauli):
    r""" Apply the Jordan-Wigner transform to a FermiTerm, FermiSum or
    InteractionOperator to convert it to Pauli operators.

    Operators are mapped as follows:
    a_j^\dagger -> Z_0 .. Z_{j-1} (X_j - iY_j) / 2
    a_j -> Z_0 .. Z_{j-1} (X_j + iY_j) / 2
    N_j -> (I - Z_j) / 2
    E_j -> (I + Z_j) / 2
    (N - E)_j -> -Z_j

    Args:
        operator: The fermionic operator.
        pauli_type (type): The Pauli encoding of the result.

    Returns:
        transformed_operator: A PauliSum with the storage mode of the input.

    Warning:
        The runtime of this method is exponential in the number of raising
        and lowering operators in a term.

    Raises:
        TypeError: Operator must be a fermionic OpTerm, a fermionic OpSum,
            or an InteractionOperator.
    """
    if isinstance(operator, OpTerm):
        return jordan_wigner_term(operator, pauli_type)
    if isinstance(operator, OpSum):
        return jordan_wigner_sum(operator, pauli_type)
    if isinstance(operator, InteractionOperator):
        return jordan_wigner_interaction_op(operator, pauli_type)
    raise TypeError('Operator must be a fermionic OpTerm, a fermionic OpSum, '
                    'or an InteractionOperator.')


def _check_pauli_type(pauli_type):
    if not (isinstance(pauli_type, type) and issubclass(pauli_type, AbstractPauli)):
        raise TypeError('pauli_type must be a Pauli encoding, not {!r}.'.format(pauli_type))


def _local_image(site, op, n_sites, pauli_type, sparse):
    """The image of op on site as a PauliSum."""
    z_string = {}
    if op.parity:
        z_string = dict.fromkeys(range(site), pauli_type.from_label('Z'))
    image = PauliSum(op_type=pauli_type, n_sites=n_sites, sparse=sparse)
    for label, coefficient in _LOCAL_IMAGES[op.label]:
        ops = dict(z_string)
        ops[site] = pauli_type.from_label(label)
        image.add(PauliTerm(ops, coefficient, op_type=pauli_type, n_sites=n_sites,
                            sparse=sparse))
    return image


def jordan_wigner_term(term, pauli_type=Pauli):
    """Transform a single fermionic term.

    The sites are visited in ascending order and the running product is
    multiplied on the right by the image of each factor, so terms that
    cancel are dropped as soon as they appear.
    """
    if not isinstance(term, OpTerm) or term.op_type is not FermiOp:
        raise TypeError('jordan_wigner_term expects a term of FermiOp, got {!r}.'.format(term))
    _check_pauli_type(pauli_type)
    n_sites = term.n_sites
    sparse = term.is_sparse
    transformed_term = PauliSum(
        [PauliTerm.identity(n_sites, term.coefficient, op_type=pauli_type, sparse=sparse)],
        op_type=pauli_type, n_sites=n_sites, sparse=sparse)
    sparse_ops = term.sparse_ops()
    for site in sorted(sparse_ops):
        transformed_term *= _local_image(site, sparse_ops[site], n_sites, pauli_type, sparse)
        if not len(transformed_term):
            break
    return transformed_term


def jordan_wigner_sum(op_sum, pauli_type=Pauli):
    """Transform a FermiSum term by term and add up the images."""
    if not isinstance(op_sum, OpSum) or (len(op_sum) and op_sum.op_type is not FermiOp):
        raise TypeError('jordan_wigner_sum expects a sum of FermiOp terms, got {!r}.'.format(
            op_sum))
    _check_pauli_type(pauli_type)
    transformed_operator = PauliSum(op_type=pauli_type, n_sites=op_sum.n_sites,
                                    sparse=op_sum.is_sparse if len(op_sum) else None)
    for term in op_sum:
        transformed_operator += jordan_wigner_term(term, pauli_type)
    return transformed_operator


def jordan_wigner_interaction_op(iop, pauli_type=Pauli, tolerance=EQ_TOLERANCE):
    """Output InteractionOperator as PauliSum under JW transform.

    The operator is first enumerated as a FermiSum, skipping coefficients at
    or below tolerance, and then mapped term by term. Complex tensors are
    supported.

    Returns:
        pauli_sum: A dense PauliSum.
    """
    if not isinstance(iop, InteractionOperator):
        raise TypeError('iop must be an InteractionOperator.')
    return jordan_wigner_sum(get_fermi_sum(iop, tolerance), pauli_type)
