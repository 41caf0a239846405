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
"""Options and helpers to split work on sums over a pool of workers."""
import logging
import multiprocessing
import multiprocessing.pool

from quantumops.ops.operators import OpSum, OpTerm


class ParallelOptions(object):
    """Options for the parallel routines."""

    def __init__(self, processes=10, pool=None):
        """
        Args:
            processes(int): Number of workers to use.
            pool(multiprocessing.pool.ThreadPool): A pool of workers. When
                given it is used as is and never closed; otherwise a new pool
                is created for each call and closed afterwards.
        """
        if processes <= 0:
            raise ValueError('Invalid number of processors specified {} <= 0'
                             .format(processes))

        self.processes = min(processes, multiprocessing.cpu_count())
        self.pool = pool

    def get_processes(self, num):
        """Number of real processes to use."""
        return max(min(num, self.processes), 1)

    def get_pool(self, num=None):
        """Gets a pool of workers to do some parallel work.

        Args:
            num(int): Number of workers one needs.
        Returns:
            pool(multiprocessing.pool.ThreadPool): A pool of workers.
        """
        if self.pool is not None:
            return self.pool
        processes = self.get_processes(num or self.processes)
        logging.info("Calling multiprocessing.pool.ThreadPool(%d)", processes)
        return multiprocessing.pool.ThreadPool(processes)

    def release_pool(self, pool):
        """Closes a pool returned by get_pool unless it was given by the user."""
        if pool is not self.pool:
            pool.close()
            pool.join()

    def map(self, function, items):
        """Apply function to every item on a pool and return the results in order."""
        items = list(items)
        pool = self.get_pool(len(items))
        try:
            return pool.map(function, items)
        finally:
            self.release_pool(pool)


def get_operator_groups(op_sum, num_groups):
    """Split a sum into at most num_groups sums of consecutive terms.

    Args:
        op_sum(OpSum): The sum to split.
        num_groups(int): How many groups to make.

    Returns:
        A list of sums of the same class, in canonical order, whose sum is
        op_sum.
    """
    if num_groups < 1:
        raise ValueError('Invalid num_groups {} < 1.'.format(num_groups))
    terms = op_sum.terms
    num_groups = min(num_groups, len(terms))
    groups = []
    for i in range(num_groups):
        start = len(terms) * i // num_groups
        stop = len(terms) * (i + 1) // num_groups
        groups.append(type(op_sum)(terms[start:stop], op_type=op_sum.op_type,
                                   n_sites=op_sum.n_sites, sparse=op_sum.is_sparse))
    return groups


def _multiply_group(args):
    group, multiplier = args
    return group * multiplier


def parallel_product(op_sum_a, op_sum_b, options=None):
    """Multiply two sums, splitting the left sum over workers.

    Each worker multiplies one group of terms of op_sum_a with all of
    op_sum_b into its own sum. The partial sums are then added in order,
    so the result is the same as op_sum_a * op_sum_b.

    Args:
        op_sum_a(OpSum): The left factor.
        op_sum_b(OpSum or OpTerm): The right factor.
        options(ParallelOptions): Options for the pool. Multiplies
            sequentially when not given.

    Returns:
        product(OpSum): The product.
    """
    if not isinstance(op_sum_a, OpSum) or not isinstance(op_sum_b, (OpSum, OpTerm)):
        raise TypeError('parallel_product expects an OpSum times an OpSum or an OpTerm.')
    if options is None or len(op_sum_a) < 2:
        return op_sum_a * op_sum_b

    groups = get_operator_groups(op_sum_a, options.processes)
    partial_products = options.map(_multiply_group,
                                   [(group, op_sum_b) for group in groups])
    product = partial_products[0]
    for partial_product in partial_products[1:]:
        product += partial_product
    return product
