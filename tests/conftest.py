"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pyqpalgebra import AlgebraConfig, CSCStore


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_store(rng):
    """
    Factory for random general stores.

    Columns are stored with their row indices shuffled so kernels see
    unsorted input.
    """
    def _make(m, n, density=0.3):
        dense = rng.standard_normal((m, n))
        dense[rng.random((m, n)) >= density] = 0.0
        store = CSCStore.from_dense(dense)
        for j in range(n):
            lo, hi = store.p[j], store.p[j + 1]
            perm = lo + rng.permutation(hi - lo)
            store.i[lo:hi] = store.i[perm]
            store.x[lo:hi] = store.x[perm]
        return store
    return _make


@pytest.fixture
def make_symmetric(rng):
    """
    Factory for random symmetric matrices.

    Returns (upper, full): the upper-triangular store and the dense
    symmetric matrix it represents.
    """
    def _make(n, density=0.3):
        U = np.triu(rng.standard_normal((n, n)))
        U[np.triu(rng.random((n, n)) >= density, k=1)] = 0.0
        U[np.diag_indices(n)] = 1.0 + rng.random(n)
        full = U + U.T - np.diag(np.diag(U))
        return CSCStore.from_dense(U), full
    return _make


@pytest.fixture
def example_triu():
    """
    3x3 upper-triangular P with diagonal [2, 3, 4] and P[0, 1] = 1.
    """
    return CSCStore.from_dense([[2.0, 1.0, 0.0],
                                [0.0, 3.0, 0.0],
                                [0.0, 0.0, 4.0]])


@pytest.fixture
def kernel_config():
    """Config that keeps every product on the internal kernels."""
    return AlgebraConfig(nnz_threshold=10**9)


@pytest.fixture
def vendor_config():
    """Config that sends every product to the scipy vendor."""
    return AlgebraConfig(nnz_threshold=0)
