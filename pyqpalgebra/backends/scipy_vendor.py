"""
Vendor backend over scipy.sparse and BLAS.

Products go through scipy's compiled CSC mat-vec; scalar scaling goes through
the BLAS ?scal routine matching the value dtype. scipy has no symmetric
sparse mat-vec, so for an 's' descriptor the product is assembled from the
stored triangle as

    A*x = U*x + U'*x - diag(U).*x

which touches each stored entry twice but never builds the lower triangle.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import get_blas_funcs

from pyqpalgebra.backends.descriptor import BackendDescriptor
from pyqpalgebra.csc.kernels import accumulate
from pyqpalgebra.csc.store import CSCStore


class ScipyBackend:
    """
    CPU vendor backend using scipy.sparse.

    Implements the MatrixBackend protocol.
    """

    @property
    def name(self) -> str:
        return 'scipy'

    def _product(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        transposed: bool,
    ) -> NDArray[np.floating[Any]]:
        A = store.to_scipy()
        if descriptor.is_symmetric:
            return A @ x + A.T @ x - A.diagonal() * x
        if transposed:
            return A.T @ x
        return A @ x

    def apply(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        alpha: float,
        beta: float,
    ) -> None:
        accumulate(y, self._product(store, descriptor, x, transposed=False), alpha, beta)

    def apply_transposed(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        alpha: float,
        beta: float,
    ) -> None:
        accumulate(y, self._product(store, descriptor, x, transposed=True), alpha, beta)

    def scale(self, store: CSCStore, factor: float) -> None:
        if store.nzmax == 0:
            return
        scal = get_blas_funcs('scal', (store.x,))
        # ?scal works in place on contiguous input of its own dtype; the
        # assignment covers the copy f2py makes otherwise.
        store.x[:] = scal(factor, store.x)

    def __repr__(self) -> str:
        return "ScipyBackend()"
