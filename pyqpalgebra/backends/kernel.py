"""
Internal kernel backend.

Runs products on the NumPy kernels of pyqpalgebra.csc. This is the reference
implementation every vendor backend is validated against, and the one used
for matrices at or below the dispatch threshold, where a vendor call's fixed
overhead dominates.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyqpalgebra.backends.descriptor import BackendDescriptor
from pyqpalgebra.csc import kernels, symmetric
from pyqpalgebra.csc.store import CSCStore


class KernelBackend:
    """
    Backend over the internal CSC kernels.

    Implements the MatrixBackend protocol. The descriptor's matrix type
    picks the kernel family: general kernels for 'g', the upper-triangular
    kernel (for both product directions) for 's'.
    """

    @property
    def name(self) -> str:
        return 'kernel'

    def apply(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        alpha: float,
        beta: float,
    ) -> None:
        if descriptor.is_symmetric:
            symmetric.axpy_sym_triu(store, x, y, alpha, beta)
        else:
            kernels.axpy(store, x, y, alpha, beta)

    def apply_transposed(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        alpha: float,
        beta: float,
    ) -> None:
        if descriptor.is_symmetric:
            symmetric.axpy_sym_triu(store, x, y, alpha, beta)
        else:
            kernels.axpy_transposed(store, x, y, alpha, beta)

    def scale(self, store: CSCStore, factor: float) -> None:
        kernels.scale(store, factor)

    def __repr__(self) -> str:
        return "KernelBackend()"
