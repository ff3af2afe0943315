"""
Core protocols for PyQPAlgebra.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a new
vendor backend can be dropped in without inheriting from anything here.

Design Principles:
    - Narrow contract: apply, apply_transposed, scale. Everything else the
      facade offers (norms, diagonal scaling, extraction) runs on the internal
      kernels regardless of backend
    - Results are written in place into caller-owned buffers
    - The backend is told about symmetry only through the descriptor
"""

from __future__ import annotations

from typing import Protocol, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyqpalgebra.csc.store import CSCStore
    from pyqpalgebra.backends.descriptor import BackendDescriptor


@runtime_checkable
class MatrixBackend(Protocol):
    """
    Protocol for computational backends of the matrix facade.

    Each backend knows how to multiply a CSC store (interpreted through a
    BackendDescriptor) by a dense vector, accumulating into another dense
    vector:

        y <- alpha * op(A) * x + beta * y

    Backends hold no per-matrix state beyond optional caches keyed on the
    store; all inputs are passed at call time. This makes them easy to test
    and swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{library}' or '{library}_{device}'
        Examples: 'kernel', 'scipy', 'torch_cpu', 'torch_cuda'
        """
        ...

    def apply(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        alpha: float,
        beta: float,
    ) -> None:
        """
        Compute y <- alpha*A*x + beta*y in place.

        When beta == 0 the previous contents of y are never read.
        """
        ...

    def apply_transposed(
        self,
        store: CSCStore,
        descriptor: BackendDescriptor,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        alpha: float,
        beta: float,
    ) -> None:
        """Compute y <- alpha*A'*x + beta*y in place."""
        ...

    def scale(self, store: CSCStore, factor: float) -> None:
        """Multiply every stored value of the store by factor, in place."""
        ...
