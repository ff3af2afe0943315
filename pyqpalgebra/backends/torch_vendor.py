"""
Optional vendor backend over torch.sparse.

Performance path for large matrices, on CPU or GPU (CUDA, MPS). Validated
against the internal kernels to the VENDOR_FP64 / FP32 tolerance tiers.

Layout trick: the CSC arrays of A are exactly the CSR arrays of A', so
apply_transposed wraps the stored arrays without conversion. apply needs
the CSR arrays of A and converts through scipy first. For an 's' descriptor
the triangle is expanded once per call (materialize_full); the full matrix
is symmetric, so A*x == A'*x and the no-conversion path serves both
directions.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyqpalgebra.backends.descriptor import BackendDescriptor
from pyqpalgebra.core.compute.device import DeviceChoice, DeviceInfo, select_device, torch_available
from pyqpalgebra.core.compute.precision import Precision
from pyqpalgebra.core.exceptions import BackendUnavailableError
from pyqpalgebra.csc import symmetric
from pyqpalgebra.csc.kernels import accumulate
from pyqpalgebra.csc.store import CSCStore


class TorchBackend:
    """
    Vendor backend using torch sparse CSR mat-vec.

    Implements the MatrixBackend protocol. Inputs and outputs stay NumPy
    buffers; data moves to the device for the product and back.
    """

    def __init__(self, device: DeviceChoice = 'cpu', precision: Precision = Precision.DOUBLE):
        """
        Args:
            device: 'cpu', 'cuda', 'mps' or 'auto' (see select_device)
            precision: element width used on the device

        Raises:
            BackendUnavailableError: If PyTorch is not installed, the device
                is unavailable, or the device lacks float64 support while
                DOUBLE precision is requested
        """
        if not torch_available():
            raise BackendUnavailableError(
                "PyTorch is not installed. Install the 'gpu' extra, "
                "or use vendor='scipy'.",
                backend='torch',
                device=device,
            )
        import torch

        info: DeviceInfo = select_device(device)
        if precision is Precision.DOUBLE and not info.supports_fp64:
            raise BackendUnavailableError(
                f"{info.device_type.upper()} does not support float64. "
                "Use precision='single' or device='cpu'.",
                backend='torch',
                device=info.device_type,
            )

        self.device_info = info
        self.device = torch.device(info.torch_device)
        self.precision = precision
        self.dtype = torch.float64 if precision is Precision.DOUBLE else torch.float32

    @property
    def name(self) -> str:
        return f'torch_{self.device_info.device_type}'

    def _csr(self, crow: NDArray[np.int64], col: NDArray[np.int64], values: NDArray[Any], shape: tuple[int, int]):
        import torch

        return torch.sparse_csr_tensor(
            torch.from_numpy(np.ascontiguousarray(crow)),
            torch.from_numpy(np.ascontiguousarray(col)),
            torch.from_numpy(np.ascontiguousarray(values)),
            size=shape,
        ).to(device=self.device, dtype=self.dtype)

    def _matvec(self, csr, x: NDArray[np.floating[Any]]) -> NDArray[np.float64]:
        import torch

        xt = torch.from_numpy(np.ascontiguousarray(x)).to(device=self.device, dtype=self.dtype)
        out = (csr @ xt.unsqueeze(1)).squeeze(1)
        return out.cpu().numpy()

    def _transposed_csr(self, store: CSCStore):
        nnz = store.nnz
        return self._csr(store.p, store.i[:nnz], store.x[:nnz], (store.n, store.m))

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
            csr = self._transposed_csr(symmetric.materialize_full(store))
        else:
            A = store.to_scipy().tocsr()
            csr = self._csr(A.indptr.astype(np.int64), A.indices.astype(np.int64), A.data, A.shape)
        accumulate(y, self._matvec(csr, x), alpha, beta)

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
            csr = self._transposed_csr(symmetric.materialize_full(store))
        else:
            csr = self._transposed_csr(store)
        accumulate(y, self._matvec(csr, x), alpha, beta)

    def scale(self, store: CSCStore, factor: float) -> None:
        import torch

        values = torch.from_numpy(store.x).to(device=self.device, dtype=self.dtype)
        values.mul_(factor)
        store.x[:] = values.cpu().numpy()

    def __repr__(self) -> str:
        return f"TorchBackend(device={self.device_info.torch_device!r}, precision={self.precision.value!r})"
