"""
Computational backends for the matrix facade.

Available backends:
    KernelBackend: internal NumPy kernels (reference; small matrices)
    ScipyBackend: vendor path via scipy.sparse and BLAS (default vendor)
    TorchBackend: vendor path via torch.sparse on CPU/CUDA/MPS (optional)

Selection:
    get_vendor_backend(config) builds the vendor named by the config once per
    facade. select_backend() picks, per call, the internal kernel or that
    vendor from the matrix's non-zero count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pyqpalgebra.backends.descriptor import BackendDescriptor, Symmetry, descriptor_for
from pyqpalgebra.backends.kernel import KernelBackend
from pyqpalgebra.backends.scipy_vendor import ScipyBackend
from pyqpalgebra.core.protocols import MatrixBackend

if TYPE_CHECKING:
    from pyqpalgebra.config import AlgebraConfig


KERNEL_BACKEND = KernelBackend()


def get_vendor_backend(config: AlgebraConfig) -> MatrixBackend:
    """
    Instantiate the vendor backend named by config.vendor.

    Raises:
        BackendUnavailableError: If the torch vendor is requested but
            PyTorch or the requested device is unavailable
        ValueError: If the vendor name is unknown
    """
    if config.vendor == 'scipy':
        return ScipyBackend()
    elif config.vendor == 'torch':
        from pyqpalgebra.backends.torch_vendor import TorchBackend
        return TorchBackend(device=config.device, precision=config.precision)
    else:
        raise ValueError(f"Unknown vendor: {config.vendor!r}")


def select_backend(nzmax: int, threshold: int, vendor: MatrixBackend) -> MatrixBackend:
    """
    Dispatch rule: the vendor when nzmax exceeds threshold, else the kernel.
    """
    if nzmax > threshold:
        return vendor
    return KERNEL_BACKEND


__all__ = [
    "BackendDescriptor",
    "Symmetry",
    "descriptor_for",
    "KernelBackend",
    "ScipyBackend",
    "KERNEL_BACKEND",
    "get_vendor_backend",
    "select_backend",
]
