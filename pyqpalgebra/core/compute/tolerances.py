"""
Tolerance tiers for backend-equivalence checks.

Defines how closely the vendor paths must track the internal kernels:
- Kernel FP64 (reference): exact up to summation order
- Vendor FP64 (scipy, torch cpu/cuda in double): 1e-9 relative
- Any FP32 path: relaxed for single-precision arithmetic

Used by the test suite and by threshold calibration to confirm a vendor
produces the same answer as the reference before timing it.
"""

from dataclasses import dataclass

from pyqpalgebra.core.compute.precision import Precision


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Internal kernel in double precision: reference results
KERNEL_FP64 = ToleranceTier(
    rtol=1e-12,
    atol=1e-14,
    name='kernel_fp64',
    description='Internal kernel, double precision (reference)',
)

# Vendor mat-vec in double precision
VENDOR_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='vendor_fp64',
    description='Vendor sparse mat-vec, double precision, matches kernel',
)

# Any backend in single precision
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision, kernel or vendor',
)


def select_tolerance(backend_name: str, precision: Precision = Precision.DOUBLE) -> ToleranceTier:
    """Select the tolerance tier for results produced by a backend."""
    if precision is Precision.SINGLE:
        return FP32
    if backend_name == 'kernel':
        return KERNEL_FP64
    return VENDOR_FP64
