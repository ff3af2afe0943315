"""
Dispatch-threshold calibration.

The non-zero threshold separating the internal kernels from the vendor
backend depends on the vendor library and the machine. calibrate_nnz_threshold
measures both paths on random matrices of growing size and reports the
largest non-zero count at which the kernel was still at least as fast.

Example:
    >>> from pyqpalgebra import set_config, get_config
    >>> from pyqpalgebra.tuning import calibrate_nnz_threshold
    >>> report = calibrate_nnz_threshold()
    >>> set_config(get_config().with_changes(nnz_threshold=report.threshold))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from pyqpalgebra.backends import KERNEL_BACKEND, get_vendor_backend
from pyqpalgebra.backends.descriptor import Symmetry, descriptor_for
from pyqpalgebra.config import AlgebraConfig, get_config
from pyqpalgebra.core.compute.timing import Timer, best_time
from pyqpalgebra.core.compute.tolerances import select_tolerance
from pyqpalgebra.core.exceptions import BackendMismatchError, ValidationError
from pyqpalgebra.csc.store import CSCStore


DEFAULT_SIZES = (4, 8, 16, 32, 64, 128, 256)


@dataclass(frozen=True)
class CalibrationReport:
    """
    Outcome of a threshold calibration.

    Attributes:
        threshold: Suggested AlgebraConfig.nnz_threshold
        vendor_name: Backend the kernel was compared against
        symmetry: Storage mode of the test matrices
        nnz: Non-zero count of each test matrix, ascending
        kernel_seconds: Best kernel time per matrix
        vendor_seconds: Best vendor time per matrix
        timing: Timer sections plus 'total_seconds'
    """
    threshold: int
    vendor_name: str
    symmetry: Symmetry
    nnz: tuple[int, ...]
    kernel_seconds: tuple[float, ...]
    vendor_seconds: tuple[float, ...]
    timing: dict[str, float]

    @property
    def crossover_found(self) -> bool:
        """True if the vendor beat the kernel on the largest matrix."""
        return bool(self.vendor_seconds) and self.vendor_seconds[-1] < self.kernel_seconds[-1]


def _random_store(
    n: int,
    density: float,
    symmetry: Symmetry,
    rng: np.random.Generator,
    config: AlgebraConfig,
) -> CSCStore:
    dense = rng.standard_normal((n, n))
    dense[rng.random((n, n)) >= density] = 0.0
    if symmetry is Symmetry.UPPER_TRIANGULAR:
        dense = np.triu(dense)
        # keep the diagonal populated so every row is touched
        dense[np.diag_indices(n)] = 1.0 + rng.random(n)
    return CSCStore.from_dense(dense, config.precision)


def calibrate_nnz_threshold(
    sizes: Sequence[int] = DEFAULT_SIZES,
    density: float = 0.2,
    repeats: int = 50,
    symmetry: Symmetry = Symmetry.NONE,
    config: AlgebraConfig | None = None,
    seed: int = 0,
) -> CalibrationReport:
    """
    Time kernel vs vendor apply() on random square matrices.

    Args:
        sizes: Matrix dimensions to try
        density: Fraction of stored entries in each test matrix
        repeats: Calls per measurement; the fastest is kept
        symmetry: Storage mode of the test matrices
        config: Selects the vendor and precision; defaults to get_config()
        seed: Seed for the test matrices and vectors

    Returns:
        CalibrationReport; threshold is the largest measured non-zero count
        at which the kernel was at least as fast as the vendor (0 if the
        vendor always won)

    Raises:
        ValidationError: If sizes is empty or density is outside (0, 1]
        BackendMismatchError: If the vendor's result differs from the
            kernel's beyond the tolerance tier for its name and precision
    """
    if len(sizes) == 0:
        raise ValidationError("sizes: at least one matrix size is required")
    if not 0.0 < density <= 1.0:
        raise ValidationError(f"density: must lie in (0, 1], got {density}")

    config = config if config is not None else get_config()
    vendor = get_vendor_backend(config)
    tier = select_tolerance(vendor.name, config.precision)
    descriptor = descriptor_for(symmetry)
    rng = np.random.default_rng(seed)
    dtype = config.precision.dtype

    samples: list[tuple[int, float, float]] = []
    timer = Timer(sync_cuda=vendor.name == 'torch_cuda')
    timer.start()

    for n in sorted(sizes):
        store = _random_store(n, density, symmetry, rng, config)
        x = rng.standard_normal(n).astype(dtype)
        y_kernel = np.empty(n, dtype=dtype)
        y_vendor = np.empty(n, dtype=dtype)

        KERNEL_BACKEND.apply(store, descriptor, x, y_kernel, 1.0, 0.0)
        vendor.apply(store, descriptor, x, y_vendor, 1.0, 0.0)
        if not np.allclose(y_vendor, y_kernel, rtol=tier.rtol, atol=tier.atol):
            err = float(np.max(np.abs(y_vendor - y_kernel)))
            raise BackendMismatchError(
                f"{vendor.name} differs from kernel by {err:.3e} on a {n} x {n} matrix "
                f"(tier {tier.name}: rtol={tier.rtol}, atol={tier.atol})",
                backend=vendor.name,
                max_abs_error=err,
                rtol=tier.rtol,
            )

        with timer.section(f'kernel_n{n}'):
            t_kernel = best_time(
                lambda: KERNEL_BACKEND.apply(store, descriptor, x, y_kernel, 1.0, 0.0),
                repeats,
            )
        with timer.section(f'{vendor.name}_n{n}'):
            t_vendor = best_time(
                lambda: vendor.apply(store, descriptor, x, y_vendor, 1.0, 0.0),
                repeats,
                sync_cuda=vendor.name == 'torch_cuda',
            )
        samples.append((store.nzmax, t_kernel, t_vendor))

    timer.stop()
    samples.sort(key=lambda s: s[0])

    threshold = 0
    for nnz, t_kernel, t_vendor in samples:
        if t_kernel <= t_vendor:
            threshold = nnz

    return CalibrationReport(
        threshold=threshold,
        vendor_name=vendor.name,
        symmetry=symmetry,
        nnz=tuple(s[0] for s in samples),
        kernel_seconds=tuple(s[1] for s in samples),
        vendor_seconds=tuple(s[2] for s in samples),
        timing=timer.result(),
    )
