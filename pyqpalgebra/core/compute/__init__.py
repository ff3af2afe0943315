"""
Shared compute infrastructure for PyQPAlgebra.

IMPORTANT: This is NOT where matrix backends live. Those go in
pyqpalgebra/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection (torch vendor)
    timing: Execution timing utilities (threshold calibration)
    precision: Element width and machine epsilon
    tolerances: Tolerance tiers for backend equivalence
"""

from pyqpalgebra.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
    torch_available,
)
from pyqpalgebra.core.compute.precision import Precision, machine_epsilon
from pyqpalgebra.core.compute.timing import Timer, best_time, timed
from pyqpalgebra.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    "torch_available",
    # Precision
    "Precision",
    "machine_epsilon",
    # Timing
    "Timer",
    "best_time",
    "timed",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
