"""
Core infrastructure for PyQPAlgebra.

This module provides shared abstractions and utilities used by the CSC
kernels, the backends and the matrix facade.

Key components:
    protocols: MatrixBackend protocol
    capabilities: Profile and capability strings
    exceptions: Exception and warning hierarchy
    validation: Boundary validators
    compute: Precision, tolerances, timing, device detection
"""

from pyqpalgebra.core.protocols import MatrixBackend
from pyqpalgebra.core.capabilities import Profile
from pyqpalgebra.core.exceptions import (
    PyQPAlgebraError,
    ValidationError,
    DimensionError,
    BackendUnavailableError,
    BackendMismatchError,
    SymmetryWarning,
)

__all__ = [
    # Protocols
    "MatrixBackend",
    # Profiles
    "Profile",
    # Exceptions
    "PyQPAlgebraError",
    "ValidationError",
    "DimensionError",
    "BackendUnavailableError",
    "BackendMismatchError",
    "SymmetryWarning",
]
