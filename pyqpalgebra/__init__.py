"""
PyQPAlgebra: sparse matrix/vector algebra for ADMM quadratic-program solvers.

Represents sparse matrices in CSC form (optionally as the upper triangle of
a symmetric matrix) and routes each product either to internal NumPy kernels
or to a vendor sparse mat-vec (scipy.sparse, or torch.sparse on CPU/GPU),
chosen by a non-zero-count threshold.

Submodules:
    csc: CSCStore and its kernels
    backends: kernel and vendor backends, descriptor, dispatch
    matrix: MinimalMatrix / FixedStructureMatrix / FullMatrix facades
    vector: VectorF / VectorI dense containers
    config: AlgebraConfig and the process default
    tuning: dispatch-threshold calibration

Example:
    >>> import numpy as np
    >>> from pyqpalgebra import FullMatrix, Symmetry, VectorF
    >>> P = FullMatrix.from_dense([[2, 1, 0], [0, 3, 0], [0, 0, 4]],
    ...                           Symmetry.UPPER_TRIANGULAR)
    >>> P.quadratic_form(VectorF.from_array(np.ones(3)))
    5.5
"""

__version__ = "0.1.0"

from pyqpalgebra.config import AlgebraConfig, config_context, get_config, set_config
from pyqpalgebra.core.capabilities import Profile
from pyqpalgebra.core.compute.precision import Precision
from pyqpalgebra.core.exceptions import (
    PyQPAlgebraError,
    ValidationError,
    DimensionError,
    BackendUnavailableError,
    BackendMismatchError,
    SymmetryWarning,
)
from pyqpalgebra.csc.store import CSCStore
from pyqpalgebra.backends.descriptor import BackendDescriptor, Symmetry
from pyqpalgebra.matrix import (
    MinimalMatrix,
    FixedStructureMatrix,
    FullMatrix,
    QUAD_FORM_FAILURE,
    matrix_class_for,
)
from pyqpalgebra.vector import VectorF, VectorI

__all__ = [
    "__version__",
    # Configuration
    "AlgebraConfig",
    "config_context",
    "get_config",
    "set_config",
    "Profile",
    "Precision",
    # Data
    "CSCStore",
    "VectorF",
    "VectorI",
    # Facade
    "Symmetry",
    "BackendDescriptor",
    "MinimalMatrix",
    "FixedStructureMatrix",
    "FullMatrix",
    "QUAD_FORM_FAILURE",
    "matrix_class_for",
    # Exceptions
    "PyQPAlgebraError",
    "ValidationError",
    "DimensionError",
    "BackendUnavailableError",
    "BackendMismatchError",
    "SymmetryWarning",
]
