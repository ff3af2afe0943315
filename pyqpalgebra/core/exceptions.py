"""
Exception hierarchy for PyQPAlgebra.

All exceptions inherit from PyQPAlgebraError to allow catching any
library-specific error.

Design principles:
    - Exceptions are raised only at construction boundaries; the numerical
      hot paths (apply, scaling, norms) trust their inputs
    - Symmetry precondition violations are NOT exceptions: they return a
      sentinel and optionally emit a SymmetryWarning
    - Error messages carry actual vs expected values
"""


class PyQPAlgebraError(Exception):
    """Base exception for all PyQPAlgebra errors."""
    pass


class ValidationError(PyQPAlgebraError):
    """
    Input validation failed.

    Raised when a caller-supplied CSC structure, vector or configuration
    value fails validation at a construction boundary.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array lengths don't match the matrix dimensions they are
    paired with (e.g. len(p) != n + 1, or an update batch whose values and
    positions differ in length).

    Attributes:
        name: Name of the offending array
        expected: Expected length, if known
        actual: Actual length, if known
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.expected = expected
        self.actual = actual


class BackendUnavailableError(PyQPAlgebraError):
    """
    A requested vendor backend cannot be used.

    Raised when a vendor library (e.g. PyTorch) is not installed, or an
    explicitly requested device (e.g. 'cuda') is not present.

    Attributes:
        backend: Name of the requested backend
        device: Requested device, if any
    """

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        device: str | None = None,
    ):
        super().__init__(message)
        self.backend = backend
        self.device = device


class SymmetryWarning(UserWarning):
    """
    Diagnostic emitted when an operation is called on a matrix whose
    storage mode does not support it (quadratic_form on a full matrix,
    extract_rows on an upper-triangular one).
    """
    pass


class BackendMismatchError(PyQPAlgebraError):
    """
    A vendor backend disagrees with the internal kernels beyond tolerance.

    Raised by threshold calibration, which refuses to time a vendor that
    produces different numbers.

    Attributes:
        backend: Name of the disagreeing backend
        max_abs_error: Largest absolute difference observed
        rtol: Relative tolerance that was exceeded
    """

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        max_abs_error: float | None = None,
        rtol: float | None = None,
    ):
        super().__init__(message)
        self.backend = backend
        self.max_abs_error = max_abs_error
        self.rtol = rtol
