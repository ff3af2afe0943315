"""
Tests for the PyQPAlgebra exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyQPAlgebraError)
    - Diagnostic attributes on DimensionError, BackendUnavailableError,
      BackendMismatchError
    - SymmetryWarning is a UserWarning, not an exception of the library
"""

import warnings

import pytest

from pyqpalgebra.core.exceptions import (
    BackendMismatchError,
    BackendUnavailableError,
    DimensionError,
    PyQPAlgebraError,
    SymmetryWarning,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyQPAlgebraError."""

    def test_validation_error_is_library_error(self):
        with pytest.raises(PyQPAlgebraError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong length")

    def test_backend_unavailable_is_library_error(self):
        with pytest.raises(PyQPAlgebraError):
            raise BackendUnavailableError("no torch")

    def test_backend_unavailable_is_not_validation_error(self):
        assert not issubclass(BackendUnavailableError, ValidationError)

    def test_backend_mismatch_is_library_error(self):
        with pytest.raises(PyQPAlgebraError):
            raise BackendMismatchError("disagree")

    def test_symmetry_warning_is_user_warning(self):
        assert issubclass(SymmetryWarning, UserWarning)
        assert not issubclass(SymmetryWarning, PyQPAlgebraError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_dimension_error_defaults(self):
        err = DimensionError("wrong length")
        assert err.name is None
        assert err.expected is None
        assert err.actual is None
        assert str(err) == "wrong length"

    def test_dimension_error_fields(self):
        err = DimensionError("p: expected length 4, got 3", name='p', expected=4, actual=3)
        assert (err.name, err.expected, err.actual) == ('p', 4, 3)

    def test_backend_unavailable_fields(self):
        err = BackendUnavailableError("cuda missing", backend='torch', device='cuda')
        assert err.backend == 'torch'
        assert err.device == 'cuda'

    def test_backend_mismatch_fields(self):
        err = BackendMismatchError("off", backend='scipy', max_abs_error=1e-3, rtol=1e-9)
        assert err.backend == 'scipy'
        assert err.max_abs_error == 1e-3
        assert err.rtol == 1e-9

    def test_symmetry_warning_can_be_caught(self):
        with pytest.warns(SymmetryWarning, match="triangular"):
            warnings.warn("not upper triangular", SymmetryWarning)
