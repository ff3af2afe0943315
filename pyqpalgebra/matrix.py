"""
Backend-selecting matrix facade.

A facade owns a private copy of a CSCStore together with its Symmetry tag,
the BackendDescriptor derived from that tag, and the AlgebraConfig it was
built under. Every operation runs on the caller's thread and writes results
into caller-owned vectors.

Dispatch:
    apply / apply_transposed go to the configured vendor backend when the
    store's capacity exceeds config.nnz_threshold, and to the internal
    kernels otherwise. The symmetry tag picks the kernel family (general or
    upper-triangular); the vendor learns about symmetry via the descriptor.
    Both paths agree to floating-point rounding.

Profiles:
    MinimalMatrix          products, quadratic form, scalings, equality,
                           value updates, raw accessors
    FixedStructureMatrix   + column/row infinity norms
    FullMatrix             + construction from scratch, free(), extract_rows

Precondition violations (quadratic_form on a full matrix, extract_rows on a
triangular one) return a sentinel (-1.0 / None) and, with
config.diagnostics, emit a SymmetryWarning. Vector lengths on the hot paths
are not checked.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyqpalgebra.backends import get_vendor_backend, select_backend
from pyqpalgebra.backends.descriptor import BackendDescriptor, Symmetry, descriptor_for
from pyqpalgebra.config import AlgebraConfig, get_config
from pyqpalgebra.core.capabilities import Profile
from pyqpalgebra.core.exceptions import DimensionError, SymmetryWarning, ValidationError
from pyqpalgebra.core.protocols import MatrixBackend
from pyqpalgebra.csc import kernels, symmetric
from pyqpalgebra.csc.store import CSCStore
from pyqpalgebra.vector import VectorF, VectorI


# Returned by quadratic_form when the matrix is not upper-triangular
QUAD_FORM_FAILURE = -1.0


def _as_symmetry(symmetry: Symmetry | bool) -> Symmetry:
    if isinstance(symmetry, Symmetry):
        return symmetry
    if isinstance(symmetry, (bool, np.bool_)):
        return Symmetry.UPPER_TRIANGULAR if symmetry else Symmetry.NONE
    raise ValidationError(f"symmetry: expected Symmetry or bool, got {symmetry!r}")


def _check_upper_triangular(store: CSCStore) -> None:
    if store.m != store.n:
        raise DimensionError(
            f"upper-triangular storage requires a square matrix, got {store.m} x {store.n}",
            name='csc',
        )
    nnz = store.nnz
    below = store.i[:nnz] > store.entry_columns()
    if np.any(below):
        raise ValidationError(
            f"upper-triangular storage holds {int(np.count_nonzero(below))} "
            "entries below the diagonal"
        )


class MinimalMatrix:
    """
    Sparse matrix facade with the minimal (computational) operation surface.

    The structure is fixed for the lifetime of the object; values change only
    through multiply_scalar, left_scale, right_scale and update_values.
    """

    profile = Profile.MINIMAL

    def __init__(
        self,
        csc: CSCStore,
        symmetry: Symmetry | bool = Symmetry.NONE,
        *,
        config: AlgebraConfig | None = None,
    ):
        """
        Copy `csc` into a new facade.

        Args:
            csc: Source store; never aliased
            symmetry: Storage mode, or a bool (True = upper-triangular)
            config: Settings to capture; defaults to get_config()

        Raises:
            ValidationError: If upper-triangular storage is requested for a
                store with entries below the diagonal
            DimensionError: If upper-triangular storage is requested for a
                non-square store
            BackendUnavailableError: If the configured vendor cannot be used
        """
        config = config if config is not None else get_config()
        symmetry = _as_symmetry(symmetry)
        if symmetry is Symmetry.UPPER_TRIANGULAR:
            _check_upper_triangular(csc)

        self._config = config
        self._symmetry = symmetry
        self._descriptor = descriptor_for(symmetry)
        self._vendor = get_vendor_backend(config)
        self._csc: CSCStore | None = csc.astype(config.precision)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @classmethod
    def supports(cls, capability: str) -> bool:
        """True if this profile exposes the capability. Unknown strings give False."""
        return capability in cls.profile.capabilities

    @property
    def symmetry(self) -> Symmetry:
        return self._symmetry

    @property
    def descriptor(self) -> BackendDescriptor:
        return self._descriptor

    @property
    def config(self) -> AlgebraConfig:
        return self._config

    @property
    def csc(self) -> CSCStore:
        """The owned store. Mutating it bypasses the facade."""
        return self._csc

    @property
    def vendor(self) -> MatrixBackend:
        return self._vendor

    @property
    def active_backend(self) -> MatrixBackend:
        """Backend that apply/apply_transposed dispatch to for this matrix."""
        return select_backend(self._csc.nzmax, self._config.nnz_threshold, self._vendor)

    # ------------------------------------------------------------------
    # Raw data access (for the KKT factorizer)
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._csc.m

    @property
    def cols(self) -> int:
        return self._csc.n

    @property
    def shape(self) -> tuple[int, int]:
        return self._csc.shape

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        return self._csc.x

    @property
    def row_index(self) -> NDArray[np.int64]:
        return self._csc.i

    @property
    def col_ptr(self) -> NDArray[np.int64]:
        return self._csc.p

    @property
    def nonzero_count(self) -> int:
        return self._csc.nnz

    def update_values(
        self,
        new_values: ArrayLike,
        positions: ArrayLike | None = None,
    ) -> None:
        """
        Overwrite stored values in place; structure is unchanged.

        See CSCStore.update_values.
        """
        self._csc.update_values(new_values, positions)

    # ------------------------------------------------------------------
    # Math
    # ------------------------------------------------------------------

    def multiply_scalar(self, sc: float) -> None:
        """A <- sc*A"""
        self._vendor.scale(self._csc, sc)

    def left_scale(self, L: VectorF) -> None:
        """A <- diag(L)*A"""
        kernels.left_diag_multiply(self._csc, L.data)

    def right_scale(self, R: VectorF) -> None:
        """A <- A*diag(R)"""
        kernels.right_diag_multiply(self._csc, R.data)

    def apply(self, x: VectorF, y: VectorF, alpha: float = 1.0, beta: float = 0.0) -> None:
        """y <- alpha*A*x + beta*y"""
        self.active_backend.apply(self._csc, self._descriptor, x.data, y.data, alpha, beta)

    def apply_transposed(self, x: VectorF, y: VectorF, alpha: float = 1.0, beta: float = 0.0) -> None:
        """y <- alpha*A'*x + beta*y"""
        self.active_backend.apply_transposed(self._csc, self._descriptor, x.data, y.data, alpha, beta)

    def quadratic_form(self, x: VectorF) -> float:
        """
        0.5 * x'Px for P stored as its upper triangle.

        Returns QUAD_FORM_FAILURE (-1.0) if the matrix is not upper-triangular.
        """
        if self._symmetry is not Symmetry.UPPER_TRIANGULAR:
            self._diagnostic("quad_form matrix is not upper triangular")
            return QUAD_FORM_FAILURE

        y = VectorF.malloc(x.length, self._config.precision)
        self.apply(x, y, 1.0, 0.0)
        return 0.5 * y.dot(x)

    def equals(self, other: MinimalMatrix, tol: float = 0.0) -> bool:
        """Same symmetry tag and all entries within tol of each other."""
        return (
            self._symmetry is other._symmetry
            and kernels.equals(self._csc, other._csc, tol)
        )

    # ------------------------------------------------------------------

    def _diagnostic(self, message: str) -> None:
        if self._config.diagnostics:
            warnings.warn(message, SymmetryWarning, stacklevel=3)

    def __repr__(self) -> str:
        if self._csc is None:
            return f"{type(self).__name__}(freed)"
        return (
            f"{type(self).__name__}(shape={self.shape}, nnz={self.nonzero_count}, "
            f"symmetry={self._symmetry.name}, vendor={self._vendor.name!r})"
        )


class FixedStructureMatrix(MinimalMatrix):
    """
    Reduced profile: the minimal surface plus infinity norms, as needed by
    problem-scaling heuristics.
    """

    profile = Profile.REDUCED

    def col_inf_norm(self, E: VectorF) -> None:
        """E[j] <- max |A[:, j]|. Uses the stored entries only."""
        kernels.col_inf_norm(self._csc, E.data)

    def row_inf_norm(self, E: VectorF) -> None:
        """E[i] <- max |A[i, :]| of the represented (full) matrix."""
        if self._symmetry is Symmetry.NONE:
            kernels.row_inf_norm(self._csc, E.data)
        else:
            symmetric.row_inf_norm_sym_triu(self._csc, E.data)


class FullMatrix(FixedStructureMatrix):
    """
    Full profile: construction from scratch, explicit release and row
    extraction on top of the reduced surface.
    """

    profile = Profile.FULL

    @classmethod
    def from_csc(
        cls,
        csc: CSCStore,
        symmetry: Symmetry | bool = Symmetry.NONE,
        *,
        config: AlgebraConfig | None = None,
    ) -> FullMatrix | None:
        """
        Copy `csc` into a new matrix.

        Returns:
            The new matrix, or None if the copy could not be allocated.
        """
        try:
            return cls(csc, symmetry, config=config)
        except MemoryError:
            cfg = config if config is not None else get_config()
            if cfg.diagnostics:
                warnings.warn("matrix allocation failed", ResourceWarning, stacklevel=2)
            return None

    @classmethod
    def from_scipy(
        cls,
        A: Any,
        symmetry: Symmetry | bool = Symmetry.NONE,
        *,
        config: AlgebraConfig | None = None,
    ) -> FullMatrix | None:
        """Build from a scipy.sparse matrix or array (see CSCStore.from_scipy)."""
        cfg = config if config is not None else get_config()
        return cls.from_csc(CSCStore.from_scipy(A, cfg.precision), symmetry, config=cfg)

    @classmethod
    def from_dense(
        cls,
        A: ArrayLike,
        symmetry: Symmetry | bool = Symmetry.NONE,
        *,
        config: AlgebraConfig | None = None,
    ) -> FullMatrix | None:
        """
        Build from a dense 2D array. With upper-triangular symmetry only
        the upper triangle of A is kept.
        """
        cfg = config if config is not None else get_config()
        arr = np.asarray(A)
        if _as_symmetry(symmetry) is Symmetry.UPPER_TRIANGULAR and arr.ndim == 2:
            arr = np.triu(arr)
        return cls.from_csc(CSCStore.from_dense(arr, cfg.precision), symmetry, config=cfg)

    @property
    def is_freed(self) -> bool:
        return self._csc is None

    def free(self) -> None:
        """Release the owned store. Any later operation is invalid."""
        self._csc = None

    def extract_rows(self, rows: VectorI) -> FullMatrix | None:
        """
        New matrix holding the rows of A where `rows` is nonzero.

        Returns:
            A NONE-symmetry matrix with a fresh descriptor, or None if this
            matrix is upper-triangular or the result could not be allocated.
        """
        if self._symmetry is Symmetry.UPPER_TRIANGULAR:
            self._diagnostic("row selection not implemented for partially filled matrices")
            return None

        try:
            store = kernels.submatrix_by_rows(self._csc, rows.data)
        except MemoryError:
            if self._config.diagnostics:
                warnings.warn("row extraction allocation failed", ResourceWarning, stacklevel=2)
            return None

        return FullMatrix.from_csc(store, Symmetry.NONE, config=self._config)


_PROFILE_CLASSES: dict[Profile, type[MinimalMatrix]] = {
    Profile.FULL: FullMatrix,
    Profile.REDUCED: FixedStructureMatrix,
    Profile.MINIMAL: MinimalMatrix,
}


def matrix_class_for(profile: Profile | str | None = None) -> type[MinimalMatrix]:
    """
    Facade class exposing exactly the operations of a profile.

    Args:
        profile: Profile or its name; defaults to get_config().profile
    """
    if profile is None:
        profile = get_config().profile
    return _PROFILE_CLASSES[Profile.parse(profile)]
