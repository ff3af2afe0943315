"""
Compressed Sparse Column (CSC) store.

CSCStore is the canonical sparse representation handed between the matrix
facade, its kernels and external collaborators (the KKT factorizer reads the
raw arrays directly).

Layout:
    m, n    dimensions
    nzmax   capacity of x and i
    x       values[nzmax]            (float64 or float32)
    i       row indices[nzmax]       (int64, zero-based)
    p       column pointers[n + 1]   (int64, p[0] = 0, non-decreasing)

Entries of column j live at positions p[j] .. p[j+1]-1. Only the first
p[n] positions are live; trailing capacity is never read by a kernel. Row
indices inside a column may be in any order and may repeat (duplicates sum).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import sparse

from pyqpalgebra.core.compute.precision import Precision, INDEX_DTYPE
from pyqpalgebra.core.exceptions import DimensionError, ValidationError
from pyqpalgebra.core.validation import (
    check_1d,
    check_array,
    check_column_pointers,
    check_index_array,
    check_length,
    check_nonnegative_int,
    check_row_indices,
)


@dataclass(eq=False)
class CSCStore:
    """
    Mutable CSC arrays plus dimensions.

    The dataclass constructor is trusted and performs no validation; caller
    data should go through from_arrays(), from_scipy() or from_dense().
    """
    m: int
    n: int
    nzmax: int
    x: NDArray[np.floating[Any]]
    i: NDArray[np.int64]
    p: NDArray[np.int64]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_arrays(
        cls,
        m: int,
        n: int,
        x: ArrayLike,
        i: ArrayLike,
        p: ArrayLike,
        nzmax: int | None = None,
        precision: Precision = Precision.DOUBLE,
    ) -> CSCStore:
        """
        Build a store from raw CSC arrays, copying and validating them.

        Args:
            m, n: Matrix dimensions
            x: Values, length nzmax
            i: Row indices, length nzmax
            p: Column pointers, length n + 1
            nzmax: Capacity; defaults to len(x)
            precision: Element width of the stored values

        Raises:
            ValidationError: If the pointer or index invariants are violated
            DimensionError: If array lengths are inconsistent
        """
        m = check_nonnegative_int(m, 'm')
        n = check_nonnegative_int(n, 'n')

        x_arr = check_array(x, 'x', dtype=precision.dtype)
        i_arr = check_index_array(i, 'i')
        p_arr = check_index_array(p, 'p')
        check_1d(x_arr, 'x')
        check_1d(i_arr, 'i')

        if nzmax is None:
            nzmax = x_arr.shape[0]
        nzmax = check_nonnegative_int(nzmax, 'nzmax')
        check_length(x_arr, nzmax, 'x')
        check_length(i_arr, nzmax, 'i')
        check_column_pointers(p_arr, n, nzmax)
        check_row_indices(i_arr, m, int(p_arr[n]))

        return cls(
            m=m,
            n=n,
            nzmax=nzmax,
            x=x_arr.copy(),
            i=i_arr.copy(),
            p=p_arr.copy(),
        )

    @classmethod
    def empty(
        cls,
        m: int,
        n: int,
        nzmax: int = 0,
        precision: Precision = Precision.DOUBLE,
    ) -> CSCStore:
        """An m x n store with no live entries and the given capacity."""
        return cls(
            m=m,
            n=n,
            nzmax=nzmax,
            x=np.zeros(nzmax, dtype=precision.dtype),
            i=np.zeros(nzmax, dtype=INDEX_DTYPE),
            p=np.zeros(n + 1, dtype=INDEX_DTYPE),
        )

    @classmethod
    def from_scipy(cls, A: Any, precision: Precision = Precision.DOUBLE) -> CSCStore:
        """
        Copy a scipy.sparse matrix/array into a new store.

        The stored pattern is kept as-is: explicit zeros and duplicate
        entries survive, and row order within columns is preserved.

        Raises:
            ValidationError: If A is not a 2D scipy sparse object
        """
        if not sparse.issparse(A):
            raise ValidationError(
                f"A: expected a scipy.sparse matrix or array, got {type(A).__name__}"
            )
        if A.ndim != 2:
            raise ValidationError(f"A: expected 2D sparse matrix, got {A.ndim}D")
        A = A.tocsc()
        m, n = A.shape
        return cls.from_arrays(m, n, A.data, A.indices, A.indptr, precision=precision)

    @classmethod
    def from_dense(cls, A: ArrayLike, precision: Precision = Precision.DOUBLE) -> CSCStore:
        """
        Build a store from a dense 2D array, keeping only its nonzeros.

        Raises:
            DimensionError: If A is not 2D
        """
        arr = check_array(A, 'A', dtype=precision.dtype)
        if arr.ndim != 2:
            raise DimensionError(
                f"A: expected 2D array, got {arr.ndim}D with shape {arr.shape}",
                name='A',
            )
        return cls.from_scipy(sparse.csc_array(arr), precision=precision)

    # ------------------------------------------------------------------
    # Properties and conversion
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        return (self.m, self.n)

    @property
    def nnz(self) -> int:
        """Number of live stored entries, p[n]."""
        return int(self.p[self.n])

    @property
    def precision(self) -> Precision:
        return Precision.from_dtype(self.x.dtype)

    def entry_columns(self) -> NDArray[np.int64]:
        """Column index of every live entry, aligned with x[:nnz] and i[:nnz]."""
        return np.repeat(np.arange(self.n, dtype=INDEX_DTYPE), np.diff(self.p))

    def copy(self) -> CSCStore:
        """Deep copy; the result shares no buffer with self."""
        return CSCStore(
            m=self.m,
            n=self.n,
            nzmax=self.nzmax,
            x=self.x.copy(),
            i=self.i.copy(),
            p=self.p.copy(),
        )

    def astype(self, precision: Precision) -> CSCStore:
        """Deep copy with values converted to another precision."""
        out = self.copy()
        out.x = out.x.astype(precision.dtype)
        return out

    def to_scipy(self) -> sparse.csc_array:
        """
        Live entries as a scipy.sparse.csc_array.

        The value and index arrays may be shared with the store; treat the
        result as read-only.
        """
        nnz = self.nnz
        return sparse.csc_array(
            (self.x[:nnz], self.i[:nnz], self.p),
            shape=(self.m, self.n),
        )

    def toarray(self) -> NDArray[np.floating[Any]]:
        """Dense m x n array; duplicate entries are summed."""
        out = np.zeros((self.m, self.n), dtype=self.x.dtype)
        nnz = self.nnz
        np.add.at(out, (self.i[:nnz], self.entry_columns()), self.x[:nnz])
        return out

    # ------------------------------------------------------------------
    # In-place value updates
    # ------------------------------------------------------------------

    def update_values(
        self,
        new_values: ArrayLike,
        positions: ArrayLike | None = None,
    ) -> None:
        """
        Overwrite stored values without touching the sparsity structure.

        Args:
            new_values: Replacement values
            positions: Indices into x receiving new_values[k]. If None, the
                first len(new_values) stored values are overwritten in order.

        Raises:
            DimensionError: If positions and new_values differ in length, or
                more values than stored entries are given
            ValidationError: If a position is outside [0, nnz)
        """
        values = check_array(new_values, 'new_values', dtype=self.x.dtype)
        check_1d(values, 'new_values')
        nnz = self.nnz

        if positions is None:
            if values.shape[0] > nnz:
                raise DimensionError(
                    f"new_values: {values.shape[0]} values for {nnz} stored entries",
                    name='new_values',
                    expected=nnz,
                    actual=int(values.shape[0]),
                )
            self.x[:values.shape[0]] = values
            return

        idx = check_index_array(positions, 'positions')
        check_1d(idx, 'positions')
        check_length(idx, values.shape[0], 'positions')
        if idx.size and (idx.min() < 0 or idx.max() >= nnz):
            raise ValidationError(
                f"positions: must lie in [0, {nnz}), got range [{idx.min()}, {idx.max()}]"
            )
        self.x[idx] = values

    def __repr__(self) -> str:
        return (
            f"CSCStore(shape={self.shape}, nnz={self.nnz}, nzmax={self.nzmax}, "
            f"dtype={self.x.dtype})"
        )
