"""
General CSC kernels.

Pure numeric functions over the explicit CSCStore arrays. They know nothing
about symmetry: every stored entry (i, j, v) contributes v at (i, j) only.

All kernels are vectorised over the live entries x[:nnz], i[:nnz]:
    - products accumulate with np.bincount, which tolerates any row order
      and sums duplicate entries
    - norms reduce with np.maximum.at
    - diagonal scalings gather the factor for every entry and multiply in place

Vector arguments are 1D NumPy buffers (VectorF.data); shapes are trusted.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyqpalgebra.core.compute.precision import INDEX_DTYPE
from pyqpalgebra.csc.store import CSCStore


def accumulate(
    y: NDArray[np.floating[Any]],
    product: NDArray[np.floating[Any]],
    alpha: float,
    beta: float,
) -> None:
    """
    y <- alpha*product + beta*y, in place.

    With beta == 0 the old contents of y are never read, so an
    uninitialised (or NaN-filled) buffer is safe.
    """
    if beta == 0.0:
        if alpha == 1.0:
            y[:] = product
        else:
            y[:] = alpha * product
        return
    if beta != 1.0:
        y *= beta
    if alpha == 1.0:
        y += product
    elif alpha == -1.0:
        y -= product
    else:
        y += alpha * product


def scale(store: CSCStore, factor: float) -> None:
    """Multiply every stored value by factor, in place."""
    store.x *= factor


def axpy(
    store: CSCStore,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    alpha: float,
    beta: float,
) -> None:
    """y <- alpha*A*x + beta*y, A general m x n; len(x) == n, len(y) == m."""
    nnz = store.nnz
    cols = store.entry_columns()
    product = np.bincount(
        store.i[:nnz],
        weights=store.x[:nnz] * x[cols],
        minlength=store.m,
    )
    accumulate(y, product, alpha, beta)


def axpy_transposed(
    store: CSCStore,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    alpha: float,
    beta: float,
) -> None:
    """y <- alpha*A'*x + beta*y, A general m x n; len(x) == m, len(y) == n."""
    nnz = store.nnz
    cols = store.entry_columns()
    product = np.bincount(
        cols,
        weights=store.x[:nnz] * x[store.i[:nnz]],
        minlength=store.n,
    )
    accumulate(y, product, alpha, beta)


def left_diag_multiply(store: CSCStore, d: NDArray[np.floating[Any]]) -> None:
    """A <- diag(d)*A in place; len(d) == m."""
    nnz = store.nnz
    store.x[:nnz] *= d[store.i[:nnz]]


def right_diag_multiply(store: CSCStore, d: NDArray[np.floating[Any]]) -> None:
    """A <- A*diag(d) in place; len(d) == n."""
    nnz = store.nnz
    store.x[:nnz] *= np.repeat(d, np.diff(store.p))


def col_inf_norm(store: CSCStore, out: NDArray[np.floating[Any]]) -> None:
    """out[j] <- max |A[:, j]| (0 for empty columns); len(out) == n."""
    nnz = store.nnz
    out[:] = 0.0
    np.maximum.at(out, store.entry_columns(), np.abs(store.x[:nnz]))


def row_inf_norm(store: CSCStore, out: NDArray[np.floating[Any]]) -> None:
    """out[i] <- max |A[i, :]| (0 for empty rows); len(out) == m."""
    nnz = store.nnz
    out[:] = 0.0
    np.maximum.at(out, store.i[:nnz], np.abs(store.x[:nnz]))


def submatrix_by_rows(store: CSCStore, mask: NDArray[Any]) -> CSCStore:
    """
    New store holding only the rows where mask is nonzero.

    Selected rows are renumbered densely in their original order; the
    column count is unchanged and the new capacity equals the number of
    kept entries. Within each column, entries keep their stored order.
    """
    nnz = store.nnz
    keep_row = np.asarray(mask) != 0
    new_row_index = np.cumsum(keep_row, dtype=INDEX_DTYPE) - 1

    rows = store.i[:nnz]
    keep_entry = keep_row[rows]
    cols = store.entry_columns()[keep_entry]

    p = np.zeros(store.n + 1, dtype=INDEX_DTYPE)
    np.cumsum(np.bincount(cols, minlength=store.n), out=p[1:])

    x = store.x[:nnz][keep_entry].copy()
    return CSCStore(
        m=int(np.count_nonzero(keep_row)),
        n=store.n,
        nzmax=int(x.shape[0]),
        x=x,
        i=new_row_index[rows[keep_entry]],
        p=p,
    )


def _summed_entries(store: CSCStore) -> tuple[NDArray[np.int64], NDArray[np.float64]]:
    """Sorted linear positions (col*m + row) and their summed values."""
    nnz = store.nnz
    keys = store.entry_columns() * store.m + store.i[:nnz]
    unique_keys, inverse = np.unique(keys, return_inverse=True)
    sums = np.bincount(
        inverse.ravel(),
        weights=store.x[:nnz].astype(np.float64),
        minlength=unique_keys.shape[0],
    )
    return unique_keys, sums


def equals(a: CSCStore, b: CSCStore, tol: float) -> bool:
    """
    True iff a and b have the same shape and every logical entry differs by
    at most tol. Positions stored on one side only compare against 0.
    """
    if a.m != b.m or a.n != b.n:
        return False

    keys_a, sums_a = _summed_entries(a)
    keys_b, sums_b = _summed_entries(b)
    keys = np.union1d(keys_a, keys_b)
    if keys.shape[0] == 0:
        return True

    dense_a = np.zeros(keys.shape[0])
    dense_b = np.zeros(keys.shape[0])
    dense_a[np.searchsorted(keys, keys_a)] = sums_a
    dense_b[np.searchsorted(keys, keys_b)] = sums_b
    return bool(np.all(np.abs(dense_a - dense_b) <= tol))
