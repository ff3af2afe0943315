"""
Kernels for upper-triangular symmetric storage.

Only the upper triangle (including the diagonal) of a symmetric matrix is
stored. Each stored off-diagonal entry (i, j, v) stands for v at both (i, j)
and (j, i); diagonal entries stand for themselves. These kernels apply the
mirrored contribution on the fly and never materialise the lower triangle,
except in materialize_full(), which exists for vendors without a symmetric
mat-vec.

Because the represented matrix is symmetric, A*x == A'*x and a single
product kernel serves both call sites. Diagonal scaling needs no variant:
the general left/right kernels already scale the stored triangle exactly as
they would scale the full matrix.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyqpalgebra.core.compute.precision import INDEX_DTYPE
from pyqpalgebra.csc.kernels import accumulate
from pyqpalgebra.csc.store import CSCStore


def _mirrored(store: CSCStore) -> tuple[NDArray[np.int64], NDArray[np.int64], NDArray[np.floating[Any]]]:
    """
    Row indices, column indices and values of every effective entry:
    the stored ones followed by the mirror image of the off-diagonal ones.
    """
    nnz = store.nnz
    rows = store.i[:nnz]
    cols = store.entry_columns()
    vals = store.x[:nnz]
    off = rows != cols
    return (
        np.concatenate((rows, cols[off])),
        np.concatenate((cols, rows[off])),
        np.concatenate((vals, vals[off])),
    )


def axpy_sym_triu(
    store: CSCStore,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    alpha: float,
    beta: float,
) -> None:
    """
    y <- alpha*A*x + beta*y for symmetric A stored as its upper triangle.

    Serves apply and apply_transposed alike.
    """
    rows, cols, vals = _mirrored(store)
    product = np.bincount(rows, weights=vals * x[cols], minlength=store.n)
    accumulate(y, product, alpha, beta)


def row_inf_norm_sym_triu(store: CSCStore, out: NDArray[np.floating[Any]]) -> None:
    """
    out[i] <- max |A[i, :]| for symmetric A stored as its upper triangle.

    Row i of the full matrix holds the stored entries of row i plus, by
    symmetry, the stored entries of column i above the diagonal; both sets
    are scanned column by column.
    """
    rows, _, vals = _mirrored(store)
    out[:] = 0.0
    np.maximum.at(out, rows, np.abs(vals))


def materialize_full(store: CSCStore) -> CSCStore:
    """
    Expand upper-triangular storage into a full CSC store.

    Entries are ordered by column and, within a column, stored entries
    precede mirrored ones.
    """
    rows, cols, vals = _mirrored(store)
    order = np.argsort(cols, kind='stable')

    p = np.zeros(store.n + 1, dtype=INDEX_DTYPE)
    np.cumsum(np.bincount(cols, minlength=store.n), out=p[1:])

    x = vals[order]
    return CSCStore(
        m=store.m,
        n=store.n,
        nzmax=int(x.shape[0]),
        x=x,
        i=rows[order],
        p=p,
    )
