"""
Dense vector containers.

VectorF holds floating-point values at a configured Precision; VectorI holds
int64 values (row masks, index lists). Both are thin, fixed-length wrappers
over a contiguous NumPy buffer: the matrix facade reads and writes `data`
directly and never reallocates it.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyqpalgebra.core.compute.precision import Precision, INDEX_DTYPE
from pyqpalgebra.core.validation import check_array, check_index_array, check_1d


class VectorF:
    """
    Fixed-length floating-point vector.

    Attributes:
        data: contiguous 1D buffer of dtype precision.dtype
        precision: element width
    """

    __slots__ = ('data', 'precision')

    def __init__(self, data: NDArray[np.floating[Any]], precision: Precision = Precision.DOUBLE):
        # Trusted constructor: `data` must already be 1D, contiguous and of
        # precision.dtype. Use from_array() for caller data.
        self.data = data
        self.precision = precision

    @classmethod
    def malloc(cls, length: int, precision: Precision = Precision.DOUBLE) -> VectorF:
        """Allocate an uninitialised vector."""
        return cls(np.empty(length, dtype=precision.dtype), precision)

    @classmethod
    def zeros(cls, length: int, precision: Precision = Precision.DOUBLE) -> VectorF:
        """Allocate a zero-filled vector."""
        return cls(np.zeros(length, dtype=precision.dtype), precision)

    @classmethod
    def from_array(cls, values: ArrayLike, precision: Precision = Precision.DOUBLE) -> VectorF:
        """
        Copy caller data into a new vector.

        Raises:
            ValidationError: If values are non-numeric
            DimensionError: If values are not 1D
        """
        arr = check_array(values, 'values', dtype=precision.dtype)
        check_1d(arr, 'values')
        return cls(arr.copy(), precision)

    @property
    def length(self) -> int:
        return int(self.data.shape[0])

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, idx):
        return self.data[idx]

    def __setitem__(self, idx, value) -> None:
        self.data[idx] = value

    def __repr__(self) -> str:
        return f"VectorF(length={self.length}, precision={self.precision.value})"

    def copy(self) -> VectorF:
        return VectorF(self.data.copy(), self.precision)

    def dot(self, other: VectorF) -> float:
        """Inner product with another vector of the same length."""
        return float(np.dot(self.data, other.data))

    def norm_inf(self) -> float:
        """Largest absolute entry (0 for an empty vector)."""
        if self.length == 0:
            return 0.0
        return float(np.max(np.abs(self.data)))

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Copy of the underlying buffer."""
        return self.data.copy()


class VectorI:
    """
    Fixed-length int64 vector.

    Used as a row mask by extract_rows (nonzero entries select a row).
    """

    __slots__ = ('data',)

    def __init__(self, data: NDArray[np.int64]):
        self.data = data

    @classmethod
    def malloc(cls, length: int) -> VectorI:
        return cls(np.empty(length, dtype=INDEX_DTYPE))

    @classmethod
    def zeros(cls, length: int) -> VectorI:
        return cls(np.zeros(length, dtype=INDEX_DTYPE))

    @classmethod
    def from_array(cls, values: ArrayLike) -> VectorI:
        """
        Copy caller data into a new vector.

        Raises:
            ValidationError: If values are not integral
            DimensionError: If values are not 1D
        """
        arr = check_index_array(values, 'values')
        check_1d(arr, 'values')
        return cls(arr.copy())

    @classmethod
    def from_mask(cls, mask: ArrayLike) -> VectorI:
        """Build a 0/1 vector from a boolean mask."""
        arr = np.asarray(mask, dtype=bool)
        check_1d(arr, 'mask')
        return cls(arr.astype(INDEX_DTYPE))

    @property
    def length(self) -> int:
        return int(self.data.shape[0])

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, idx):
        return self.data[idx]

    def __setitem__(self, idx, value) -> None:
        self.data[idx] = value

    def __repr__(self) -> str:
        return f"VectorI(length={self.length})"

    def copy(self) -> VectorI:
        return VectorI(self.data.copy())

    def to_numpy(self) -> NDArray[np.int64]:
        return self.data.copy()
