"""
Numerical precision (element width) for PyQPAlgebra containers.

The element width is chosen once per configuration and threaded through
every container as its value dtype. Index arrays are always int64 regardless
of precision.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = np.finfo(np.float32).eps  # ~1.19e-7

# dtype of every row index / column pointer array
INDEX_DTYPE = np.int64


class Precision(Enum):
    """
    Floating-point element width.

    Attributes:
        DOUBLE: float64 values (default)
        SINGLE: float32 values, for memory-constrained targets
    """
    DOUBLE = 'double'
    SINGLE = 'single'

    @property
    def dtype(self) -> type[np.floating[Any]]:
        """NumPy scalar type for values at this precision."""
        return np.float64 if self is Precision.DOUBLE else np.float32

    @property
    def epsilon(self) -> float:
        """Machine epsilon for this precision."""
        return EPSILON_64 if self is Precision.DOUBLE else EPSILON_32

    @classmethod
    def from_dtype(cls, dtype: np.dtype | type) -> Precision:
        """
        Map a NumPy floating dtype to a Precision.

        float64 maps to DOUBLE, float32 to SINGLE. Integer dtypes map to
        DOUBLE, mirroring how values are promoted on construction.

        Raises:
            ValueError: If dtype is a floating type other than float32/float64
        """
        dtype = np.dtype(dtype)
        if dtype == np.float32:
            return cls.SINGLE
        if dtype == np.float64 or not np.issubdtype(dtype, np.floating):
            return cls.DOUBLE
        raise ValueError(f"Unsupported floating dtype: {dtype}")

    @classmethod
    def parse(cls, value: str | Precision) -> Precision:
        """
        Parse a precision from a string ('double', 'single', 'float64',
        'float32', 'fp64', 'fp32') or pass a Precision through.

        Raises:
            ValueError: If the string is not recognised
        """
        if isinstance(value, Precision):
            return value
        key = str(value).strip().lower()
        if key in ('double', 'float64', 'fp64', 'f64'):
            return cls.DOUBLE
        if key in ('single', 'float32', 'fp32', 'f32'):
            return cls.SINGLE
        raise ValueError(f"Unknown precision: {value!r}")


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)
