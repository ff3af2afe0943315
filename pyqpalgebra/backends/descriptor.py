"""
Symmetry tag and vendor backend descriptor.

The descriptor uses the four-character flag alphabet of vendor sparse-BLAS
mat-vec routines:

    [0] matrix type   'g' general, 's' symmetric
    [1] triangle      'u' upper (only meaningful when symmetric)
    [2] diagonal      'n' non-unit
    [3] index base    'c' zero-based

It is a pure function of the symmetry tag, computed once when a facade is
built and stored alongside the tag, so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Symmetry(Enum):
    """
    Storage mode of a matrix facade.

    Attributes:
        NONE: every entry of the matrix is stored explicitly
        UPPER_TRIANGULAR: only the upper triangle (with diagonal) is stored;
            the matrix is implicitly symmetric
    """
    NONE = 'none'
    UPPER_TRIANGULAR = 'triu'


@dataclass(frozen=True)
class BackendDescriptor:
    """Vendor mat-vec flags for one matrix."""
    matrix_type: str = 'g'
    triangle: str = 'u'
    diagonal: str = 'n'
    indexing: str = 'c'

    @property
    def is_symmetric(self) -> bool:
        return self.matrix_type == 's'

    @property
    def flags(self) -> str:
        """The four flags as one string, e.g. 'sunc'."""
        return self.matrix_type + self.triangle + self.diagonal + self.indexing


_GENERAL = BackendDescriptor(matrix_type='g')
_SYMMETRIC_UPPER = BackendDescriptor(matrix_type='s')


def descriptor_for(symmetry: Symmetry) -> BackendDescriptor:
    """Descriptor for a matrix stored with the given symmetry."""
    if symmetry is Symmetry.UPPER_TRIANGULAR:
        return _SYMMETRIC_UPPER
    return _GENERAL
