"""
Compressed Sparse Column storage and its kernels.

Submodules:
    store: CSCStore data model, construction and conversion
    kernels: general-matrix kernels (products, scalings, norms, extraction)
    symmetric: kernels for upper-triangular symmetric storage
"""

from pyqpalgebra.csc.store import CSCStore
from pyqpalgebra.csc import kernels, symmetric

__all__ = [
    "CSCStore",
    "kernels",
    "symmetric",
]
