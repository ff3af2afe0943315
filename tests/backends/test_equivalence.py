"""
Backend equivalence: every vendor path must reproduce the internal kernel
to the VENDOR_FP64 tolerance tier, for both storage modes and all product
variants.
"""

import numpy as np
import pytest

from pyqpalgebra import CSCStore
from pyqpalgebra.backends import KERNEL_BACKEND, ScipyBackend
from pyqpalgebra.backends.descriptor import Symmetry, descriptor_for
from pyqpalgebra.core.compute.tolerances import VENDOR_FP64

GENERAL = descriptor_for(Symmetry.NONE)
SYMMETRIC = descriptor_for(Symmetry.UPPER_TRIANGULAR)

COEFFICIENTS = [(1.0, 0.0), (-1.0, 1.0), (2.5, -0.5)]


def _assert_vendor_close(actual, expected):
    np.testing.assert_allclose(actual, expected, rtol=VENDOR_FP64.rtol, atol=VENDOR_FP64.atol)


@pytest.fixture
def vendor():
    return ScipyBackend()


class TestGeneral:

    @pytest.mark.parametrize("alpha, beta", COEFFICIENTS)
    def test_apply(self, vendor, make_store, rng, alpha, beta):
        store = make_store(30, 20)
        x = rng.standard_normal(20)
        y0 = rng.standard_normal(30)
        y_kernel, y_vendor = y0.copy(), y0.copy()
        KERNEL_BACKEND.apply(store, GENERAL, x, y_kernel, alpha, beta)
        vendor.apply(store, GENERAL, x, y_vendor, alpha, beta)
        _assert_vendor_close(y_vendor, y_kernel)

    @pytest.mark.parametrize("alpha, beta", COEFFICIENTS)
    def test_apply_transposed(self, vendor, make_store, rng, alpha, beta):
        store = make_store(30, 20)
        x = rng.standard_normal(30)
        y0 = rng.standard_normal(20)
        y_kernel, y_vendor = y0.copy(), y0.copy()
        KERNEL_BACKEND.apply_transposed(store, GENERAL, x, y_kernel, alpha, beta)
        vendor.apply_transposed(store, GENERAL, x, y_vendor, alpha, beta)
        _assert_vendor_close(y_vendor, y_kernel)

    def test_scale(self, vendor, make_store):
        store = make_store(10, 10)
        a, b = store.copy(), store.copy()
        KERNEL_BACKEND.scale(a, 0.75)
        vendor.scale(b, 0.75)
        _assert_vendor_close(b.x, a.x)

    def test_scale_empty(self, vendor):
        store = CSCStore.empty(3, 3)
        vendor.scale(store, 2.0)
        assert store.nzmax == 0


class TestSymmetric:

    @pytest.mark.parametrize("alpha, beta", COEFFICIENTS)
    def test_apply(self, vendor, make_symmetric, rng, alpha, beta):
        U, full = make_symmetric(25)
        x = rng.standard_normal(25)
        y0 = rng.standard_normal(25)
        y_kernel, y_vendor = y0.copy(), y0.copy()
        KERNEL_BACKEND.apply(U, SYMMETRIC, x, y_kernel, alpha, beta)
        vendor.apply(U, SYMMETRIC, x, y_vendor, alpha, beta)
        _assert_vendor_close(y_vendor, y_kernel)
        _assert_vendor_close(y_vendor, alpha * full @ x + beta * y0)

    def test_transposed_equals_plain(self, vendor, make_symmetric, rng):
        U, _ = make_symmetric(12)
        x = rng.standard_normal(12)
        y_plain = np.empty(12)
        y_trans = np.empty(12)
        vendor.apply(U, SYMMETRIC, x, y_plain, 1.0, 0.0)
        vendor.apply_transposed(U, SYMMETRIC, x, y_trans, 1.0, 0.0)
        _assert_vendor_close(y_trans, y_plain)

    def test_example(self, vendor, example_triu):
        y = np.empty(3)
        vendor.apply(example_triu, SYMMETRIC, np.ones(3), y, 1.0, 0.0)
        _assert_vendor_close(y, [3.0, 4.0, 4.0])
