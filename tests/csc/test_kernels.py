"""
Tests for the general CSC kernels against dense NumPy references.
"""

import numpy as np
import pytest

from pyqpalgebra import CSCStore
from pyqpalgebra.csc import kernels


class TestAccumulate:

    def test_beta_zero_ignores_garbage(self):
        y = np.full(3, np.nan)
        kernels.accumulate(y, np.array([1.0, 2.0, 3.0]), 2.0, 0.0)
        np.testing.assert_array_equal(y, [2.0, 4.0, 6.0])

    @pytest.mark.parametrize("alpha, beta", [(1.0, 1.0), (-1.0, 0.5), (0.3, -2.0)])
    def test_general(self, alpha, beta):
        y = np.array([1.0, -1.0, 2.0])
        product = np.array([0.5, 0.25, -4.0])
        expected = alpha * product + beta * y
        kernels.accumulate(y, product, alpha, beta)
        np.testing.assert_allclose(y, expected)


class TestProducts:

    def test_axpy_matches_dense(self, make_store, rng):
        store = make_store(7, 5)
        A = store.toarray()
        x = rng.standard_normal(5)
        y0 = rng.standard_normal(7)
        y = y0.copy()
        kernels.axpy(store, x, y, 1.5, -0.5)
        np.testing.assert_allclose(y, 1.5 * A @ x - 0.5 * y0, rtol=1e-12, atol=1e-14)

    def test_axpy_transposed_matches_dense(self, make_store, rng):
        store = make_store(7, 5)
        A = store.toarray()
        x = rng.standard_normal(7)
        y = np.empty(5)
        kernels.axpy_transposed(store, x, y, 1.0, 0.0)
        np.testing.assert_allclose(y, A.T @ x, rtol=1e-12, atol=1e-14)

    def test_duplicates_are_summed(self):
        store = CSCStore.from_arrays(2, 1, x=[1.0, 2.0], i=[1, 1], p=[0, 2])
        y = np.empty(2)
        kernels.axpy(store, np.array([1.0]), y, 1.0, 0.0)
        np.testing.assert_array_equal(y, [0.0, 3.0])

    def test_empty_rows_get_zero(self):
        store = CSCStore.from_arrays(3, 2, x=[1.0], i=[0], p=[0, 1, 1])
        y = np.full(3, 5.0)
        kernels.axpy(store, np.ones(2), y, 1.0, 0.0)
        np.testing.assert_array_equal(y, [1.0, 0.0, 0.0])

    def test_trailing_capacity_ignored(self):
        store = CSCStore.from_arrays(2, 2, x=[1.0, 1.0, 100.0], i=[0, 1, 0], p=[0, 1, 2])
        y = np.empty(2)
        kernels.axpy(store, np.ones(2), y, 1.0, 0.0)
        np.testing.assert_array_equal(y, [1.0, 1.0])


class TestScaling:

    def test_scale(self, make_store):
        store = make_store(4, 3, density=0.6)
        before = store.toarray()
        kernels.scale(store, -2.0)
        np.testing.assert_allclose(store.toarray(), -2.0 * before)

    def test_left_diag(self, make_store, rng):
        store = make_store(5, 4, density=0.5)
        d = rng.random(5) + 0.5
        before = store.toarray()
        kernels.left_diag_multiply(store, d)
        np.testing.assert_allclose(store.toarray(), np.diag(d) @ before)

    def test_right_diag(self, make_store, rng):
        store = make_store(5, 4, density=0.5)
        d = rng.random(4) + 0.5
        before = store.toarray()
        kernels.right_diag_multiply(store, d)
        np.testing.assert_allclose(store.toarray(), before @ np.diag(d))

    def test_left_then_inverse_restores(self, make_store, rng):
        store = make_store(6, 6, density=0.5)
        before = store.x.copy()
        d = rng.random(6) + 0.5
        kernels.left_diag_multiply(store, d)
        kernels.left_diag_multiply(store, 1.0 / d)
        np.testing.assert_allclose(store.x, before, rtol=1e-14)


class TestNorms:

    def test_col_inf_norm(self, make_store):
        store = make_store(6, 4, density=0.5)
        out = np.full(4, -1.0)
        kernels.col_inf_norm(store, out)
        np.testing.assert_array_equal(out, np.abs(store.toarray()).max(axis=0))

    def test_row_inf_norm(self, make_store):
        store = make_store(6, 4, density=0.5)
        out = np.full(6, -1.0)
        kernels.row_inf_norm(store, out)
        np.testing.assert_array_equal(out, np.abs(store.toarray()).max(axis=1))

    def test_empty_columns_are_zero(self):
        store = CSCStore.from_arrays(2, 3, x=[-4.0], i=[1], p=[0, 0, 1, 1])
        out = np.full(3, 9.0)
        kernels.col_inf_norm(store, out)
        np.testing.assert_array_equal(out, [0.0, 4.0, 0.0])


class TestSubmatrix:

    def test_selects_rows_in_order(self, make_store):
        store = make_store(6, 4, density=0.6)
        mask = np.array([1, 0, 1, 1, 0, 0])
        sub = kernels.submatrix_by_rows(store, mask)
        assert sub.shape == (3, 4)
        assert sub.nzmax == sub.nnz
        np.testing.assert_array_equal(sub.toarray(), store.toarray()[mask != 0])

    def test_empty_selection(self, make_store):
        store = make_store(4, 3)
        sub = kernels.submatrix_by_rows(store, np.zeros(4, dtype=np.int64))
        assert sub.shape == (0, 3)
        assert sub.nnz == 0

    def test_source_unchanged(self, make_store):
        store = make_store(5, 5, density=0.5)
        before = store.copy()
        sub = kernels.submatrix_by_rows(store, np.ones(5, dtype=np.int64))
        sub.x[:] = 0.0
        np.testing.assert_array_equal(store.x, before.x)
        np.testing.assert_array_equal(store.i, before.i)


class TestEquals:

    def test_reflexive(self, make_store):
        store = make_store(5, 5)
        assert kernels.equals(store, store, 0.0)

    def test_symmetric_when_one_side_has_extra_entry(self):
        a = CSCStore.from_arrays(2, 2, x=[1.0], i=[0], p=[0, 1, 1])
        b = CSCStore.from_arrays(2, 2, x=[1.0, 0.5], i=[0, 1], p=[0, 1, 2])
        assert not kernels.equals(a, b, 0.1)
        assert not kernels.equals(b, a, 0.1)
        assert kernels.equals(a, b, 0.5)
        assert kernels.equals(b, a, 0.5)

    def test_order_and_duplicates_do_not_matter(self):
        a = CSCStore.from_arrays(3, 1, x=[1.0, 2.0], i=[0, 2], p=[0, 2])
        b = CSCStore.from_arrays(3, 1, x=[2.0, 0.25, 0.75], i=[2, 0, 0], p=[0, 3])
        assert kernels.equals(a, b, 0.0)

    def test_explicit_zero_matches_missing(self):
        a = CSCStore.from_arrays(2, 1, x=[1.0, 0.0], i=[0, 1], p=[0, 2])
        b = CSCStore.from_arrays(2, 1, x=[1.0], i=[0], p=[0, 1])
        assert kernels.equals(a, b, 0.0)

    def test_shape_mismatch(self):
        assert not kernels.equals(CSCStore.empty(2, 3), CSCStore.empty(3, 2), 1.0)

    def test_tolerance(self, make_store):
        a = make_store(4, 4, density=0.8)
        b = a.copy()
        b.x[:b.nnz] += 1e-6
        assert kernels.equals(a, b, 1e-5)
        assert not kernels.equals(a, b, 1e-7)
