"""
Tests for deployment profiles and their capability sets.
"""

import pytest

from pyqpalgebra import (
    FixedStructureMatrix,
    FullMatrix,
    MinimalMatrix,
    Profile,
    config_context,
    matrix_class_for,
)
from pyqpalgebra.core.capabilities import (
    ALL_CAPABILITIES,
    CAPABILITY_COMPUTE,
    CAPABILITY_CONSTRUCTION,
    CAPABILITY_NORMS,
    CAPABILITY_ROW_EXTRACTION,
)


class TestCapabilities:

    def test_nested(self):
        assert Profile.MINIMAL.capabilities < Profile.REDUCED.capabilities
        assert Profile.REDUCED.capabilities < Profile.FULL.capabilities
        assert Profile.FULL.capabilities == ALL_CAPABILITIES

    def test_minimal(self):
        assert MinimalMatrix.supports(CAPABILITY_COMPUTE)
        assert not MinimalMatrix.supports(CAPABILITY_NORMS)

    def test_reduced(self):
        assert FixedStructureMatrix.supports(CAPABILITY_NORMS)
        assert not FixedStructureMatrix.supports(CAPABILITY_ROW_EXTRACTION)

    def test_full(self):
        assert FullMatrix.supports(CAPABILITY_CONSTRUCTION)
        assert FullMatrix.supports(CAPABILITY_ROW_EXTRACTION)

    def test_unknown_capability(self):
        assert not FullMatrix.supports('factorize')


class TestSurface:

    def test_minimal_has_no_norms(self, example_triu):
        M = MinimalMatrix(example_triu)
        assert not hasattr(M, 'col_inf_norm')
        assert not hasattr(M, 'extract_rows')

    def test_reduced_has_no_extraction(self, example_triu):
        M = FixedStructureMatrix(example_triu)
        assert hasattr(M, 'row_inf_norm')
        assert not hasattr(M, 'extract_rows')
        assert not hasattr(M, 'free')


class TestMatrixClassFor:

    @pytest.mark.parametrize("profile, cls", [
        (Profile.FULL, FullMatrix),
        ('reduced', FixedStructureMatrix),
        ('MINIMAL', MinimalMatrix),
    ])
    def test_lookup(self, profile, cls):
        assert matrix_class_for(profile) is cls

    def test_default_from_config(self):
        with config_context(profile=Profile.MINIMAL):
            assert matrix_class_for() is MinimalMatrix

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            matrix_class_for('tiny')
