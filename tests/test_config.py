"""
Tests for AlgebraConfig, environment overrides and the process default.
"""

import pytest

from pyqpalgebra import (
    AlgebraConfig,
    Precision,
    Profile,
    config_context,
    get_config,
    set_config,
)
from pyqpalgebra.config import DEFAULT_NNZ_THRESHOLD
from pyqpalgebra.core.exceptions import ValidationError


class TestDefaults:

    def test_defaults(self):
        config = AlgebraConfig()
        assert config.precision is Precision.DOUBLE
        assert config.profile is Profile.FULL
        assert config.nnz_threshold == DEFAULT_NNZ_THRESHOLD == 20
        assert config.vendor == 'scipy'
        assert config.device == 'cpu'
        assert config.diagnostics is True

    def test_frozen(self):
        with pytest.raises(AttributeError):
            AlgebraConfig().nnz_threshold = 5

    def test_with_changes(self):
        base = AlgebraConfig()
        changed = base.with_changes(nnz_threshold=100)
        assert changed.nnz_threshold == 100
        assert base.nnz_threshold == 20


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {'nnz_threshold': -1},
        {'nnz_threshold': 2.5},
        {'nnz_threshold': True},
        {'vendor': 'mkl'},
        {'device': 'tpu'},
        {'precision': 'double'},
        {'profile': 'full'},
    ])
    def test_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            AlgebraConfig(**kwargs)

    def test_with_changes_revalidates(self):
        with pytest.raises(ValidationError):
            AlgebraConfig().with_changes(vendor='mkl')


class TestFromEnv:

    def test_empty_environment_keeps_defaults(self):
        assert AlgebraConfig.from_env({}) == AlgebraConfig()

    def test_all_variables(self):
        config = AlgebraConfig.from_env({
            'PYQPALGEBRA_PRECISION': 'single',
            'PYQPALGEBRA_PROFILE': 'Reduced',
            'PYQPALGEBRA_NNZ_THRESHOLD': ' 64 ',
            'PYQPALGEBRA_VENDOR': 'TORCH',
            'PYQPALGEBRA_DEVICE': 'auto',
            'PYQPALGEBRA_DIAGNOSTICS': 'off',
        })
        assert config.precision is Precision.SINGLE
        assert config.profile is Profile.REDUCED
        assert config.nnz_threshold == 64
        assert config.vendor == 'torch'
        assert config.device == 'auto'
        assert config.diagnostics is False

    def test_base_is_kept_for_unset(self):
        base = AlgebraConfig(nnz_threshold=7)
        config = AlgebraConfig.from_env({'PYQPALGEBRA_DIAGNOSTICS': 'yes'}, base=base)
        assert config.nnz_threshold == 7
        assert config.diagnostics is True

    @pytest.mark.parametrize("name, value", [
        ('PYQPALGEBRA_PRECISION', 'half'),
        ('PYQPALGEBRA_PROFILE', 'tiny'),
        ('PYQPALGEBRA_NNZ_THRESHOLD', 'many'),
        ('PYQPALGEBRA_VENDOR', 'mkl'),
        ('PYQPALGEBRA_DIAGNOSTICS', 'maybe'),
    ])
    def test_bad_values(self, name, value):
        with pytest.raises(ValidationError):
            AlgebraConfig.from_env({name: value})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv('PYQPALGEBRA_NNZ_THRESHOLD', '3')
        assert AlgebraConfig.from_env().nnz_threshold == 3


class TestProcessDefault:

    def test_set_returns_previous(self):
        original = get_config()
        previous = set_config(AlgebraConfig(nnz_threshold=1))
        try:
            assert previous is original
            assert get_config().nnz_threshold == 1
        finally:
            set_config(original)

    def test_set_rejects_other_types(self):
        with pytest.raises(ValidationError):
            set_config({'nnz_threshold': 1})

    def test_context_restores(self):
        original = get_config()
        with config_context(nnz_threshold=0, diagnostics=False) as config:
            assert config is get_config()
            assert config.nnz_threshold == 0
        assert get_config() is original

    def test_context_restores_on_error(self):
        original = get_config()
        with pytest.raises(RuntimeError):
            with config_context(nnz_threshold=0):
                raise RuntimeError("boom")
        assert get_config() is original
