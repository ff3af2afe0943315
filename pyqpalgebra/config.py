"""
Configuration for PyQPAlgebra.

The settings an embedded build would fix at compile time (element width,
operation profile, dispatch threshold, vendor library, diagnostics) are
collected in one immutable AlgebraConfig. A process-wide default is held
here; every matrix facade captures the config it was built under and never
observes later changes to the default.

Environment overrides (read by AlgebraConfig.from_env):
    PYQPALGEBRA_PRECISION       'double' | 'single'
    PYQPALGEBRA_PROFILE         'full' | 'reduced' | 'minimal'
    PYQPALGEBRA_NNZ_THRESHOLD   non-negative integer
    PYQPALGEBRA_VENDOR          'scipy' | 'torch'
    PYQPALGEBRA_DEVICE          'cpu' | 'cuda' | 'mps' | 'auto'
    PYQPALGEBRA_DIAGNOSTICS     '1'/'true'/'yes'/'on' or '0'/'false'/'no'/'off'
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Literal, Mapping

from pyqpalgebra.core.capabilities import Profile
from pyqpalgebra.core.compute.precision import Precision
from pyqpalgebra.core.exceptions import ValidationError


# Non-zero count above which apply/apply_transposed go to the vendor.
# Tuned on MKL; re-tune per platform with tuning.calibrate_nnz_threshold().
DEFAULT_NNZ_THRESHOLD = 20

VendorChoice = Literal['scipy', 'torch']

_VENDORS = ('scipy', 'torch')
_DEVICES = ('cpu', 'cuda', 'mps', 'auto')
_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off')

ENV_PREFIX = 'PYQPALGEBRA_'


@dataclass(frozen=True)
class AlgebraConfig:
    """
    Immutable algebra-layer settings.

    Attributes:
        precision: Element width of every value array
        profile: Operation surface of matrices built by matrix_class_for()
        nnz_threshold: Matrices with nzmax above this use the vendor backend
            for apply/apply_transposed; at or below it, the internal kernel
        vendor: Vendor library for the above-threshold path
        device: Device for the torch vendor (ignored by scipy)
        diagnostics: Emit SymmetryWarning on precondition violations
    """
    precision: Precision = Precision.DOUBLE
    profile: Profile = Profile.FULL
    nnz_threshold: int = DEFAULT_NNZ_THRESHOLD
    vendor: VendorChoice = 'scipy'
    device: str = 'cpu'
    diagnostics: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.precision, Precision):
            raise ValidationError(f"precision: expected Precision, got {self.precision!r}")
        if not isinstance(self.profile, Profile):
            raise ValidationError(f"profile: expected Profile, got {self.profile!r}")
        if isinstance(self.nnz_threshold, bool) or not isinstance(self.nnz_threshold, int):
            raise ValidationError(
                f"nnz_threshold: expected int, got {type(self.nnz_threshold).__name__}"
            )
        if self.nnz_threshold < 0:
            raise ValidationError(f"nnz_threshold: must be non-negative, got {self.nnz_threshold}")
        if self.vendor not in _VENDORS:
            raise ValidationError(f"vendor: expected one of {_VENDORS}, got {self.vendor!r}")
        if self.device not in _DEVICES:
            raise ValidationError(f"device: expected one of {_DEVICES}, got {self.device!r}")

    def with_changes(self, **changes) -> AlgebraConfig:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base: AlgebraConfig | None = None,
    ) -> AlgebraConfig:
        """
        Build a config from PYQPALGEBRA_* environment variables.

        Unset variables keep the value from `base` (defaults if None).

        Raises:
            ValidationError: If a variable holds an unparseable value
        """
        env = os.environ if environ is None else environ
        base = base if base is not None else cls()
        changes: dict[str, object] = {}

        raw = env.get(ENV_PREFIX + 'PRECISION')
        if raw is not None:
            try:
                changes['precision'] = Precision.parse(raw)
            except ValueError as e:
                raise ValidationError(f"{ENV_PREFIX}PRECISION: {e}") from e

        raw = env.get(ENV_PREFIX + 'PROFILE')
        if raw is not None:
            try:
                changes['profile'] = Profile.parse(raw)
            except ValueError as e:
                raise ValidationError(f"{ENV_PREFIX}PROFILE: {e}") from e

        raw = env.get(ENV_PREFIX + 'NNZ_THRESHOLD')
        if raw is not None:
            try:
                changes['nnz_threshold'] = int(raw.strip())
            except ValueError as e:
                raise ValidationError(
                    f"{ENV_PREFIX}NNZ_THRESHOLD: expected integer, got {raw!r}"
                ) from e

        raw = env.get(ENV_PREFIX + 'VENDOR')
        if raw is not None:
            changes['vendor'] = raw.strip().lower()

        raw = env.get(ENV_PREFIX + 'DEVICE')
        if raw is not None:
            changes['device'] = raw.strip().lower()

        raw = env.get(ENV_PREFIX + 'DIAGNOSTICS')
        if raw is not None:
            flag = raw.strip().lower()
            if flag in _TRUE:
                changes['diagnostics'] = True
            elif flag in _FALSE:
                changes['diagnostics'] = False
            else:
                raise ValidationError(
                    f"{ENV_PREFIX}DIAGNOSTICS: expected a boolean flag, got {raw!r}"
                )

        return replace(base, **changes)


_default_config = AlgebraConfig.from_env()


def get_config() -> AlgebraConfig:
    """Return the process-wide default config."""
    return _default_config


def set_config(config: AlgebraConfig) -> AlgebraConfig:
    """
    Replace the process-wide default config.

    Returns:
        The previous default, so callers can restore it.
    """
    global _default_config
    if not isinstance(config, AlgebraConfig):
        raise ValidationError(f"config: expected AlgebraConfig, got {type(config).__name__}")
    previous = _default_config
    _default_config = config
    return previous


@contextmanager
def config_context(**changes) -> Iterator[AlgebraConfig]:
    """
    Temporarily override fields of the default config.

    Usage:
        with config_context(nnz_threshold=0) as cfg:
            M = FullMatrix.from_csc(store)   # always uses the vendor
    """
    previous = set_config(_default_config.with_changes(**changes))
    try:
        yield _default_config
    finally:
        set_config(previous)
