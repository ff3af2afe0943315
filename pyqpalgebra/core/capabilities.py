"""
Capability string constants for PyQPAlgebra matrix profiles.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pyqpalgebra.core.capabilities import CAPABILITY_NORMS

    if M.supports(CAPABILITY_NORMS):
        M.row_inf_norm(E)
"""

from __future__ import annotations

from enum import Enum


# Matrix-vector products, quadratic form, in-place scaling, equality,
# value updates and raw accessors. Every profile has these.
CAPABILITY_COMPUTE = 'compute'

# Column/row infinity norms (needed by the problem-scaling heuristic)
CAPABILITY_NORMS = 'norms'

# Construction from scratch and explicit release of the owned store
CAPABILITY_CONSTRUCTION = 'construction'

# Row-subset extraction (needed by solution polishing)
CAPABILITY_ROW_EXTRACTION = 'row_extraction'

# Capability sets per deployment profile
MINIMAL_CAPABILITIES = frozenset({
    CAPABILITY_COMPUTE,
})

REDUCED_CAPABILITIES = MINIMAL_CAPABILITIES | frozenset({
    CAPABILITY_NORMS,
})

FULL_CAPABILITIES = REDUCED_CAPABILITIES | frozenset({
    CAPABILITY_CONSTRUCTION,
    CAPABILITY_ROW_EXTRACTION,
})

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = FULL_CAPABILITIES


class Profile(Enum):
    """
    Deployment profile: which operations a matrix facade exposes.

    Attributes:
        FULL: everything, including construction, release and row extraction
        REDUCED: structure fixed for the process lifetime; computational
                 operations and norms only
        MINIMAL: as REDUCED without the norms
    """
    FULL = 'full'
    REDUCED = 'reduced'
    MINIMAL = 'minimal'

    @property
    def capabilities(self) -> frozenset[str]:
        """Capability strings available under this profile."""
        if self is Profile.FULL:
            return FULL_CAPABILITIES
        if self is Profile.REDUCED:
            return REDUCED_CAPABILITIES
        return MINIMAL_CAPABILITIES

    @classmethod
    def parse(cls, value: str | Profile) -> Profile:
        """Parse a profile name (case-insensitive) or pass a Profile through."""
        if isinstance(value, Profile):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown profile: {value!r}. Use 'full', 'reduced' or 'minimal'."
            ) from None


__all__ = [
    'CAPABILITY_COMPUTE',
    'CAPABILITY_NORMS',
    'CAPABILITY_CONSTRUCTION',
    'CAPABILITY_ROW_EXTRACTION',
    'MINIMAL_CAPABILITIES',
    'REDUCED_CAPABILITIES',
    'FULL_CAPABILITIES',
    'ALL_CAPABILITIES',
    'Profile',
]
