"""
Frozen configuration settings for life contingency calculations.

All configuration is immutable (frozen dataclasses) so that two calls made
with the same inputs always see the same defaults.
See: config/tolerances.py for numeric tolerance derivations.
"""

from dataclasses import dataclass

# =============================================================================
# Mortality Table Configuration
# =============================================================================


@dataclass(frozen=True)
class MortalityConfig:
    """
    Immutable defaults for mortality table construction.

    Attributes
    ----------
    radix : int
        Initial cohort size l(min_age) used when lx is derived from qx
    pct : float
        Multiplier applied to qx before lx is derived (1.0 = table as given)
    assumption : str
        Fractional-age interpolation law: "UDD", "CFM" or "HPB"
    max_supported_age : int
        Largest age (or age + term) any query may reference
    """

    radix: int = 100_000
    pct: float = 1.0
    assumption: str = "UDD"
    max_supported_age: int = 150


# =============================================================================
# Valuation Configuration
# =============================================================================


@dataclass(frozen=True)
class ValuationConfig:
    """
    Immutable defaults for present value queries.

    Attributes
    ----------
    deferral : int
        Deferral period t in years
    frequency : int
        Payments (or benefit intervals) per year, m
    moment : int
        Order of the moment computed (1 = mean, 2 = second moment)
    integer_snap_tolerance : float
        Durations within this distance of a whole number are treated as whole,
        so that sums such as 1/m + k/m land on integer survival boundaries
    """

    deferral: int = 0
    frequency: int = 1
    moment: int = 1
    integer_snap_tolerance: float = 1e-12


# =============================================================================
# Master Settings
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """
    Master settings container.

    Attributes
    ----------
    mortality : MortalityConfig
        Table construction defaults
    valuation : ValuationConfig
        Query defaults
    """

    mortality: MortalityConfig = MortalityConfig()
    valuation: ValuationConfig = ValuationConfig()


# Global settings instance (immutable)
SETTINGS = Settings()
