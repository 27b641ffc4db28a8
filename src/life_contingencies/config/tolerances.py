"""
Centralized tolerance framework for life contingency calculations.

All tolerances are derived from precision requirements, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Analytical): Machine-precision achievable, deterministic results
    Tier 2 (Published Tables): Precision of printed actuarial tables
    Tier 3 (Numerical): Quadrature and graduation-formula precision

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
    [T1] Dickson, Hardy & Waters (2019) "Actuarial Mathematics for Life
         Contingent Risks", Appendix D
    [T1] Formulae and Tables for Actuarial Examinations (AM92 pages)
"""

from typing import Final

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================
# For identities that hold exactly in real arithmetic.
# Derived from: machine_epsilon (~2.2e-16) x accumulated operations

#: Probabilities: 0 <= tpx <= 1, tqx + tpx = survival to k
#: Tolerance: a handful of float64 operations on values in [0, 1]
PROBABILITY_TOLERANCE: Final[float] = 1e-12

#: qx -> lx -> qx round trip over a table of up to 150 ages
#: Tolerance: cumulative product error grows linearly with table length
ROUND_TRIP_TOLERANCE: Final[float] = 1e-10

#: Composition identities: Axn = Ax1n + Exn, aax - ax = 1, A = 1 - d*aa
#: Tolerance: sums of up to m * 150 discounted terms
IDENTITY_TOLERANCE: Final[float] = 1e-9


# =============================================================================
# Tier 2: Published Table Tolerances
# =============================================================================
# For comparison against printed exam tables.

#: Assurance values are printed to 5 decimal places
ASSURANCE_TABLE_TOLERANCE: Final[float] = 1e-5

#: Annuity values are printed to 3 decimal places
ANNUITY_TABLE_TOLERANCE: Final[float] = 1e-3

#: Mortality rates are printed to 6 decimal places
RATE_TABLE_TOLERANCE: Final[float] = 1e-6


# =============================================================================
# Tier 3: Numerical Tolerances
# =============================================================================

#: scipy.integrate.quad absolute error target for graduation formulas
QUADRATURE_TOLERANCE: Final[float] = 1e-12


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    # Tier 1: Analytical
    "probability": PROBABILITY_TOLERANCE,
    "round_trip": ROUND_TRIP_TOLERANCE,
    "identity": IDENTITY_TOLERANCE,
    # Tier 2: Published Tables
    "assurance_table": ASSURANCE_TABLE_TOLERANCE,
    "annuity_table": ANNUITY_TABLE_TOLERANCE,
    "rate_table": RATE_TABLE_TOLERANCE,
    # Tier 3: Numerical
    "quadrature": QUADRATURE_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Parameters
    ----------
    name : str
        Tolerance name (see TOLERANCE_REGISTRY keys)

    Returns
    -------
    float
        Tolerance value

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
