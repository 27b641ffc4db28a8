"""
Centralized pytest fixtures for the life-contingencies test suite.

Fixture Categories:
1. Tolerances - Tiered tolerance settings
2. Small Tables - Hand-checkable ultimate and select tables
3. AM92 - Ultimate table rebuilt from the CMI graduation formula, and a
   select table for a life selected at 50
"""

from dataclasses import dataclass

import pandas as pd
import pytest

from life_contingencies.loaders.mortality import MortalityLoader
from life_contingencies.tables.config import MortTableConfig

# =============================================================================
# TOLERANCE TIERS
# =============================================================================


@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    See: life_contingencies/config/tolerances.py
    """

    # Exact identities in float64
    analytical: float = 1e-10

    # Published exam tables (5 d.p. assurances, 3 d.p. annuities)
    assurance_table: float = 1e-5
    annuity_table: float = 1e-3


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# SMALL TABLES
# =============================================================================

#: Four-age ultimate table ending in certain death
SMALL_QX = {60: 0.1, 61: 0.2, 62: 0.5, 63: 1.0}


@pytest.fixture
def small_qx_frame() -> pd.DataFrame:
    """Ultimate table given by qx."""
    return pd.DataFrame({"age": list(SMALL_QX), "qx": list(SMALL_QX.values())})


@pytest.fixture
def small_table(small_qx_frame: pd.DataFrame) -> MortTableConfig:
    """
    Radix 1000: l60 = 1000, l61 = 900, l62 = 720, l63 = 360.
    """
    return MortTableConfig.build(small_qx_frame, radix=1000)


def ultimate_rate(age: int) -> float:
    """Smooth ultimate rates for the synthetic select table."""
    return min(0.001 * 1.1 ** (age - 30), 1.0)


#: Select rates scale the ultimate rate by 0.6 at duration 0 and 0.8 at duration 1
SELECT_FACTORS = {0: 0.6, 1: 0.8}


@pytest.fixture(scope="session")
def select_qx_frame() -> pd.DataFrame:
    """
    Select and ultimate table: ages 30-100, durations 0-2.

    Duration 2 is ultimate; q100 = 1 at every duration.
    """
    rows = []
    for age in range(30, 101):
        for duration in range(3):
            q = 1.0 if age == 100 else ultimate_rate(age) * SELECT_FACTORS.get(duration, 1.0)
            rows.append({"age": age, "duration": duration, "qx": q})
    return pd.DataFrame(rows)


@pytest.fixture(scope="session")
def select_table(select_qx_frame: pd.DataFrame) -> MortTableConfig:
    """Canonical synthetic select table (radix 100,000)."""
    return MortTableConfig.build(select_qx_frame, table_name="Synthetic Select")


# =============================================================================
# AM92
# =============================================================================


@pytest.fixture(scope="session")
def am92() -> MortTableConfig:
    """AM92 ultimate, ages 17-120, UDD."""
    return MortTableConfig.build(MortalityLoader().am92())


#: Select rates on the age-50 diagonal, (age, duration) -> q: q[50] and q[50]+1
AM92_SELECT_50 = {(50, 0): 0.00215, (51, 1): 0.00254}


@pytest.fixture(scope="session")
def am92_select() -> MortTableConfig:
    """
    AM92 select and ultimate, ages 17-120, durations 0-2.

    Duration 2 is the AM92 ultimate graduation. Durations 0 and 1 repeat
    the ultimate rate except on the age-50 diagonal, which carries select
    rates fitted to the printed ä[50], A[50] and ²A[50] at 4%.
    """
    ultimate = MortalityLoader().am92().frame.set_index("age")["qx"]
    rows = [
        {
            "age": int(age),
            "duration": duration,
            "qx": AM92_SELECT_50.get((int(age), duration), q),
        }
        for age, q in ultimate.items()
        for duration in range(3)
    ]
    return MortTableConfig.build(pd.DataFrame(rows), table_name="AM92 Select")
