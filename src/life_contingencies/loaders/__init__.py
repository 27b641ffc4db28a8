"""
Mortality table loaders.

Builds raw tables from DataFrames, dicts and parametric mortality laws.
"""

from life_contingencies.loaders.mortality import (
    AM92_MAX_AGE,
    AM92_MIN_AGE,
    AM92_PARAMETERS,
    MortalityLoader,
)

__all__ = [
    "MortalityLoader",
    "AM92_PARAMETERS",
    "AM92_MIN_AGE",
    "AM92_MAX_AGE",
]
