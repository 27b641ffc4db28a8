"""
Mortality tables.

Provides raw and canonical table entities, qx/lx derivation for ultimate
and select tables, and projection of select tables onto an entry age.
"""

from life_contingencies.tables.canonical import canonicalize
from life_contingencies.tables.config import Assumption, MortTableConfig
from life_contingencies.tables.mortality_table import (
    AGE,
    DURATION,
    LX,
    QX,
    # Entities
    MortalityData,
    # Errors
    MortalityFormatError,
    MortalityTable,
    TableLookupError,
    validate_schema,
)
from life_contingencies.tables.selection import project

__all__ = [
    # Column names
    "AGE",
    "DURATION",
    "QX",
    "LX",
    # Entities
    "MortalityData",
    "MortalityTable",
    "MortTableConfig",
    "Assumption",
    # Construction
    "validate_schema",
    "canonicalize",
    "project",
    # Errors
    "MortalityFormatError",
    "TableLookupError",
]
