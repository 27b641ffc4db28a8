"""
Mortality table configuration.

MortTableConfig bundles a canonical MortalityTable with the parameters used
to build it and the fractional-age assumption every survival query uses.
"""

from dataclasses import dataclass, replace
from enum import Enum

import pandas as pd

from life_contingencies.config.settings import SETTINGS
from life_contingencies.tables.canonical import canonicalize
from life_contingencies.tables.mortality_table import MortalityData, MortalityTable
from life_contingencies.tables.selection import project
from life_contingencies.validation.checks import (
    check_query,
    check_table_config,
    ensure_valid,
)


class Assumption(Enum):
    """
    Fractional-age interpolation law.

    [T1] UDD: Uniform Distribution of Deaths, lx linear within a year
    [T1] CFM: Constant Force of Mortality, lx exponential within a year
    [T1] HPB: Hyperbolic (Balducci), 1/lx linear within a year
    """
    UDD = "UDD"
    CFM = "CFM"
    HPB = "HPB"


@dataclass(frozen=True, eq=False)
class MortTableConfig:
    """
    Canonical mortality table plus construction and interpolation settings.

    Build with :meth:`build`, which validates the parameters and derives the
    missing qx or lx axis. Selected views from :meth:`select` share radix,
    pct and assumption and replace only the table.

    Attributes
    ----------
    table : MortalityTable
        Canonical table (both qx and lx)
    radix : int
        Initial cohort size used when lx was derived
    pct : float
        qx multiplier used when lx was derived
    assumption : Assumption
        Fractional-age interpolation law

    Examples
    --------
    >>> frame = pd.DataFrame({"age": [60, 61, 62], "qx": [0.01, 0.02, 1.0]})
    >>> mt = MortTableConfig.build(frame, radix=1000)
    >>> mt.lx(61)
    990.0
    """

    table: MortalityTable
    radix: int = SETTINGS.mortality.radix
    pct: float = SETTINGS.mortality.pct
    assumption: Assumption = Assumption(SETTINGS.mortality.assumption)

    @classmethod
    def build(
        cls,
        data: MortalityData | pd.DataFrame,
        radix: int | None = None,
        pct: float | None = None,
        assumption: Assumption | str | None = None,
        table_name: str | None = None,
    ) -> "MortTableConfig":
        """
        Validate parameters and canonicalize a raw table.

        Parameters
        ----------
        data : MortalityData or pd.DataFrame
            Raw table with qx or lx (or both), optionally a duration column
        radix : int, optional
            Initial cohort size, >= 1 (default 100,000)
        pct : float, optional
            qx multiplier, > 0 (default 1.0)
        assumption : Assumption or str, optional
            "UDD", "CFM" or "HPB" (default UDD)
        table_name : str, optional
            Name for the canonical table

        Returns
        -------
        MortTableConfig
            Validated configuration

        Raises
        ------
        ParameterValidationError
            If radix, pct or assumption are invalid (all reported together)
        MortalityFormatError
            If the table is malformed
        """
        radix = SETTINGS.mortality.radix if radix is None else radix
        pct = SETTINGS.mortality.pct if pct is None else pct
        assumption = SETTINGS.mortality.assumption if assumption is None else assumption
        ensure_valid(check_table_config(radix, pct, assumption))

        table = canonicalize(data, radix=radix, pct=pct, table_name=table_name)
        return cls(table=table, radix=radix, pct=pct, assumption=Assumption(
            getattr(assumption, "value", assumption)
        ))

    # -------------------------------------------------------------------------
    # Table shape
    # -------------------------------------------------------------------------

    @property
    def min_age(self) -> int:
        return self.table.min_age

    @property
    def max_age(self) -> int:
        return self.table.max_age

    @property
    def is_select(self) -> bool:
        return self.table.is_select

    @property
    def min_duration(self) -> int:
        return self.table.min_duration

    @property
    def max_duration(self) -> int:
        return self.table.max_duration

    def select(self, entry_age: int | None = None) -> "MortTableConfig":
        """
        Config over the 1-D table for a life selected at ``entry_age``.

        A 1-D table is returned as is. With ``entry_age=None`` a select
        table collapses to its ultimate column.
        """
        if not self.is_select:
            return self
        return replace(self, table=project(self.table, entry_age))

    # -------------------------------------------------------------------------
    # Single-age accessors
    # -------------------------------------------------------------------------

    def _selected(self, x: int, entry_age: int | None, validate: bool) -> MortalityTable:
        if validate:
            ensure_valid(check_query(self.min_age, self.max_age, x, entry_age=entry_age))
        return self.select(entry_age).table

    def lx(self, x: int, entry_age: int | None = None, validate: bool = True) -> float:
        """Survivors at age x."""
        return self._selected(x, entry_age, validate).lx(x)

    def qx(self, x: int, entry_age: int | None = None, validate: bool = True) -> float:
        """Probability of death between x and x+1."""
        return self._selected(x, entry_age, validate).qx(x)

    def px(self, x: int, entry_age: int | None = None, validate: bool = True) -> float:
        """Probability of survival from x to x+1."""
        return 1.0 - self.qx(x, entry_age=entry_age, validate=validate)

    def dx(self, x: int, entry_age: int | None = None, validate: bool = True) -> float:
        """Deaths between x and x+1 (all of lx at the table ceiling)."""
        return self._selected(x, entry_age, validate).dx(x)

    def __repr__(self) -> str:
        return (
            f"MortTableConfig({self.table!r}, radix={self.radix}, pct={self.pct}, "
            f"assumption={self.assumption.value})"
        )
