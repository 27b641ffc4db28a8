"""
Query parameter bundles.

Immutable value objects built fresh for each call and validated against the
table they are about to query. Validation collects every violation.
"""

from dataclasses import dataclass

from life_contingencies.config.settings import SETTINGS
from life_contingencies.tables.config import MortTableConfig
from life_contingencies.validation.checks import (
    ValidationReport,
    check_interest,
    check_query,
    check_whole_numbers,
)


@dataclass(frozen=True)
class SurvivalParams:
    """
    Inputs to tpx / tqx.

    Attributes
    ----------
    x : float
        Age, possibly fractional
    t : float
        Survival (or death) period in years
    k : float
        Deferral before the period starts
    entry_age : int, optional
        Age at selection
    """

    x: float
    t: float = 1.0
    k: float = 0.0
    entry_age: int | None = None

    def check(self, mt: MortTableConfig) -> ValidationReport:
        return check_query(
            mt.min_age,
            mt.max_age,
            self.x,
            t=self.k,
            n=self.t,
            entry_age=self.entry_age,
            names=("k", "t"),
        )


@dataclass(frozen=True)
class SingleLifeParams:
    """
    Inputs to the present value kernel and the commutation functions.

    Attributes
    ----------
    x : int
        Age at issue
    n : int
        Term in years (0 yields an empty summation)
    t : int
        Deferral in years
    m : int
        Payments or benefit intervals per year
    moment : int
        Moment order (2 for second moments)
    entry_age : int, optional
        Age at selection
    """

    x: int
    n: int = 0
    t: int = SETTINGS.valuation.deferral
    m: int = SETTINGS.valuation.frequency
    moment: int = SETTINGS.valuation.moment
    entry_age: int | None = None

    def check(self, mt: MortTableConfig, i: float | None = None) -> ValidationReport:
        report = check_whole_numbers(x=self.x, n=self.n, t=self.t)
        if i is not None:
            report = report.merge(check_interest(i))
        return report.merge(check_query(
            mt.min_age,
            mt.max_age,
            self.x,
            t=self.t,
            n=self.n,
            entry_age=self.entry_age,
            m=self.m,
            moment=self.moment,
        ))

    def whole_life_term(self, mt: MortTableConfig) -> int:
        """Term running from x + t to the table ceiling."""
        return max(mt.max_age - self.x - self.t, 0)
