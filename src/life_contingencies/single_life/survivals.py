"""
Survival probabilities tpx and tqx.

Theory
------
[T1] Whole ages and durations: tpx = l(x+t) / l(x)
[T1] Within a year of age, for x = n + s (0 <= s < 1) and t <= 1 - s:
     UDD: tpx = 1 - t·q / (1 - s·q)
     CFM: tpx = (1 - q)^t
     HPB: tpx = 1 - t·q / (1 + s·q)
     with q = q(n)
[T1] Longer fractional periods are split at whole ages: to the next birthday,
     whole years, then the remaining fraction.
[T1] t|k qx = kpx - (k+t)px

References:
    [T1] Dickson, Hardy & Waters (2019) Ch. 3.3 - Fractional age assumptions
"""

import math

from life_contingencies.config.settings import SETTINGS
from life_contingencies.single_life.params import SurvivalParams
from life_contingencies.tables.config import Assumption, MortTableConfig
from life_contingencies.tables.mortality_table import MortalityTable
from life_contingencies.validation.checks import ensure_valid


class SurvivalDomainError(ArithmeticError):
    """Raised when a survival ratio would divide by a non-positive lx."""
    pass


def _snap(value: float) -> float:
    """Treat values within float noise of a whole number as whole."""
    nearest = round(value)
    if abs(value - nearest) < SETTINGS.valuation.integer_snap_tolerance:
        return float(nearest)
    return float(value)


def _whole_years(table: MortalityTable, x: int, t: int) -> float:
    if t == 0:
        return 1.0
    lx = table.lx(x)
    if lx <= 0:
        raise SurvivalDomainError(
            f"CRITICAL: l({x}) = {lx} in table '{table.table_name}'; "
            "survival from this age is undefined"
        )
    return table.lx(x + t) / lx


def _within_year(assumption: Assumption, qx: float, s: float, t: float) -> float:
    if assumption == Assumption.UDD:
        return 1.0 - t * qx / (1.0 - s * qx)
    elif assumption == Assumption.CFM:
        return (1.0 - qx) ** t
    elif assumption == Assumption.HPB:
        return 1.0 - t * qx / (1.0 + s * qx)
    raise ValueError(f"Unknown assumption {assumption!r}")


def survival(table: MortalityTable, assumption: Assumption, x: float, t: float) -> float:
    """
    Probability that a life aged x survives t years on a 1-D table.

    No validation; callers check bounds first.
    """
    x = _snap(x)
    t = _snap(t)
    if x.is_integer() and t.is_integer():
        return _whole_years(table, int(x), int(t))

    whole = math.floor(x)
    s = x - whole
    if t <= 1.0 - s:
        return _within_year(assumption, table.qx(whole), s, t)

    to_birthday = _within_year(assumption, table.qx(whole), s, 1.0 - s)
    if to_birthday == 0.0:
        return 0.0
    remaining = _snap(t - (1.0 - s))
    years = math.floor(remaining)
    fraction = remaining - years
    result = to_birthday * _whole_years(table, whole + 1, years)
    if fraction == 0.0 or result == 0.0:
        return result
    return result * _within_year(assumption, table.qx(whole + 1 + years), 0.0, fraction)


def tpx(
    mt: MortTableConfig,
    x: float,
    t: float = 1.0,
    k: float = 0.0,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """
    Probability that a life aged x survives k + t years.

    Parameters
    ----------
    mt : MortTableConfig
        Mortality table configuration
    x : float
        Age (may be fractional)
    t : float
        Survival period
    k : float
        Additional period added to t
    entry_age : int, optional
        Age at selection for select tables (None = ultimate)
    validate : bool
        Check bounds before computing

    Returns
    -------
    float
        (k+t) p x

    Raises
    ------
    ParameterValidationError
        If x is outside the table or x + t + k exceeds its max age

    Examples
    --------
    >>> tpx(mt, x=50, t=0)
    1.0
    """
    if validate:
        ensure_valid(SurvivalParams(x=x, t=t, k=k, entry_age=entry_age).check(mt))
    selected = mt.select(entry_age)
    return survival(selected.table, selected.assumption, x, t + k)


def tqx(
    mt: MortTableConfig,
    x: float,
    t: float = 1.0,
    k: float = 0.0,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """
    Probability that a life aged x dies between k and k + t years from now.

    [T1] k|t qx = kpx - (k+t)px

    Parameters are those of :func:`tpx`.
    """
    if validate:
        ensure_valid(SurvivalParams(x=x, t=t, k=k, entry_age=entry_age).check(mt))
    selected = mt.select(entry_age)
    table = selected.table
    return (
        survival(table, selected.assumption, x, k)
        - survival(table, selected.assumption, x, t + k)
    )
