"""
Life insurance benefits and pure endowments.

Every term and whole-life insurance here is a call to the present value
kernel with a DEATH profile; endowments add the pure endowment Exn, and the
geometric variants substitute a growth-adjusted interest rate.

Theory
------
[T1] nEx = v^n · npx
[T1] A_{x:n} = A^1_{x:n} + nEx
[T1] (IA)_{x:n} = (IA)^1_{x:n} + nEx,  (DA)_{x:n} = (DA)^1_{x:n} + nEx
[T1] Benefits growing at rate g: i' = (1+i)/(1+g) - 1

Common parameters
-----------------
mt : MortTableConfig
    Mortality table configuration
i : float
    Effective annual interest rate
x : int
    Age at issue
n : int
    Term in years
t : int
    Deferral in years (default 0)
m : int
    Benefit intervals per year (default 1)
moment : int
    Moment order (default 1)
entry_age : int, optional
    Age at selection (None = ultimate)
validate : bool
    Check parameters before computing (default True)
"""

from life_contingencies.config.settings import SETTINGS
from life_contingencies.single_life.kernel import (
    CashFlowProfile,
    CashFlowStructure,
    Contingency,
    deferral_factor,
    present_value,
)
from life_contingencies.single_life.params import SingleLifeParams
from life_contingencies.tables.config import MortTableConfig
from life_contingencies.validation.checks import check_interest, ensure_valid

_DEFAULTS = SETTINGS.valuation

_TERM = CashFlowProfile(Contingency.DEATH, CashFlowStructure.FLAT)
_INCREASING_TERM = CashFlowProfile(Contingency.DEATH, CashFlowStructure.INCREASING)
_DECREASING_TERM = CashFlowProfile(Contingency.DEATH, CashFlowStructure.DECREASING)


def growth_adjusted_rate(i: float, g: float) -> float:
    """
    Interest rate at which a flat cash flow values a g-growing one.

    [T1] i' = (1+i)/(1+g) - 1

    Raises
    ------
    ParameterValidationError
        If i or g is <= -1
    """
    ensure_valid(check_interest(i).merge(check_interest(g, field="g")))
    return (1.0 + i) / (1.0 + g) - 1.0


def _whole_life_term(mt: MortTableConfig, x: int, t: int) -> int:
    return max(mt.max_age - x - t, 0)


def _checked(mt: MortTableConfig, i: float, params: SingleLifeParams, validate: bool) -> None:
    if validate:
        ensure_valid(params.check(mt, i))


# =============================================================================
# Pure Endowment
# =============================================================================


def Exn(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int = 0,
    t: int = _DEFAULTS.deferral,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """
    Pure endowment: 1 paid at x + t + n if the life survives.

    [T1] t|nEx = v^(moment·(t+n)) · (t+n)px

    Returns 1.0 for n = t = 0.

    Examples
    --------
    >>> Exn(mt, 0.04, x=50, n=0)
    1.0
    """
    params = SingleLifeParams(x=x, n=n, t=t, moment=moment, entry_age=entry_age)
    _checked(mt, i, params, validate)
    return deferral_factor(mt.select(entry_age), 1.0 / (1.0 + i), x, t + n, moment)


def Axn1(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int = 0,
    t: int = _DEFAULTS.deferral,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """A_{x:n}^{ 1} notation for the pure endowment; same as :func:`Exn`."""
    return Exn(mt, i, x, n=n, t=t, moment=moment, entry_age=entry_age, validate=validate)


# =============================================================================
# Level Benefits
# =============================================================================


def Ax1n(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """
    Term insurance: 1 paid at the end of the 1/m-year of death within n years.

    Returns 0.0 for n = 0.
    """
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    return present_value(mt, i, params, _TERM, validate=validate)


def Ax(
    mt: MortTableConfig,
    i: float,
    x: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """
    Whole life insurance: term insurance to the table's max age.

    Examples
    --------
    >>> Ax(am92, 0.04, 50)
    0.32907...
    >>> Ax(am92, 0.04, 50, moment=2)
    0.13065...
    """
    n = _whole_life_term(mt, x, t)
    return Ax1n(mt, i, x, n, t=t, m=m, moment=moment, entry_age=entry_age, validate=validate)


def Axn(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Endowment insurance: term insurance plus pure endowment."""
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    _checked(mt, i, params, validate)
    term = Ax1n(mt, i, x, n, t=t, m=m, moment=moment, entry_age=entry_age, validate=False)
    endowment = Exn(mt, i, x, n=n, t=t, moment=moment, entry_age=entry_age, validate=False)
    return term + endowment


# =============================================================================
# Increasing / Decreasing Benefits
# =============================================================================


def IAx1n(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Increasing term insurance: k+1 paid on death in policy year k+1."""
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    return present_value(mt, i, params, _INCREASING_TERM, validate=validate)


def IAx(
    mt: MortTableConfig,
    i: float,
    x: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Increasing whole life insurance."""
    n = _whole_life_term(mt, x, t)
    return IAx1n(mt, i, x, n, t=t, m=m, moment=moment, entry_age=entry_age, validate=validate)


def IAxn(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Increasing term insurance plus a unit pure endowment."""
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    _checked(mt, i, params, validate)
    term = IAx1n(mt, i, x, n, t=t, m=m, moment=moment, entry_age=entry_age, validate=False)
    endowment = Exn(mt, i, x, n=n, t=t, moment=moment, entry_age=entry_age, validate=False)
    return term + endowment


def DAx1n(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Decreasing term insurance: n - k paid on death in policy year k+1."""
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    return present_value(mt, i, params, _DECREASING_TERM, validate=validate)


def DAxn(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Decreasing term insurance plus a unit pure endowment."""
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    _checked(mt, i, params, validate)
    term = DAx1n(mt, i, x, n, t=t, m=m, moment=moment, entry_age=entry_age, validate=False)
    endowment = Exn(mt, i, x, n=n, t=t, moment=moment, entry_age=entry_age, validate=False)
    return term + endowment


# =============================================================================
# Geometrically Increasing Benefits
# =============================================================================


def gExn(
    mt: MortTableConfig,
    i: float,
    x: int,
    g: float,
    n: int = 0,
    t: int = _DEFAULTS.deferral,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Pure endowment of (1+g)^(t+n) valued at i; equals Exn at i'."""
    return Exn(mt, growth_adjusted_rate(i, g), x, n=n, t=t, moment=moment,
               entry_age=entry_age, validate=validate)


def gAx(
    mt: MortTableConfig,
    i: float,
    x: int,
    g: float,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Whole life insurance with benefits growing at g per year."""
    return Ax(mt, growth_adjusted_rate(i, g), x, t=t, m=m, moment=moment,
              entry_age=entry_age, validate=validate)


def gAx1n(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    g: float,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Term insurance with benefits growing at g per year."""
    return Ax1n(mt, growth_adjusted_rate(i, g), x, n, t=t, m=m, moment=moment,
                entry_age=entry_age, validate=validate)


def gAxn(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int,
    g: float,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Endowment insurance with benefits growing at g per year."""
    return Axn(mt, growth_adjusted_rate(i, g), x, n, t=t, m=m, moment=moment,
               entry_age=entry_age, validate=validate)
