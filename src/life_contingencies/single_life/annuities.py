"""
Life annuities.

Annuities-due pay 1/m at the start of each 1/m-year the life is alive;
annuities-immediate pay at the end. All are calls to the present value
kernel with a SURVIVAL profile.

Theory
------
[T1] ä_{x:n} = Σ_{k=0}^{n-1} v^k · kpx
[T1] a_{x:n} = Σ_{k=1}^{n} v^k · kpx = ä_{x:n} - 1 + nEx
[T1] (Iä)_{x:n} pays k+1 at time k,  (Dä)_{x:n} pays n-k at time k
[T1] Payments growing at rate g value as flat payments at i' = (1+i)/(1+g) - 1

Whole-life annuities run for max_age - x - t years.
"""

from life_contingencies.config.settings import SETTINGS
from life_contingencies.single_life.benefits import growth_adjusted_rate
from life_contingencies.single_life.kernel import (
    CashFlowProfile,
    CashFlowStructure,
    CashFlowTiming,
    Contingency,
    present_value,
)
from life_contingencies.single_life.params import SingleLifeParams
from life_contingencies.tables.config import MortTableConfig

_DEFAULTS = SETTINGS.valuation


def _profile(structure: CashFlowStructure, timing: CashFlowTiming) -> CashFlowProfile:
    return CashFlowProfile(Contingency.SURVIVAL, structure, timing)


def _annuity(
    mt: MortTableConfig,
    i: float,
    x: int,
    n: int | None,
    t: int,
    m: int,
    moment: int,
    entry_age: int | None,
    validate: bool,
    structure: CashFlowStructure,
    timing: CashFlowTiming,
) -> float:
    if n is None:
        n = max(mt.max_age - x - t, 0)
    params = SingleLifeParams(x=x, n=n, t=t, m=m, moment=moment, entry_age=entry_age)
    return present_value(mt, i, params, _profile(structure, timing), validate=validate)


# =============================================================================
# Level Annuities-Due
# =============================================================================


def aax(
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
    Whole life annuity-due of 1 per year, payable m times a year.

    Parameters
    ----------
    mt : MortTableConfig
        Mortality table configuration
    i : float
        Effective annual interest rate
    x : int
        Age at issue
    t : int
        Deferral in years
    m : int
        Payments per year
    moment : int
        Moment order
    entry_age : int, optional
        Age at selection (None = ultimate)
    validate : bool
        Check parameters before computing

    Returns
    -------
    float
        ä_x (or t|ä_x^(m))

    Examples
    --------
    >>> aax(am92, 0.04, 50)
    17.444...
    """
    return _annuity(mt, i, x, None, t, m, moment, entry_age, validate,
                    CashFlowStructure.FLAT, CashFlowTiming.IN_ADVANCE)


def aaxn(
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
    """Temporary annuity-due for n years. Parameters as for :func:`aax`."""
    return _annuity(mt, i, x, n, t, m, moment, entry_age, validate,
                    CashFlowStructure.FLAT, CashFlowTiming.IN_ADVANCE)


# =============================================================================
# Level Annuities-Immediate
# =============================================================================


def ax(
    mt: MortTableConfig,
    i: float,
    x: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Whole life annuity-immediate (payments in arrears)."""
    return _annuity(mt, i, x, None, t, m, moment, entry_age, validate,
                    CashFlowStructure.FLAT, CashFlowTiming.IN_ARREARS)


def axn(
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
    """Temporary annuity-immediate for n years."""
    return _annuity(mt, i, x, n, t, m, moment, entry_age, validate,
                    CashFlowStructure.FLAT, CashFlowTiming.IN_ARREARS)


# =============================================================================
# Increasing / Decreasing Annuities
# =============================================================================


def Iaax(
    mt: MortTableConfig,
    i: float,
    x: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Increasing whole life annuity-due."""
    return _annuity(mt, i, x, None, t, m, moment, entry_age, validate,
                    CashFlowStructure.INCREASING, CashFlowTiming.IN_ADVANCE)


def Iaaxn(
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
    """Increasing temporary annuity-due."""
    return _annuity(mt, i, x, n, t, m, moment, entry_age, validate,
                    CashFlowStructure.INCREASING, CashFlowTiming.IN_ADVANCE)


def Iax(
    mt: MortTableConfig,
    i: float,
    x: int,
    t: int = _DEFAULTS.deferral,
    m: int = _DEFAULTS.frequency,
    moment: int = _DEFAULTS.moment,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Increasing whole life annuity-immediate."""
    return _annuity(mt, i, x, None, t, m, moment, entry_age, validate,
                    CashFlowStructure.INCREASING, CashFlowTiming.IN_ARREARS)


def Iaxn(
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
    """Increasing temporary annuity-immediate."""
    return _annuity(mt, i, x, n, t, m, moment, entry_age, validate,
                    CashFlowStructure.INCREASING, CashFlowTiming.IN_ARREARS)


def Daaxn(
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
    """Decreasing temporary annuity-due: n, n-1, ..., 1."""
    return _annuity(mt, i, x, n, t, m, moment, entry_age, validate,
                    CashFlowStructure.DECREASING, CashFlowTiming.IN_ADVANCE)


def Daxn(
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
    """Decreasing temporary annuity-immediate."""
    return _annuity(mt, i, x, n, t, m, moment, entry_age, validate,
                    CashFlowStructure.DECREASING, CashFlowTiming.IN_ARREARS)


# =============================================================================
# Geometrically Increasing Annuities
# =============================================================================


def gaax(
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
    """Whole life annuity-due with payments growing at g per year."""
    return aax(mt, growth_adjusted_rate(i, g), x, t=t, m=m, moment=moment,
               entry_age=entry_age, validate=validate)


def gaaxn(
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
    """Temporary annuity-due with payments growing at g per year."""
    return aaxn(mt, growth_adjusted_rate(i, g), x, n, t=t, m=m, moment=moment,
                entry_age=entry_age, validate=validate)


def gax(
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
    """Whole life annuity-immediate with payments growing at g per year."""
    return ax(mt, growth_adjusted_rate(i, g), x, t=t, m=m, moment=moment,
              entry_age=entry_age, validate=validate)


def gaxn(
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
    """Temporary annuity-immediate with payments growing at g per year."""
    return axn(mt, growth_adjusted_rate(i, g), x, n, t=t, m=m, moment=moment,
               entry_age=entry_age, validate=validate)
