"""
Present value kernel for single-life benefits and annuities.

One summation covers every insurance and annuity function. A call is
described by a CashFlowProfile (what is paid, when, on which event) and a
SingleLifeParams bundle (x, n, t, m, moment, entry_age).

Theory
------
Benefits, paid at the end of the 1/m-year interval of death:
[T1] PV = t|Ex · Σ_{k=0}^{mn-1} v^(moment·(k+1)/m) · (1/m)|(k/m) q(x+t) · b_k

Annuities, paid while alive:
[T1] PV = t|Ex · Σ_k v^(moment·k/m) · (k/m) p(x+t) · b_k / m
     k = 0..mn-1 in advance (annuity-due), k = 1..mn in arrears

Payment amounts b_k by structure, for the j-th payment (j = k in advance,
k - 1 in arrears and for benefits j = k):
[T1] Flat: 1,  Increasing: ⌊j/m⌋ + 1,  Decreasing: n - ⌊j/m⌋

[T1] The deferral factor is the pure endowment v^(moment·t) · tpx at the same
     moment, so that moment 2 evaluates the whole cash flow at 2δ.

References:
    [T1] Dickson, Hardy & Waters (2019) Ch. 4 and 5
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from life_contingencies.single_life.params import SingleLifeParams
from life_contingencies.single_life.survivals import survival
from life_contingencies.tables.config import MortTableConfig
from life_contingencies.validation.checks import ensure_valid

logger = logging.getLogger(__name__)


class Contingency(Enum):
    """Event that triggers a payment."""
    DEATH = "death"
    SURVIVAL = "survival"


class CashFlowStructure(Enum):
    """How payment amounts evolve over the term."""
    FLAT = "flat"
    INCREASING = "increasing"
    DECREASING = "decreasing"


class CashFlowTiming(Enum):
    """Annuity payment timing within each 1/m period."""
    IN_ADVANCE = "in_advance"
    IN_ARREARS = "in_arrears"


@dataclass(frozen=True)
class CashFlowProfile:
    """
    Shape of a contingent cash flow.

    Attributes
    ----------
    contingency : Contingency
        DEATH for benefits, SURVIVAL for annuities
    structure : CashFlowStructure
        FLAT, INCREASING or DECREASING
    timing : CashFlowTiming
        Annuity timing; benefits are always paid at the end of the interval
        of death and ignore this field
    """

    contingency: Contingency
    structure: CashFlowStructure = CashFlowStructure.FLAT
    timing: CashFlowTiming = CashFlowTiming.IN_ADVANCE


def _amounts(structure: CashFlowStructure, periods: np.ndarray, n: int, m: int) -> np.ndarray:
    years = periods // m
    if structure == CashFlowStructure.FLAT:
        return np.ones(len(periods))
    elif structure == CashFlowStructure.INCREASING:
        return (years + 1).astype(float)
    elif structure == CashFlowStructure.DECREASING:
        return (n - years).astype(float)
    raise ValueError(f"Unknown cash flow structure {structure!r}")


def deferral_factor(
    mt: MortTableConfig, v: float, x: int, t: int, moment: int = 1
) -> float:
    """
    v^(moment·t) · tpx on an already selected table, without validation.

    Equal to the pure endowment t|Ex at the given moment.
    """
    return v ** (moment * t) * survival(mt.table, mt.assumption, x, t)


def present_value(
    mt: MortTableConfig,
    i: float,
    params: SingleLifeParams,
    profile: CashFlowProfile,
    validate: bool = True,
) -> float:
    """
    Expected present value of a contingent cash flow.

    Parameters
    ----------
    mt : MortTableConfig
        Mortality table configuration
    i : float
        Effective annual interest rate
    params : SingleLifeParams
        Age, term, deferral, frequency, moment and entry age
    profile : CashFlowProfile
        Contingency, structure and timing
    validate : bool
        Check parameters before any summation runs

    Returns
    -------
    float
        Expected present value (or higher moment, per params.moment)

    Raises
    ------
    ParameterValidationError
        Listing every invalid parameter

    Examples
    --------
    >>> params = SingleLifeParams(x=50, n=0)
    >>> present_value(mt, 0.04, params, CashFlowProfile(Contingency.DEATH))
    0.0
    """
    if validate:
        ensure_valid(params.check(mt, i))

    selected = mt.select(params.entry_age)
    table = selected.table
    assumption = selected.assumption
    x, n, t, m, moment = params.x, params.n, params.t, params.m, params.moment
    v = 1.0 / (1.0 + i)
    start = x + t

    if profile.contingency == Contingency.DEATH:
        k = np.arange(n * m)
        discount = v ** (moment * (k + 1) / m)
        probability = np.array([
            survival(table, assumption, start, j / m)
            - survival(table, assumption, start, (j + 1) / m)
            for j in k
        ])
        amounts = _amounts(profile.structure, k, n, m)
    else:
        if profile.timing == CashFlowTiming.IN_ADVANCE:
            k = np.arange(n * m)
            periods = k
        else:
            k = np.arange(1, n * m + 1)
            periods = k - 1
        discount = v ** (moment * k / m)
        probability = np.array([survival(table, assumption, start, j / m) for j in k])
        amounts = _amounts(profile.structure, periods, n, m) / m

    deferred = deferral_factor(selected, v, x, t, moment)
    result = float(np.sum(discount * probability * amounts)) * deferred
    logger.debug(
        "PV %s/%s/%s x=%s n=%s t=%s m=%s moment=%s: %.8f",
        profile.contingency.value,
        profile.structure.value,
        profile.timing.value,
        x, n, t, m, moment,
        result,
    )
    return result
