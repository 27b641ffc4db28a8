"""
Single-life contingency functions.

Survival probabilities, commutation functions, and the present value kernel
behind every life insurance and life annuity function:
- survivals: tpx, tqx under UDD / CFM / HPB
- commutations: Dx, Cx, Nx, Mx, Sx, Rx
- benefits: Exn, Ax1n, Ax, Axn and increasing, decreasing, geometric forms
- annuities: aax, aaxn, ax, axn and increasing, decreasing, geometric forms
"""

from life_contingencies.single_life.annuities import (
    Daaxn,
    Daxn,
    Iaax,
    Iaaxn,
    Iax,
    Iaxn,
    # Level
    aax,
    aaxn,
    ax,
    axn,
    # Geometric
    gaax,
    gaaxn,
    gax,
    gaxn,
)
from life_contingencies.single_life.benefits import (
    Ax,
    Ax1n,
    Axn,
    Axn1,
    DAx1n,
    DAxn,
    # Pure endowment
    Exn,
    IAx,
    IAx1n,
    IAxn,
    gAx,
    gAx1n,
    gAxn,
    gExn,
    growth_adjusted_rate,
)
from life_contingencies.single_life.commutations import Cx, Dx, Mx, Nx, Rx, Sx
from life_contingencies.single_life.kernel import (
    CashFlowProfile,
    CashFlowStructure,
    CashFlowTiming,
    Contingency,
    present_value,
)
from life_contingencies.single_life.params import SingleLifeParams, SurvivalParams
from life_contingencies.single_life.survivals import SurvivalDomainError, tpx, tqx

__all__ = [
    # Parameters
    "SingleLifeParams",
    "SurvivalParams",
    # Survival
    "tpx",
    "tqx",
    "SurvivalDomainError",
    # Commutation
    "Dx",
    "Cx",
    "Nx",
    "Mx",
    "Sx",
    "Rx",
    # Kernel
    "Contingency",
    "CashFlowStructure",
    "CashFlowTiming",
    "CashFlowProfile",
    "present_value",
    "growth_adjusted_rate",
    # Benefits
    "Exn",
    "Axn1",
    "Ax1n",
    "Ax",
    "Axn",
    "IAx1n",
    "IAx",
    "IAxn",
    "DAx1n",
    "DAxn",
    "gExn",
    "gAx",
    "gAx1n",
    "gAxn",
    # Annuities
    "aax",
    "aaxn",
    "ax",
    "axn",
    "Iaax",
    "Iaaxn",
    "Iax",
    "Iaxn",
    "Daaxn",
    "Daxn",
    "gaax",
    "gaaxn",
    "gax",
    "gaxn",
]
