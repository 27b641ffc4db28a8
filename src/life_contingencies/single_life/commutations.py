"""
Commutation functions.

Theory
------
[T1] Dx = v^x · lx
[T1] Cx = v^(x+1) · dx, with dx = lx at the table ceiling
[T1] Nx = Σ_{k>=x} Dk,  Mx = Σ_{k>=x} Ck
[T1] Sx = Σ_{k>=x} Nk,  Rx = Σ_{k>=x} Mk
[T1] äx = Nx / Dx,  Ax = Mx / Dx,  nEx = D(x+n) / Dx

All sums run to the table's max age. Each call projects the table once for
the given entry age and evaluates the whole ladder as numpy vectors.

References:
    [T1] Neill (1977) "Life Contingencies", Ch. 4 and 5
"""

import numpy as np

from life_contingencies.single_life.params import SingleLifeParams
from life_contingencies.tables.config import MortTableConfig
from life_contingencies.tables.mortality_table import LX, MortalityTable
from life_contingencies.validation.checks import ensure_valid


def _selected_table(
    mt: MortTableConfig, i: float, x: int, entry_age: int | None, validate: bool
) -> MortalityTable:
    if validate:
        ensure_valid(SingleLifeParams(x=x, entry_age=entry_age).check(mt, i))
    return mt.select(entry_age).table


def _discounted_lx(table: MortalityTable, v: float, x: int) -> np.ndarray:
    """[D_x, D_{x+1}, ..., D_max]"""
    ages = np.arange(x, table.max_age + 1)
    return v ** ages * table.values(LX, ages)


def _discounted_dx(table: MortalityTable, v: float, x: int) -> np.ndarray:
    """[C_x, C_{x+1}, ..., C_max]"""
    ages = np.arange(x, table.max_age + 1)
    lx = table.values(LX, ages)
    dx = lx - np.append(lx[1:], 0.0)
    return v ** (ages + 1) * dx


def _tail_sums(values: np.ndarray) -> np.ndarray:
    """Element k holds Σ_{j>=k} values[j]."""
    return np.cumsum(values[::-1])[::-1]


def Dx(
    mt: MortTableConfig,
    i: float,
    x: int,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """
    Discounted survivors, v^x · lx.

    Parameters
    ----------
    mt : MortTableConfig
        Mortality table configuration
    i : float
        Effective annual interest rate
    x : int
        Age
    entry_age : int, optional
        Age at selection (None = ultimate)
    validate : bool
        Check bounds before computing

    Returns
    -------
    float
        Dx
    """
    table = _selected_table(mt, i, x, entry_age, validate)
    v = 1.0 / (1.0 + i)
    return float(v ** x * table.lx(x))


def Cx(
    mt: MortTableConfig,
    i: float,
    x: int,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Discounted deaths, v^(x+1) · dx. Parameters as for :func:`Dx`."""
    table = _selected_table(mt, i, x, entry_age, validate)
    v = 1.0 / (1.0 + i)
    return float(v ** (x + 1) * table.dx(x))


def Nx(
    mt: MortTableConfig,
    i: float,
    x: int,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Σ Dk for k from x to the table ceiling."""
    table = _selected_table(mt, i, x, entry_age, validate)
    return float(_discounted_lx(table, 1.0 / (1.0 + i), x).sum())


def Mx(
    mt: MortTableConfig,
    i: float,
    x: int,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Σ Ck for k from x to the table ceiling."""
    table = _selected_table(mt, i, x, entry_age, validate)
    return float(_discounted_dx(table, 1.0 / (1.0 + i), x).sum())


def Sx(
    mt: MortTableConfig,
    i: float,
    x: int,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Σ Nk for k from x to the table ceiling."""
    table = _selected_table(mt, i, x, entry_age, validate)
    return float(_tail_sums(_discounted_lx(table, 1.0 / (1.0 + i), x)).sum())


def Rx(
    mt: MortTableConfig,
    i: float,
    x: int,
    entry_age: int | None = None,
    validate: bool = True,
) -> float:
    """Σ Mk for k from x to the table ceiling."""
    table = _selected_table(mt, i, x, entry_age, validate)
    return float(_tail_sums(_discounted_dx(table, 1.0 / (1.0 + i), x)).sum())
