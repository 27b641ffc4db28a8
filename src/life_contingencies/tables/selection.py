"""
Selected table projection.

Turns a select and ultimate table into the 1-D, age-indexed table seen by a
life selected at a given entry age.

[T1] For a life selected at age e, the rate at attained age x ≥ e is read
     from duration min(x - e, D), D the end of the select period.
"""

import logging

import numpy as np
import pandas as pd

from life_contingencies.tables.mortality_table import (
    AGE,
    DURATION,
    LX,
    QX,
    MortalityTable,
    TableLookupError,
)

logger = logging.getLogger(__name__)


def project(table: MortalityTable, entry_age: int | None = None) -> MortalityTable:
    """
    Project a table onto a single select diagonal.

    Parameters
    ----------
    table : MortalityTable
        Canonical table, 1-D or select
    entry_age : int, optional
        Age at selection. None selects the ultimate column.

    Returns
    -------
    MortalityTable
        1-D table. A 1-D input is returned unchanged. With an entry age the
        result spans the full age range of the input, with qx = lx = 0 below
        the entry age. Where the select period runs past the table's max
        age, select lx is undefined and is compounded along the diagonal
        from its qx instead.

    Raises
    ------
    TableLookupError
        If the diagonal passes through an (age, duration) cell the table lacks

    Examples
    --------
    >>> selected = project(am92_select, entry_age=50)
    >>> selected.qx(51) == am92_select.qx(51, duration=1)
    True
    """
    if not table.is_select:
        return table

    frame = table.frame
    max_dur = table.max_duration

    if entry_age is None:
        ultimate = frame.loc[frame[DURATION] == max_dur, [AGE, QX, LX]]
        return MortalityTable(
            frame=ultimate.dropna(how="all", subset=[QX, LX]),
            table_name=table.table_name,
        )

    entry_age = int(entry_age)
    ages = np.arange(table.min_age, table.max_age + 1)
    durations = np.minimum(ages - entry_age, max_dur)
    selected = ages >= entry_age

    cells = pd.MultiIndex.from_arrays([ages[selected], durations[selected]])
    indexed = frame.set_index([AGE, DURATION])
    missing = cells.difference(indexed.index)
    if len(missing):
        raise TableLookupError(
            f"table '{table.table_name}' has no cells {list(missing)} "
            f"on the diagonal for entry age {entry_age}"
        )
    diagonal = indexed.loc[cells]

    qx = np.zeros(len(ages))
    lx = np.zeros(len(ages))
    qx[selected] = diagonal[QX].to_numpy()
    lx[selected] = diagonal[LX].to_numpy()
    if np.isnan(lx[selected]).any():
        start = indexed[LX].get((entry_age, max_dur), np.nan)
        lx[selected] = _compound_lx(qx[selected], lx[selected], start)
        logger.debug(
            "Compounded lx from qx past the ceiling of '%s' for entry age %d",
            table.table_name,
            entry_age,
        )
    return MortalityTable(
        frame=pd.DataFrame({AGE: ages, QX: qx, LX: lx}),
        table_name=f"{table.table_name} [{entry_age}]",
    )


def _compound_lx(qx: np.ndarray, lx: np.ndarray, start: float) -> np.ndarray:
    """
    Fill undefined lx along a diagonal with lx(x+1) = lx(x) · (1 - qx(x)).

    An undefined entry cell starts from `start`, the ultimate lx at the
    entry age.
    """
    filled = lx.copy()
    if np.isnan(filled[0]):
        filled[0] = start
    for k in range(1, len(filled)):
        if np.isnan(filled[k]):
            filled[k] = filled[k - 1] * (1.0 - qx[k - 1])
    return filled
