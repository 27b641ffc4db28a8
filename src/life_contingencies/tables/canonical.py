"""
Mortality table canonicalization.

Derives whichever of qx / lx a raw table is missing so that every cell
carries both.

Theory
------
[T1] 1-D from lx: qx(x) = (lx(x) - lx(x+1)) / lx(x), qx(max_age) = 1
[T1] 1-D from qx: lx(min_age) = radix, lx(x+1) = lx(x) × (1 - qx(x))

Select tables are pivoted to one column per duration d. Moving one year
along a policy moves one age down and one duration across, so each cell is
linked to the cell at (age+1, min(d+1, max_dur)):

[T1] from lx: qx_d(x) = 1 - lx_{min(d+1, D)}(x+1) / lx_d(x)
[T1] from qx: lx_D is compounded forward from the radix, then
     lx_d(x) = lx_{d+1}(x+1) / (1 - qx_d(x)) for d = D-1 down to min_dur

References:
    [T1] Dickson, Hardy & Waters (2019) Ch. 3.9 - Select and ultimate tables
"""

import logging

import numpy as np
import pandas as pd

from life_contingencies.config.settings import SETTINGS
from life_contingencies.tables.mortality_table import (
    AGE,
    DURATION,
    LX,
    QX,
    MortalityData,
    MortalityFormatError,
    MortalityTable,
)

logger = logging.getLogger(__name__)


def canonicalize(
    data: MortalityData | pd.DataFrame,
    radix: int | None = None,
    pct: float | None = None,
    table_name: str | None = None,
) -> MortalityTable:
    """
    Build a canonical table from a raw one.

    Parameters
    ----------
    data : MortalityData or pd.DataFrame
        Raw table; a DataFrame is schema-checked first
    radix : int, optional
        Initial cohort size when lx is derived (default from SETTINGS)
    pct : float, optional
        Multiplier applied to qx (capped at 1) when qx is the supplied axis
        (default from SETTINGS)
    table_name : str, optional
        Overrides the raw table's name

    Returns
    -------
    MortalityTable
        Table with both qx and lx populated

    Raises
    ------
    MortalityFormatError
        If the raw table is malformed or its lx values increase with age
    """
    if radix is None:
        radix = SETTINGS.mortality.radix
    if pct is None:
        pct = SETTINGS.mortality.pct
    if not isinstance(data, MortalityData):
        data = MortalityData(frame=data, table_name=table_name or "Custom")
    name = table_name or data.table_name
    frame = data.frame
    has_qx = QX in frame.columns
    has_lx = LX in frame.columns

    if has_qx and has_lx:
        logger.debug("Table '%s' already carries qx and lx", name)
        return MortalityTable(frame=frame, table_name=name)

    if has_lx and pct != 1.0:
        logger.warning("pct=%s ignored: table '%s' supplies lx, not qx", pct, name)

    if data.is_select:
        if has_lx:
            out = _select_qx_from_lx(frame)
        else:
            out = _select_lx_from_qx(frame, radix, pct)
    elif has_lx:
        out = _ultimate_qx_from_lx(frame)
    else:
        out = _ultimate_lx_from_qx(frame, radix, pct)

    logger.debug(
        "Derived %s for %s table '%s' (ages %d-%d)",
        QX if has_lx else LX,
        "select" if data.is_select else "ultimate",
        name,
        out[AGE].min(),
        out[AGE].max(),
    )
    return MortalityTable(frame=out, table_name=name)


def _scale_qx(qx: np.ndarray | pd.Series, pct: float):
    if pct == 1.0:
        return qx
    return np.minimum(qx * pct, 1.0)


# =============================================================================
# 1-D (ultimate) tables
# =============================================================================


def _ultimate_qx_from_lx(frame: pd.DataFrame) -> pd.DataFrame:
    lx = frame[LX].to_numpy(dtype=float)
    if (np.diff(lx) > 0).any():
        ages = frame[AGE].to_numpy()[1:][np.diff(lx) > 0].tolist()
        raise MortalityFormatError(f"lx increases at ages {ages}")

    qx = np.ones_like(lx)
    with np.errstate(divide="ignore", invalid="ignore"):
        qx[:-1] = np.where(lx[:-1] > 0, (lx[:-1] - lx[1:]) / lx[:-1], 1.0)
    return pd.DataFrame({AGE: frame[AGE].to_numpy(), QX: qx, LX: lx})


def _ultimate_lx_from_qx(frame: pd.DataFrame, radix: int, pct: float) -> pd.DataFrame:
    qx = _scale_qx(frame[QX].to_numpy(dtype=float), pct)
    survival = np.concatenate(([1.0], np.cumprod(1.0 - qx[:-1])))
    return pd.DataFrame({AGE: frame[AGE].to_numpy(), QX: qx, LX: radix * survival})


# =============================================================================
# 2-D (select and ultimate) tables
# =============================================================================


def _pivot(frame: pd.DataFrame, column: str) -> pd.DataFrame:
    """Long (age, duration, value) -> one column per duration over every age."""
    wide = frame.pivot(index=AGE, columns=DURATION, values=column)
    ages = range(int(frame[AGE].min()), int(frame[AGE].max()) + 1)
    durations = range(int(frame[DURATION].min()), int(frame[DURATION].max()) + 1)
    return wide.reindex(index=ages, columns=durations).astype(float)


def _melt(wide: pd.DataFrame, value_name: str) -> pd.DataFrame:
    long = (
        wide.rename_axis(index=AGE, columns=DURATION)
        .reset_index()
        .melt(id_vars=AGE, var_name=DURATION, value_name=value_name)
    )
    return long.astype({AGE: int, DURATION: int})


def _unpivot(frame: pd.DataFrame, qx_wide: pd.DataFrame, lx_wide: pd.DataFrame) -> pd.DataFrame:
    """Back to long form, keeping exactly the (age, duration) cells of the raw table."""
    long = _melt(qx_wide, QX).merge(_melt(lx_wide, LX), on=[AGE, DURATION])
    return frame[[AGE, DURATION]].merge(long, on=[AGE, DURATION], how="left")


def _select_qx_from_lx(frame: pd.DataFrame) -> pd.DataFrame:
    lx_wide = _pivot(frame, LX)
    max_age = int(lx_wide.index.max())
    min_dur = int(lx_wide.columns.min())
    max_dur = int(lx_wide.columns.max())

    qx_wide = pd.DataFrame(np.nan, index=lx_wide.index, columns=lx_wide.columns)
    for d in range(max_dur, min_dur - 1, -1):
        ahead = lx_wide[min(d + 1, max_dur)].shift(-1)
        current = lx_wide[d]
        qx_wide[d] = (1.0 - ahead / current).where(current != 0, 1.0)
        if pd.notna(current.loc[max_age]):
            qx_wide.loc[max_age, d] = 1.0

    rows, cols = np.nonzero(qx_wide.to_numpy() < 0)
    if len(rows):
        cells = [(int(qx_wide.index[r]), int(qx_wide.columns[c])) for r, c in zip(rows, cols)]
        raise MortalityFormatError(f"lx increases along the select diagonal at {cells}")

    return _unpivot(frame, qx_wide, lx_wide)


def _select_lx_from_qx(frame: pd.DataFrame, radix: int, pct: float) -> pd.DataFrame:
    qx_wide = _scale_qx(_pivot(frame, QX), pct)
    min_dur = int(qx_wide.columns.min())
    max_dur = int(qx_wide.columns.max())

    ultimate = qx_wide[max_dur]
    first = ultimate.first_valid_index()
    survival = (1.0 - ultimate.loc[first:]).shift(1, fill_value=1.0).cumprod()

    lx_wide = pd.DataFrame(np.nan, index=qx_wide.index, columns=qx_wide.columns)
    lx_wide.loc[first:, max_dur] = radix * survival
    for d in range(max_dur - 1, min_dur - 1, -1):
        lx_wide[d] = (lx_wide[d + 1].shift(-1) / (1.0 - qx_wide[d])).replace(
            [np.inf, -np.inf], np.nan
        )

    logger.debug(
        "Select period of %d years; ultimate lx from age %d", max_dur - min_dur, first
    )
    return _unpivot(frame, qx_wide, lx_wide)
