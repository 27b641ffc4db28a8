"""
Mortality Table Loader.

Builds raw mortality tables from in-memory data and from parametric laws:
- pandas DataFrames and plain dicts (ultimate or select)
- Constant force, De Moivre, Gompertz, Makeham and Weibull laws
- AM92 ultimate, from the CMI graduation formula

Tables come back as MortalityData; pass them to MortTableConfig.build to
derive the missing axis.

Theory
------
[T1] qx = 1 - exp(-∫_x^{x+1} μ_s ds)
[T1] Gompertz: μ_x = B·c^x
[T1] Makeham: μ_x = A + B·c^x
[T1] Weibull: μ_x = k·x^n
[T1] De Moivre: lx ∝ ω - x, so qx = 1 / (ω - x)

Parametric tables end at the first age where qx reaches 1; the last age of
a table that never reaches 1 is set to certain death.

References:
    [T1] CMI Committee (1999) "Standard Tables of Mortality Based on the
         1991-94 Experiences", CMI Report 17 (AM92 graduation)
"""

import logging
from collections.abc import Callable

import numpy as np
import pandas as pd
from scipy import integrate

from life_contingencies.config.tolerances import QUADRATURE_TOLERANCE
from life_contingencies.tables.mortality_table import (
    AGE,
    DURATION,
    LX,
    QX,
    MortalityData,
    MortalityFormatError,
)

logger = logging.getLogger(__name__)

# AM92 ultimate graduation: μ_x = a0 + a1·t + exp(b0 + b1·t + b2·(2t² - 1)),
# t = (x - 70) / 50
AM92_PARAMETERS: dict[str, float] = {
    "a0": 0.00005887,
    "a1": -0.0004988,
    "b0": -4.363378,
    "b1": 5.544956,
    "b2": -0.620345,
}
AM92_MIN_AGE = 17
AM92_MAX_AGE = 120


def _certain_death_at_end(qx: np.ndarray) -> np.ndarray:
    """Cap qx at 1, cut the table after the first qx = 1, end on qx = 1."""
    qx = np.minimum(np.asarray(qx, dtype=float), 1.0)
    certain = np.flatnonzero(qx >= 1.0)
    if len(certain):
        qx = qx[: certain[0] + 1]
    qx[-1] = 1.0
    return qx


class MortalityLoader:
    """
    Factory for raw mortality tables.

    Examples
    --------
    >>> loader = MortalityLoader()
    >>> data = loader.am92()
    >>> mt = MortTableConfig.build(data)
    """

    def from_dataframe(
        self,
        frame: pd.DataFrame,
        table_name: str = "Custom",
    ) -> MortalityData:
        """
        Wrap an in-memory table after checking its schema.

        Parameters
        ----------
        frame : pd.DataFrame
            Columns age and qx and/or lx, optionally duration
        table_name : str
            Table name

        Returns
        -------
        MortalityData
            Schema-checked raw table

        Raises
        ------
        MortalityFormatError
            If the frame is not a valid mortality table
        """
        data = MortalityData(frame=frame, table_name=table_name)
        logger.info(
            "Loaded %s table '%s' with %d rows",
            "select" if data.is_select else "ultimate",
            table_name,
            len(data.frame),
        )
        return data

    def from_dict(
        self,
        rates: dict[int, float],
        table_name: str = "Custom",
        column: str = QX,
    ) -> MortalityData:
        """
        Create an ultimate table from an age -> value mapping.

        Missing ages between the smallest and largest key are filled by
        linear interpolation.

        Parameters
        ----------
        rates : dict[int, float]
            Age -> qx (or lx) mapping
        table_name : str
            Table name
        column : str
            "qx" or "lx"

        Returns
        -------
        MortalityData
            Raw ultimate table

        Examples
        --------
        >>> loader = MortalityLoader()
        >>> data = loader.from_dict({65: 0.02, 67: 0.024, 68: 1.0})
        >>> data.frame["qx"].tolist()
        [0.02, 0.022, 0.024, 1.0]
        """
        if column not in (QX, LX):
            raise MortalityFormatError(f"column must be '{QX}' or '{LX}', got '{column}'")
        if not rates:
            raise MortalityFormatError("table has no rows")

        known = pd.Series(rates, dtype=float).sort_index()
        ages = np.arange(int(known.index.min()), int(known.index.max()) + 1)
        gaps = sorted(set(ages) - set(known.index))
        if gaps:
            logger.warning(
                "Interpolating %s for %d missing ages in '%s': %s",
                column, len(gaps), table_name, gaps,
            )
        values = np.interp(ages, known.index.to_numpy(dtype=float), known.to_numpy())
        return self.from_dataframe(pd.DataFrame({AGE: ages, column: values}), table_name)

    def from_select_dict(
        self,
        rates: dict[tuple[int, int], float],
        table_name: str = "Custom Select",
        column: str = QX,
    ) -> MortalityData:
        """
        Create a select table from an (age, duration) -> value mapping.

        Parameters
        ----------
        rates : dict[tuple[int, int], float]
            (attained age, duration) -> qx (or lx)
        table_name : str
            Table name
        column : str
            "qx" or "lx"

        Returns
        -------
        MortalityData
            Raw select table
        """
        if column not in (QX, LX):
            raise MortalityFormatError(f"column must be '{QX}' or '{LX}', got '{column}'")
        frame = pd.DataFrame(
            [(age, duration, value) for (age, duration), value in rates.items()],
            columns=[AGE, DURATION, column],
        )
        return self.from_dataframe(frame, table_name)

    # =========================================================================
    # Parametric laws
    # =========================================================================

    def _from_qx(self, min_age: int, qx: np.ndarray, table_name: str) -> MortalityData:
        qx = _certain_death_at_end(qx)
        ages = np.arange(min_age, min_age + len(qx))
        return self.from_dataframe(pd.DataFrame({AGE: ages, QX: qx}), table_name)

    def _from_force(
        self,
        force: Callable[[float], float],
        min_age: int,
        max_age: int,
        table_name: str,
    ) -> MortalityData:
        """qx by numerical integration of a force of mortality."""
        integrated = np.array([
            integrate.quad(force, age, age + 1, epsabs=QUADRATURE_TOLERANCE)[0]
            for age in range(min_age, max_age + 1)
        ])
        return self._from_qx(min_age, 1.0 - np.exp(-integrated), table_name)

    def constant_force(
        self,
        mu: float,
        min_age: int = 0,
        max_age: int = 120,
        table_name: str = "Constant Force",
    ) -> MortalityData:
        """
        Constant force of mortality.

        [T1] qx = 1 - e^(-μ) at every age
        """
        if mu <= 0:
            raise ValueError(f"CRITICAL: mu must be > 0, got {mu}")
        qx = np.full(max_age - min_age + 1, 1.0 - np.exp(-mu))
        return self._from_qx(min_age, qx, table_name)

    def de_moivre(
        self,
        omega: int,
        min_age: int = 0,
        table_name: str = "De Moivre",
    ) -> MortalityData:
        """
        De Moivre's law with limiting age ω.

        [T1] qx = 1 / (ω - x) for x < ω
        """
        if omega <= min_age:
            raise ValueError(f"CRITICAL: omega {omega} must exceed min_age {min_age}")
        ages = np.arange(min_age, omega)
        return self._from_qx(min_age, 1.0 / (omega - ages), table_name)

    def gompertz(
        self,
        b: float = 0.0001,
        c: float = 1.1,
        min_age: int = 0,
        max_age: int = 120,
        table_name: str = "Gompertz",
    ) -> MortalityData:
        """
        Gompertz law.

        [T1] μ_x = B·c^x, qx = 1 - exp(-B·c^x·(c - 1) / ln c)

        Parameters
        ----------
        b : float
            B, the mortality level
        c : float
            c > 1, the rate of ageing
        min_age, max_age : int
            Age range
        table_name : str
            Table name

        Returns
        -------
        MortalityData
            Raw ultimate table

        Examples
        --------
        >>> loader = MortalityLoader()
        >>> data = loader.gompertz(b=0.0003, c=1.07)
        """
        return self.makeham(0.0, b, c, min_age=min_age, max_age=max_age, table_name=table_name)

    def makeham(
        self,
        a: float,
        b: float,
        c: float,
        min_age: int = 0,
        max_age: int = 120,
        table_name: str = "Makeham",
    ) -> MortalityData:
        """
        Makeham law.

        [T1] μ_x = A + B·c^x, qx = 1 - exp(-A - B·c^x·(c - 1) / ln c)
        """
        if b <= 0 or c <= 1:
            raise ValueError(f"CRITICAL: need B > 0 and c > 1, got B={b}, c={c}")
        if a < 0:
            raise ValueError(f"CRITICAL: A must be >= 0, got {a}")
        ages = np.arange(min_age, max_age + 1)
        integrated = a + b * c ** ages * (c - 1.0) / np.log(c)
        return self._from_qx(min_age, 1.0 - np.exp(-integrated), table_name)

    def weibull(
        self,
        k: float,
        n: float,
        min_age: int = 0,
        max_age: int = 120,
        table_name: str = "Weibull",
    ) -> MortalityData:
        """
        Weibull law.

        [T1] μ_x = k·x^n, qx = 1 - exp(-k·((x+1)^(n+1) - x^(n+1)) / (n+1))
        """
        if k <= 0 or n <= 0:
            raise ValueError(f"CRITICAL: need k > 0 and n > 0, got k={k}, n={n}")
        ages = np.arange(min_age, max_age + 1, dtype=float)
        integrated = k * ((ages + 1) ** (n + 1) - ages ** (n + 1)) / (n + 1)
        return self._from_qx(min_age, 1.0 - np.exp(-integrated), table_name)

    def am92(self) -> MortalityData:
        """
        AM92 ultimate table (UK assured lives, 1991-94), ages 17-120.

        qx is reproduced from the published graduation formula by
        integrating the force of mortality over each year of age.

        Returns
        -------
        MortalityData
            Raw ultimate table with q120 = 1

        Examples
        --------
        >>> data = MortalityLoader().am92()
        >>> round(float(data.frame.set_index("age").at[70, "qx"]), 6)
        0.024783
        """
        p = AM92_PARAMETERS

        def force(age: float) -> float:
            t = (age - 70.0) / 50.0
            return (
                p["a0"] + p["a1"] * t
                + np.exp(p["b0"] + p["b1"] * t + p["b2"] * (2.0 * t * t - 1.0))
            )

        return self._from_force(force, AM92_MIN_AGE, AM92_MAX_AGE, "AM92")
