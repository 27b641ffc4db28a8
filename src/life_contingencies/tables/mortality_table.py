"""
Mortality Table entities.

Two shapes are supported:
- 1-D (ultimate) tables indexed by age
- 2-D (select and ultimate) tables indexed by age and duration since selection

MortalityData holds a raw, schema-checked table that may carry only one of
qx or lx. MortalityTable holds a canonical table where both are populated.
Both wrap a pandas DataFrame in long form and are never mutated after
construction; every transformation returns a new object.

Theory
------
[T1] qx = probability that a life aged x dies before x+1
[T1] lx(x+1) = lx(x) × (1 - qx(x))
[T1] dx = lx(x) - lx(x+1), with dx = lx at the table ceiling (certain death)
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

AGE = "age"
DURATION = "duration"
QX = "qx"
LX = "lx"

_KNOWN_COLUMNS = (AGE, QX, LX, DURATION)


class MortalityFormatError(ValueError):
    """Raised when a table's shape or values are not a valid mortality table."""

    def __init__(self, problems: list[str] | str):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__(
            "CRITICAL: Invalid mortality table:\n"
            + "\n".join(f"  - {p}" for p in self.problems)
        )


class TableLookupError(LookupError):
    """Raised when a lookup hits a cell the table does not populate."""
    pass


# =============================================================================
# Schema Checks
# =============================================================================


def _contiguous(values: np.ndarray) -> bool:
    unique = np.unique(values)
    return bool(np.all(np.diff(unique) == 1))


def validate_schema(frame: pd.DataFrame) -> None:
    """
    Check that a frame is a recognisable mortality table.

    All problems are collected before raising.

    Parameters
    ----------
    frame : pd.DataFrame
        Columns age, qx and/or lx, optionally duration

    Raises
    ------
    MortalityFormatError
        Listing every problem found
    """
    if not isinstance(frame, pd.DataFrame):
        raise MortalityFormatError(f"expected a pandas DataFrame, got {type(frame).__name__}")
    if frame.empty:
        raise MortalityFormatError("table has no rows")

    columns = list(frame.columns)
    problems: list[str] = []

    unknown = [c for c in columns if c not in _KNOWN_COLUMNS]
    if unknown:
        problems.append(f"unrecognised columns {unknown}; expected {list(_KNOWN_COLUMNS)}")
    if len(set(columns)) != len(columns):
        problems.append(f"duplicate column names in {columns}")
    if AGE not in columns:
        problems.append("missing 'age' column")
    if QX not in columns and LX not in columns:
        problems.append("table needs a 'qx' or an 'lx' column")
    if problems:
        raise MortalityFormatError(problems)

    for col in columns:
        if not pd.api.types.is_numeric_dtype(frame[col]):
            problems.append(f"column '{col}' is not numeric")
    if problems:
        raise MortalityFormatError(problems)

    for col in columns:
        values = frame[col].to_numpy(dtype=float)
        if np.isnan(values).any():
            problems.append(f"column '{col}' has missing values")
        elif (values < 0).any():
            problems.append(f"column '{col}' has negative values")
    if QX in columns and (frame[QX].to_numpy(dtype=float) > 1).any():
        problems.append("qx values must be <= 1")
    for col in (AGE, DURATION):
        if col in columns:
            values = frame[col].to_numpy(dtype=float)
            if not np.all(np.mod(values[~np.isnan(values)], 1) == 0):
                problems.append(f"column '{col}' must hold whole numbers")
    if problems:
        raise MortalityFormatError(problems)

    ages = frame[AGE].to_numpy(dtype=int)
    if not _contiguous(ages):
        problems.append("age values must form a contiguous step-1 range")

    if DURATION not in columns:
        if len(np.unique(ages)) != len(ages):
            problems.append("duplicate ages in a table without a duration column")
    else:
        durations = frame[DURATION].to_numpy(dtype=int)
        if not _contiguous(durations):
            problems.append("duration values must form a contiguous step-1 range")
        if frame.duplicated(subset=[AGE, DURATION]).any():
            problems.append("duplicate (age, duration) pairs")
        else:
            gapped = [
                int(age)
                for age, group in frame.groupby(AGE)[DURATION]
                if not _contiguous(group.to_numpy(dtype=int))
            ]
            if gapped:
                problems.append(f"gaps inside the select period at ages {gapped}")
            max_dur = durations.max()
            ultimate_ages = np.unique(ages[durations == max_dur])
            if not _contiguous(ultimate_ages) or ultimate_ages.max() != ages.max():
                problems.append(
                    f"ultimate column (duration {max_dur}) must cover a contiguous "
                    f"run of ages ending at {ages.max()}"
                )

    if problems:
        raise MortalityFormatError(problems)


# =============================================================================
# Raw Table
# =============================================================================


@dataclass(frozen=True, eq=False)
class MortalityData:
    """
    Raw, schema-checked mortality table.

    Attributes
    ----------
    frame : pd.DataFrame
        Long-form table: age, qx and/or lx, optionally duration
    table_name : str
        Table identifier (e.g., "AM92")
    """

    frame: pd.DataFrame
    table_name: str = "Custom"

    def __post_init__(self) -> None:
        validate_schema(self.frame)
        # Frozen dataclass workaround: use object.__setattr__
        object.__setattr__(self, "frame", _normalise(self.frame))

    @property
    def is_select(self) -> bool:
        return DURATION in self.frame.columns


def _normalise(frame: pd.DataFrame) -> pd.DataFrame:
    """Copy, cast axes to int and values to float, sort by (duration, age)."""
    out = frame.copy()
    out[AGE] = out[AGE].astype(int)
    for col in (QX, LX):
        if col in out.columns:
            out[col] = out[col].astype(float)
    keys = [AGE]
    if DURATION in out.columns:
        out[DURATION] = out[DURATION].astype(int)
        keys = [DURATION, AGE]
    ordered = [c for c in _KNOWN_COLUMNS if c in out.columns]
    return out[ordered].sort_values(keys).reset_index(drop=True)


# =============================================================================
# Canonical Table
# =============================================================================


@dataclass(frozen=True, eq=False)
class MortalityTable:
    """
    Canonical mortality table holding both qx and lx.

    Values that could not be derived (for example a select lx at the table
    ceiling) are stored as NaN and raise TableLookupError when read.

    Attributes
    ----------
    frame : pd.DataFrame
        Long-form table: age, qx, lx and, for select tables, duration
    table_name : str
        Table identifier

    Examples
    --------
    >>> frame = pd.DataFrame({"age": [0, 1, 2], "qx": [0.1, 0.5, 1.0]})
    >>> table = canonicalize(frame, radix=1000)
    >>> table.lx(1)
    900.0
    """

    frame: pd.DataFrame
    table_name: str = "Custom"

    def __post_init__(self) -> None:
        missing = [c for c in (AGE, QX, LX) if c not in self.frame.columns]
        if missing:
            raise MortalityFormatError(f"canonical table is missing columns {missing}")
        frame = _normalise(self.frame)
        object.__setattr__(self, "frame", frame)
        if self.is_select:
            index = frame.set_index([AGE, DURATION])
        else:
            index = frame.set_index(AGE)
        object.__setattr__(self, "_index", index)

    @property
    def is_select(self) -> bool:
        """True for 2-D (select and ultimate) tables."""
        return DURATION in self.frame.columns

    @property
    def min_age(self) -> int:
        return int(self.frame[AGE].min())

    @property
    def max_age(self) -> int:
        return int(self.frame[AGE].max())

    @property
    def min_duration(self) -> int:
        self._require_select()
        return int(self.frame[DURATION].min())

    @property
    def max_duration(self) -> int:
        self._require_select()
        return int(self.frame[DURATION].max())

    def _require_select(self) -> None:
        if not self.is_select:
            raise TableLookupError(f"table '{self.table_name}' has no duration axis")

    def value(self, column: str, age: int, duration: int | None = None) -> float:
        """
        Look up a single cell.

        Parameters
        ----------
        column : str
            "qx" or "lx"
        age : int
            Attained age
        duration : int, optional
            Duration since selection; required for select tables

        Returns
        -------
        float
            Cell value

        Raises
        ------
        TableLookupError
            If the cell is absent or undefined
        """
        if self.is_select:
            if duration is None:
                raise TableLookupError(
                    f"select table '{self.table_name}' needs a duration to look up age {age}"
                )
            key = (int(age), int(duration))
        else:
            if duration is not None:
                self._require_select()
            key = int(age)
        try:
            result = self._index.loc[key, column]
        except KeyError:
            raise TableLookupError(
                f"no {column} cell at {'(age, duration)' if self.is_select else 'age'} "
                f"{key} in table '{self.table_name}'"
            ) from None
        if np.isnan(result):
            raise TableLookupError(
                f"{column} is undefined at {key} in table '{self.table_name}'"
            )
        return float(result)

    def values(self, column: str, ages: np.ndarray) -> np.ndarray:
        """
        Vectorised lookup over ages of a 1-D table.

        Raises
        ------
        TableLookupError
            If any age is absent or any value undefined
        """
        self._require_one_dimensional()
        ages = np.asarray(ages, dtype=int)
        series = self._index[column]
        found = series.reindex(ages).to_numpy(dtype=float)
        if np.isnan(found).any():
            bad = ages[np.isnan(found)].tolist()
            raise TableLookupError(f"{column} undefined at ages {bad} in table '{self.table_name}'")
        return found

    def _require_one_dimensional(self) -> None:
        if self.is_select:
            raise TableLookupError(
                f"select table '{self.table_name}' must be projected before age-only lookups"
            )

    def qx(self, age: int, duration: int | None = None) -> float:
        """Mortality rate at age (and duration for select tables)."""
        return self.value(QX, age, duration)

    def lx(self, age: int, duration: int | None = None) -> float:
        """Survivors at age (and duration for select tables)."""
        return self.value(LX, age, duration)

    def dx(self, age: int) -> float:
        """
        Deaths between age and age+1 on a 1-D table.

        [T1] dx = lx(x) - lx(x+1); at the table ceiling dx = lx(x).
        """
        self._require_one_dimensional()
        if age == self.max_age:
            return self.lx(age)
        return self.lx(age) - self.lx(age + 1)

    def to_frame(self) -> pd.DataFrame:
        """Return a copy of the underlying long-form table."""
        return self.frame.copy()

    def __len__(self) -> int:
        return len(self.frame)

    def __repr__(self) -> str:
        shape = "select" if self.is_select else "ultimate"
        return (
            f"MortalityTable(table_name={self.table_name!r}, {shape}, "
            f"ages={self.min_age}-{self.max_age})"
        )
