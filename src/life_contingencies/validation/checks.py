"""
Query Validation - collect-all checks for life contingency inputs.

Every check returns the full list of violations it finds instead of
stopping at the first one, so a caller who passes both a bad age and a bad
entry age is told about both in one error.

Checks are grouped by kind:
- RANGE: an age, term or entry age outside the table's populated domain
- PARAMETER: a value that is invalid regardless of the table (m < 1, pct <= 0)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from life_contingencies.config.settings import SETTINGS

logger = logging.getLogger(__name__)


class ViolationKind(Enum):
    """Category of a validation failure."""
    RANGE = "range"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class Violation:
    """
    A single failed check.

    Attributes
    ----------
    kind : ViolationKind
        RANGE or PARAMETER
    field : str
        Name of the offending input
    message : str
        Explanation of the failure
    value : Any, optional
        The value that was checked
    """

    kind: ViolationKind
    field: str
    message: str
    value: Any | None = None


@dataclass(frozen=True)
class ValidationReport:
    """
    Aggregated result of one or more checks.

    Attributes
    ----------
    violations : tuple[Violation, ...]
        Every violation found, in check order
    """

    violations: tuple[Violation, ...] = ()

    @property
    def passed(self) -> bool:
        """True when no check failed."""
        return not self.violations

    @property
    def range_violations(self) -> list[Violation]:
        """Violations about the table's age domain."""
        return [v for v in self.violations if v.kind == ViolationKind.RANGE]

    @property
    def parameter_violations(self) -> list[Violation]:
        """Violations independent of the table."""
        return [v for v in self.violations if v.kind == ViolationKind.PARAMETER]

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        """Combine two reports, keeping order."""
        return ValidationReport(violations=self.violations + other.violations)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "passed": self.passed,
            "n_range": len(self.range_violations),
            "n_parameter": len(self.parameter_violations),
            "violations": [
                {
                    "kind": v.kind.value,
                    "field": v.field,
                    "message": v.message,
                    "value": v.value,
                }
                for v in self.violations
            ],
        }


class ParameterValidationError(ValueError):
    """Raised when a query or table configuration fails validation."""

    def __init__(self, report: ValidationReport):
        self.report = report
        lines = "\n".join(
            f"  - [{v.kind.value}] {v.field}: {v.message}" for v in report.violations
        )
        super().__init__(f"CRITICAL: Validation failed:\n{lines}")

    @property
    def violations(self) -> tuple[Violation, ...]:
        return self.report.violations


# =============================================================================
# Checks
# =============================================================================


def _is_whole(value: float) -> bool:
    return float(value).is_integer()


def check_query(
    min_age: int,
    max_age: int,
    x: float,
    t: float = 0,
    n: float = 0,
    entry_age: int | None = None,
    m: int = 1,
    moment: int = 1,
    names: tuple[str, str] = ("t", "n"),
) -> ValidationReport:
    """
    Validate a query against a table's age bounds.

    Parameters
    ----------
    min_age, max_age : int
        Populated age domain of the table
    x : float
        Age at issue (may be fractional for survival queries)
    t : float
        Deferral, or the offset k of a deferred survival query
    n : float
        Term, or the survival duration
    entry_age : int, optional
        Age at selection for select tables
    m : int
        Payment frequency
    moment : int
        Moment order
    names : tuple of str
        Names reported for `t` and `n`, so survival queries can report
        their own (k, t) arguments

    Returns
    -------
    ValidationReport
        All violations found (empty if the query is valid)

    Examples
    --------
    >>> report = check_query(17, 120, x=50, n=80)
    >>> report.passed
    False
    """
    found: list[Violation] = []
    ceiling = SETTINGS.mortality.max_supported_age
    t_name, n_name = names
    span = f"x + {t_name} + {n_name}"

    if x < min_age or x > max_age:
        found.append(Violation(
            ViolationKind.RANGE, "x",
            f"age {x} outside table range [{min_age}, {max_age}]", x,
        ))
    if t < 0:
        found.append(Violation(ViolationKind.PARAMETER, t_name, f"must be >= 0, got {t}", t))
    if n < 0:
        found.append(Violation(ViolationKind.PARAMETER, n_name, f"must be >= 0, got {n}", n))
    if x + t + n > max_age:
        found.append(Violation(
            ViolationKind.RANGE, span,
            f"{x} + {t} + {n} = {x + t + n} exceeds max age {max_age}", x + t + n,
        ))
    elif x + t + n > ceiling:
        found.append(Violation(
            ViolationKind.RANGE, span,
            f"exceeds supported age {ceiling}", x + t + n,
        ))
    if entry_age is not None:
        if not _is_whole(entry_age):
            found.append(Violation(
                ViolationKind.PARAMETER, "entry_age",
                f"must be a whole number, got {entry_age}", entry_age,
            ))
        if entry_age < min_age:
            found.append(Violation(
                ViolationKind.RANGE, "entry_age",
                f"entry age {entry_age} below table min age {min_age}", entry_age,
            ))
        if entry_age > x:
            found.append(Violation(
                ViolationKind.RANGE, "entry_age",
                f"entry age {entry_age} exceeds age {x}", entry_age,
            ))
    if m < 1 or not _is_whole(m):
        found.append(Violation(
            ViolationKind.PARAMETER, "m", f"must be a whole number >= 1, got {m}", m,
        ))
    if moment < 1 or not _is_whole(moment):
        found.append(Violation(
            ViolationKind.PARAMETER, "moment",
            f"must be a whole number >= 1, got {moment}", moment,
        ))

    report = ValidationReport(violations=tuple(found))
    if not report.passed:
        logger.debug("Query validation failed: %s", report.to_dict())
    return report


def check_whole_numbers(**values: float) -> ValidationReport:
    """Flag every keyword whose value is not a whole number."""
    return ValidationReport(violations=tuple(
        Violation(ViolationKind.PARAMETER, name, f"must be a whole number, got {value}", value)
        for name, value in values.items()
        if not _is_whole(value)
    ))


def check_interest(i: float, field: str = "i") -> ValidationReport:
    """Interest rates must exceed -100% so that v = 1/(1+i) is finite."""
    if i <= -1:
        return ValidationReport(violations=(
            Violation(ViolationKind.PARAMETER, field, f"must be > -1, got {i}", i),
        ))
    return ValidationReport()


def check_table_config(radix: float, pct: float, assumption: Any) -> ValidationReport:
    """
    Validate mortality table construction parameters.

    Parameters
    ----------
    radix : float
        Initial cohort size, must be >= 1
    pct : float
        qx multiplier, must be > 0
    assumption : Any
        Interpolation law; must name one of UDD, CFM, HPB

    Returns
    -------
    ValidationReport
        All violations found
    """
    found: list[Violation] = []
    if radix < 1:
        found.append(Violation(ViolationKind.PARAMETER, "radix", f"must be >= 1, got {radix}", radix))
    elif not _is_whole(radix):
        found.append(Violation(
            ViolationKind.PARAMETER, "radix", f"must be a whole number, got {radix}", radix,
        ))
    if pct <= 0:
        found.append(Violation(ViolationKind.PARAMETER, "pct", f"must be > 0, got {pct}", pct))
    name = getattr(assumption, "value", assumption)
    if name not in ("UDD", "CFM", "HPB"):
        found.append(Violation(
            ViolationKind.PARAMETER, "assumption",
            f"must be one of UDD, CFM, HPB, got {assumption!r}", assumption,
        ))
    return ValidationReport(violations=tuple(found))


def ensure_valid(report: ValidationReport) -> None:
    """
    Raise if the report holds any violation.

    Raises
    ------
    ParameterValidationError
        Carrying the full report
    """
    if not report.passed:
        raise ParameterValidationError(report)
