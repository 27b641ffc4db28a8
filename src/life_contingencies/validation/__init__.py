"""
Validation framework for life contingency queries.

Collect-all checks shared by every survival, commutation, benefit and
annuity function:
- check_query: age bounds, term bounds, entry age, frequency, moment
- check_table_config: radix, pct, interpolation assumption
- check_interest: interest rate domain
"""

from life_contingencies.validation.checks import (
    ParameterValidationError,
    ValidationReport,
    Violation,
    # Enums and Results
    ViolationKind,
    check_interest,
    # Checks
    check_query,
    check_table_config,
    check_whole_numbers,
    ensure_valid,
)

__all__ = [
    # Enums and Results
    "ViolationKind",
    "Violation",
    "ValidationReport",
    "ParameterValidationError",
    # Checks
    "check_query",
    "check_whole_numbers",
    "check_interest",
    "check_table_config",
    "ensure_valid",
]
