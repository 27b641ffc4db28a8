"""
Tests for query validation - validation/checks.py.

Checks collect every violation; ensure_valid raises once with all of them.
"""

import pytest

from life_contingencies.tables.config import Assumption, MortTableConfig
from life_contingencies.validation.checks import (
    ParameterValidationError,
    ValidationReport,
    Violation,
    ViolationKind,
    check_interest,
    check_query,
    check_table_config,
    check_whole_numbers,
    ensure_valid,
)


class TestValidationReport:
    """Report aggregation."""

    def test_empty_report_passes(self) -> None:
        report = ValidationReport()
        assert report.passed
        ensure_valid(report)

    def test_merge_keeps_order(self) -> None:
        first = ValidationReport((Violation(ViolationKind.RANGE, "x", "bad x"),))
        second = ValidationReport((Violation(ViolationKind.PARAMETER, "m", "bad m"),))
        merged = first.merge(second)
        assert [v.field for v in merged.violations] == ["x", "m"]
        assert len(merged.range_violations) == 1
        assert len(merged.parameter_violations) == 1

    def test_to_dict(self) -> None:
        report = check_query(60, 63, x=70)
        summary = report.to_dict()
        assert summary["passed"] is False
        assert summary["n_range"] == 2
        assert summary["violations"][0]["field"] == "x"


class TestCheckQuery:
    """Age-domain and parameter checks."""

    def test_valid_query(self) -> None:
        assert check_query(17, 120, x=50, t=5, n=10, entry_age=45, m=12, moment=2).passed

    def test_age_below_table(self) -> None:
        report = check_query(60, 63, x=59)
        assert [v.message for v in report.violations] == ["age 59 outside table range [60, 63]"]

    def test_horizon_past_max_age(self) -> None:
        report = check_query(17, 120, x=50, n=80)
        assert not report.passed
        assert "exceeds max age 120" in report.violations[0].message

    def test_horizon_past_supported_age(self) -> None:
        report = check_query(0, 200, x=100, n=60)
        assert [v.message for v in report.violations] == ["exceeds supported age 150"]

    def test_negative_durations(self) -> None:
        report = check_query(17, 120, x=50, t=-1, n=-2)
        assert {v.field for v in report.violations} == {"t", "n"}

    def test_all_entry_age_problems(self) -> None:
        report = check_query(60, 63, x=61, entry_age=58.5)
        messages = [v.message for v in report.violations]
        assert "must be a whole number, got 58.5" in messages
        assert "entry age 58.5 below table min age 60" in messages

    def test_entry_age_after_age(self) -> None:
        report = check_query(60, 63, x=61, entry_age=62)
        assert report.range_violations[0].message == "entry age 62 exceeds age 61"

    @pytest.mark.parametrize("m", [0, -1, 1.5])
    def test_bad_frequency(self, m: float) -> None:
        report = check_query(17, 120, x=50, m=m)
        assert [v.field for v in report.parameter_violations] == ["m"]

    def test_bad_moment(self) -> None:
        report = check_query(17, 120, x=50, moment=0)
        assert [v.field for v in report.violations] == ["moment"]


class TestOtherChecks:
    """Whole numbers, interest and table configuration."""

    def test_whole_numbers(self) -> None:
        report = check_whole_numbers(x=50, n=2.5, t=1.0)
        assert [v.field for v in report.violations] == ["n"]

    def test_interest(self) -> None:
        assert check_interest(0.0).passed
        assert check_interest(-0.5).passed
        assert not check_interest(-1.0).passed
        assert check_interest(-2.0, field="g").violations[0].field == "g"

    def test_table_config_collects_all(self) -> None:
        report = check_table_config(radix=0, pct=0, assumption="XYZ")
        assert [v.field for v in report.violations] == ["radix", "pct", "assumption"]

    def test_table_config_accepts_enum(self) -> None:
        assert check_table_config(1000, 1.0, Assumption.HPB).passed

    def test_table_config_fractional_radix(self) -> None:
        report = check_table_config(radix=2.5, pct=1.0, assumption="UDD")
        assert [v.message for v in report.violations] == ["must be a whole number, got 2.5"]
        assert check_table_config(radix=1000.0, pct=1.0, assumption="UDD").passed


class TestParameterValidationError:
    """Raised error carries the full report."""

    def test_message_lists_each_violation(self) -> None:
        report = check_query(60, 63, x=70, entry_age=80)
        with pytest.raises(ParameterValidationError) as excinfo:
            ensure_valid(report)
        message = str(excinfo.value)
        assert message.startswith("CRITICAL: Validation failed:")
        assert "[range] x: age 70 outside table range [60, 63]" in message
        assert "[range] entry_age: entry age 80 exceeds age 70" in message
        assert excinfo.value.report is report

    def test_is_value_error(self) -> None:
        assert issubclass(ParameterValidationError, ValueError)

    def test_build_rejects_bad_config(self, small_qx_frame) -> None:
        with pytest.raises(ParameterValidationError) as excinfo:
            MortTableConfig.build(small_qx_frame, radix=0, assumption="ABC")
        assert {v.field for v in excinfo.value.violations} == {"radix", "assumption"}
