"""
Tests for life insurance benefits - single_life/benefits.py.

Small table at i = 25% (v = 0.8):
    qx = 0.1, 0.2, 0.5, 1.0 and lx = 1000, 900, 720, 360 at ages 60-63.
Discounted one-year death probabilities from age 60:
    v·q60 = 0.08, v²·1|q60 = 0.1152, v³·2|q60 = 0.18432
"""

import math

import pytest

from life_contingencies.single_life.annuities import aax
from life_contingencies.single_life.benefits import (
    DAx1n,
    DAxn,
    Ax,
    Ax1n,
    Axn,
    Axn1,
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
from life_contingencies.tables.config import MortTableConfig
from life_contingencies.validation.checks import ParameterValidationError

I = 0.25


class TestPureEndowment:
    """Exn and its alias."""

    def test_two_year(self, small_table: MortTableConfig) -> None:
        assert Exn(small_table, I, 60, n=2) == pytest.approx(0.64 * 0.72)

    def test_zero_term_is_one(self, small_table: MortTableConfig) -> None:
        assert Exn(small_table, I, 60, n=0) == 1.0

    def test_deferred(self, small_table: MortTableConfig) -> None:
        assert Exn(small_table, I, 60, n=1, t=1) == pytest.approx(Exn(small_table, I, 60, n=2))

    def test_alias(self, small_table: MortTableConfig) -> None:
        assert Axn1(small_table, I, 60, n=2) == Exn(small_table, I, 60, n=2)

    def test_second_moment(self, small_table: MortTableConfig) -> None:
        assert Exn(small_table, I, 60, n=1, moment=2) == pytest.approx(0.64 * 0.9)


class TestLevelBenefits:
    """Term, whole life and endowment insurance."""

    def test_term_one_year(self, small_table: MortTableConfig) -> None:
        assert Ax1n(small_table, I, 60, 1) == pytest.approx(0.08)

    def test_term_zero_is_zero(self, small_table: MortTableConfig) -> None:
        assert Ax1n(small_table, I, 60, 0) == 0.0

    def test_whole_life(self, small_table: MortTableConfig) -> None:
        assert Ax(small_table, I, 60) == pytest.approx(0.37952)

    def test_whole_life_at_ceiling_is_zero(self, small_table: MortTableConfig) -> None:
        assert Ax(small_table, I, 63) == 0.0

    def test_endowment(self, small_table: MortTableConfig) -> None:
        assert Axn(small_table, I, 60, 2) == pytest.approx(0.656)

    def test_endowment_decomposes(self, small_table: MortTableConfig) -> None:
        expected = Ax1n(small_table, I, 60, 2) + Exn(small_table, I, 60, n=2)
        assert Axn(small_table, I, 60, 2) == pytest.approx(expected)

    def test_deferred_term(self, small_table: MortTableConfig) -> None:
        assert Ax1n(small_table, I, 60, 1, t=1) == pytest.approx(0.1152)

    def test_second_moment(self, small_table: MortTableConfig) -> None:
        assert Ax1n(small_table, I, 60, 1, moment=2) == pytest.approx(0.064)

    def test_semiannual_term(self, small_table: MortTableConfig) -> None:
        assert Ax1n(small_table, I, 60, 1, m=2) == pytest.approx(
            math.sqrt(0.8) * 0.05 + 0.8 * 0.05
        )

    def test_whole_life_equals_one_minus_d_aax(self, small_table: MortTableConfig) -> None:
        """A = 1 - d·ä - v^n·npx when both stop at the ceiling."""
        d = I / (1 + I)
        expected = 1 - d * aax(small_table, I, 60) - 0.512 * 0.36
        assert Ax(small_table, I, 60) == pytest.approx(expected)


class TestVaryingBenefits:
    """Arithmetically increasing and decreasing benefits."""

    def test_increasing_term(self, small_table: MortTableConfig) -> None:
        assert IAx1n(small_table, I, 60, 3) == pytest.approx(0.86336)

    def test_increasing_whole_life(self, small_table: MortTableConfig) -> None:
        assert IAx(small_table, I, 60) == pytest.approx(IAx1n(small_table, I, 60, 3))

    def test_increasing_endowment_adds_unit_endowment(self, small_table: MortTableConfig) -> None:
        expected = IAx1n(small_table, I, 60, 2) + Exn(small_table, I, 60, n=2)
        assert IAxn(small_table, I, 60, 2) == pytest.approx(expected)

    def test_decreasing_term(self, small_table: MortTableConfig) -> None:
        assert DAx1n(small_table, I, 60, 3) == pytest.approx(0.65472)

    def test_decreasing_endowment_adds_unit_endowment(self, small_table: MortTableConfig) -> None:
        expected = DAx1n(small_table, I, 60, 2) + Exn(small_table, I, 60, n=2)
        assert DAxn(small_table, I, 60, 2) == pytest.approx(expected)

    def test_increasing_plus_decreasing(self, small_table: MortTableConfig) -> None:
        """(IA) + (DA) = (n+1)·A for the same term."""
        n = 3
        total = IAx1n(small_table, I, 60, n) + DAx1n(small_table, I, 60, n)
        assert total == pytest.approx((n + 1) * Ax1n(small_table, I, 60, n))


class TestGeometricBenefits:
    """Benefits growing at rate g value as level benefits at i'."""

    def test_growth_adjusted_rate(self) -> None:
        assert growth_adjusted_rate(0.05, 0.02) == pytest.approx(1.05 / 1.02 - 1)
        assert growth_adjusted_rate(0.04, 0.04) == pytest.approx(0.0)

    def test_growth_rate_validated(self) -> None:
        with pytest.raises(ParameterValidationError, match="g: must be > -1"):
            growth_adjusted_rate(0.05, -1.5)

    def test_zero_growth_matches_level(self, small_table: MortTableConfig) -> None:
        assert gAx(small_table, I, 60, 0.0) == pytest.approx(Ax(small_table, I, 60))
        assert gAx1n(small_table, I, 60, 2, 0.0) == pytest.approx(Ax1n(small_table, I, 60, 2))
        assert gAxn(small_table, I, 60, 2, 0.0) == pytest.approx(Axn(small_table, I, 60, 2))
        assert gExn(small_table, I, 60, 0.0, n=2) == pytest.approx(Exn(small_table, I, 60, n=2))

    def test_growth_equal_to_interest(self, small_table: MortTableConfig) -> None:
        """With i' = 0 the value is the probability of a payment."""
        assert gAx1n(small_table, I, 60, 3, I) == pytest.approx(1 - 0.36)
        assert gExn(small_table, I, 60, I, n=2) == pytest.approx(0.72)


class TestBenefitValidation:
    """Invalid queries raise with every violation listed."""

    def test_aggregated_violations(self, small_table: MortTableConfig) -> None:
        with pytest.raises(ParameterValidationError) as excinfo:
            Ax1n(small_table, I, 70, 1, entry_age=80)
        assert len(excinfo.value.violations) == 3
        assert "entry age 80 exceeds age 70" in str(excinfo.value)

    def test_term_past_table(self, small_table: MortTableConfig) -> None:
        with pytest.raises(ParameterValidationError, match="exceeds max age 63"):
            Axn(small_table, I, 62, 2)

    def test_select_benefits_differ(self, select_table: MortTableConfig) -> None:
        select = Ax1n(select_table, 0.04, 50, 10, entry_age=50)
        ultimate = Ax1n(select_table, 0.04, 50, 10)
        assert select < ultimate
