"""
Known-answer tests against the published AM92 tables at 4%.

Values are those printed in "Formulae and Tables for Actuarial Examinations"
(assurances to 5 d.p., annuities to 3 d.p.). The table is rebuilt from the
AM92 graduation formula, so agreement also checks the loader.

References:
    [T1] CMI Report 17 (1999), AM92 ultimate
    [T1] Formulae and Tables for Actuarial Examinations, AM92 pages
"""

import pytest

from life_contingencies.config.tolerances import (
    ANNUITY_TABLE_TOLERANCE,
    ASSURANCE_TABLE_TOLERANCE,
    IDENTITY_TOLERANCE,
)
from life_contingencies.single_life.annuities import aax, aaxn
from life_contingencies.single_life.benefits import Ax, Ax1n, Axn, Exn
from life_contingencies.single_life.commutations import Dx, Mx, Nx
from life_contingencies.tables.config import MortTableConfig

pytestmark = pytest.mark.validation

I = 0.04
D = I / (1 + I)

#: age -> (ä_x, A_x, ²A_x) at 4%
AM92_WHOLE_LIFE = {
    30: (21.834, 0.16023, 0.03528),
    40: (20.005, 0.23056, 0.06791),
    50: (17.444, 0.32907, 0.13065),
    60: (14.134, 0.45640, 0.23723),
    70: (10.375, 0.60097, 0.38975),
    80: (6.818, 0.73775, 0.56432),
}


class TestWholeLife:
    """Whole life annuity-due and assurance."""

    @pytest.mark.parametrize("age", sorted(AM92_WHOLE_LIFE))
    def test_annuity_due(self, am92: MortTableConfig, age: int) -> None:
        expected = AM92_WHOLE_LIFE[age][0]
        assert aax(am92, I, age) == pytest.approx(expected, abs=ANNUITY_TABLE_TOLERANCE)

    @pytest.mark.parametrize("age", sorted(AM92_WHOLE_LIFE))
    def test_assurance(self, am92: MortTableConfig, age: int) -> None:
        expected = AM92_WHOLE_LIFE[age][1]
        assert Ax(am92, I, age) == pytest.approx(expected, abs=ASSURANCE_TABLE_TOLERANCE)

    @pytest.mark.parametrize("age", sorted(AM92_WHOLE_LIFE))
    def test_second_moment(self, am92: MortTableConfig, age: int) -> None:
        expected = AM92_WHOLE_LIFE[age][2]
        assert Ax(am92, I, age, moment=2) == pytest.approx(
            expected, abs=ASSURANCE_TABLE_TOLERANCE
        )

    @pytest.mark.parametrize("age", sorted(AM92_WHOLE_LIFE))
    def test_assurance_annuity_relation(self, am92: MortTableConfig, age: int) -> None:
        """A = 1 - d·ä once the tail beyond the table is negligible."""
        assert Ax(am92, I, age) == pytest.approx(1 - D * aax(am92, I, age), abs=IDENTITY_TOLERANCE)

    def test_commutation_ratios(self, am92: MortTableConfig) -> None:
        d50 = Dx(am92, I, 50)
        assert Nx(am92, I, 50) / d50 == pytest.approx(17.444, abs=ANNUITY_TABLE_TOLERANCE)
        assert Mx(am92, I, 50) / d50 == pytest.approx(0.32907, abs=ASSURANCE_TABLE_TOLERANCE)


class TestTemporary:
    """Ten-year contracts at age 50."""

    def test_temporary_annuity(self, am92: MortTableConfig) -> None:
        assert aaxn(am92, I, 50, 10) == pytest.approx(8.314, abs=ANNUITY_TABLE_TOLERANCE)

    def test_endowment_assurance(self, am92: MortTableConfig) -> None:
        assert Axn(am92, I, 50, 10) == pytest.approx(0.68024, abs=ASSURANCE_TABLE_TOLERANCE)

    def test_pure_endowment(self, am92: MortTableConfig) -> None:
        assert Exn(am92, I, 50, n=10) == pytest.approx(0.64601, abs=ASSURANCE_TABLE_TOLERANCE)

    def test_term_assurance(self, am92: MortTableConfig) -> None:
        assert Ax1n(am92, I, 50, 10) == pytest.approx(0.03423, abs=ASSURANCE_TABLE_TOLERANCE)


class TestVariance:
    """Variance of the whole life present value random variables."""

    def test_assurance_variance(self, am92: MortTableConfig) -> None:
        variance = Ax(am92, I, 50, moment=2) - Ax(am92, I, 50) ** 2
        assert variance == pytest.approx(0.13065 - 0.32907 ** 2, abs=1e-4)

    def test_annuity_variance(self, am92: MortTableConfig) -> None:
        """Var(ä_K+1) = (²A - A²) / d²"""
        variance = (Ax(am92, I, 50, moment=2) - Ax(am92, I, 50) ** 2) / D ** 2
        assert variance == pytest.approx((0.13065 - 0.32907 ** 2) / D ** 2, rel=1e-3)


class TestSelectAtFifty:
    """Whole life contracts for a life selected at 50."""

    def test_annuity_due(self, am92_select: MortTableConfig) -> None:
        value = aax(am92_select, I, 50, entry_age=50)
        assert value == pytest.approx(17.454, abs=ANNUITY_TABLE_TOLERANCE)

    def test_assurance(self, am92_select: MortTableConfig) -> None:
        value = Ax(am92_select, I, 50, entry_age=50)
        assert value == pytest.approx(0.32868, abs=ASSURANCE_TABLE_TOLERANCE)

    def test_second_moment(self, am92_select: MortTableConfig) -> None:
        value = Ax(am92_select, I, 50, moment=2, entry_age=50)
        assert value == pytest.approx(0.13017, abs=ASSURANCE_TABLE_TOLERANCE)

    def test_annuity_variance(self, am92_select: MortTableConfig) -> None:
        """Var(ä_K+1) = (²A[50] - A[50]²) / d²"""
        first = Ax(am92_select, I, 50, entry_age=50)
        second = Ax(am92_select, I, 50, moment=2, entry_age=50)
        expected = (0.13017 - 0.32868 ** 2) / D ** 2
        assert (second - first ** 2) / D ** 2 == pytest.approx(expected, rel=1e-3)

    def test_select_lighter_than_ultimate(
        self, am92: MortTableConfig, am92_select: MortTableConfig
    ) -> None:
        assert aax(am92_select, I, 50, entry_age=50) > aax(am92, I, 50)
        assert aax(am92_select, I, 52, entry_age=50) == pytest.approx(aax(am92, I, 52))
