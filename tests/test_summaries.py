import pytest
from datetime import date

from messmate.core.period import Period
from messmate.ledger.records import LedgerSnapshot, MealRecord
from messmate.services.reconciliation import filter_period
from messmate.services.summaries import build_meal_grid, summarize_period
from tests.conftest import make_snapshot

OCTOBER = Period(2026, 10)


class TestOverview:
    def test_totals_and_breakdowns(self):
        snapshot = make_snapshot(
            meals={"Rahim Uddin": 6, "Karim Hasan": 4, "Sadia Akter": 0},
            market={"Rahim Uddin": 500.0},
            bills=[("House rent", 18000.0), ("Electricity", 1450.0)],
        )
        overview = summarize_period(filter_period(snapshot, OCTOBER))

        assert overview.period == OCTOBER
        assert overview.total_meals == 10
        assert overview.total_market == pytest.approx(500.0)
        assert overview.total_bills == pytest.approx(19450.0)
        assert overview.resident_count == 3
        # First names only, and nobody with zero meals
        assert [(t.name, t.value) for t in overview.meals_by_resident] == [("Rahim", 6), ("Karim", 4)]
        assert [t.name for t in overview.market_by_resident] == ["Rahim Uddin"]

    def test_empty_month(self):
        overview = summarize_period(filter_period(LedgerSnapshot(), OCTOBER))
        assert overview.total_meals == 0
        assert overview.meals_by_resident == []
        assert overview.market_by_resident == []


class TestMealGrid:
    def test_grid_has_a_column_per_day(self):
        snapshot = make_snapshot(meals={"A": 2, "B": 3}, market={}, day=date(2026, 10, 10))
        grid = build_meal_grid(filter_period(snapshot, OCTOBER))

        assert grid.days == list(range(1, 32))
        assert [row.name for row in grid.rows] == ["A", "B"]
        assert grid.rows[0].counts[9] == 2
        assert grid.rows[1].counts[9] == 3
        assert grid.day_totals[9] == 5
        assert sum(grid.day_totals) == grid.total == 5

    def test_rows_total_their_days(self):
        snapshot = make_snapshot(meals={"A": 2}, market={}, day=date(2026, 10, 1))
        extra = MealRecord(id="m-extra", tenant_id="t1", resident_id="r-A", date=date(2026, 10, 31), meal_count=3)
        snapshot = LedgerSnapshot.build(snapshot.residents, snapshot.meals + [extra], [], [])

        grid = build_meal_grid(filter_period(snapshot, OCTOBER))

        assert grid.rows[0].total == 5
        assert grid.rows[0].counts[0] == 2
        assert grid.rows[0].counts[30] == 3
