"""Month overview and meal grid built from a period's records."""

from dataclasses import dataclass

from messmate.core.period import Period
from messmate.services.reconciliation import PeriodLedger


@dataclass(frozen=True)
class ResidentTotal:
    resident_id: str
    name: str
    value: float


@dataclass(frozen=True)
class PeriodOverview:
    """Headline figures for a month"""

    period: Period
    total_meals: int
    total_market: float
    total_bills: float
    resident_count: int
    meals_by_resident: list[ResidentTotal]
    market_by_resident: list[ResidentTotal]


@dataclass(frozen=True)
class MealGridRow:
    resident_id: str
    name: str
    counts: list[int]  # One entry per day of the month
    total: int


@dataclass(frozen=True)
class MealGrid:
    """Resident x day matrix of meal counts for a month"""

    period: Period
    days: list[int]
    rows: list[MealGridRow]
    day_totals: list[int]
    total: int


def summarize_period(ledger: PeriodLedger) -> PeriodOverview:
    """
    Overview for a month.

    Meal totals are labelled with the resident's first name; residents with
    nothing recorded are left out of both breakdowns.
    """
    meals = ledger.meals_by_resident()
    market = ledger.market_by_resident()

    meals_by_resident = [
        ResidentTotal(resident.id, resident.name.split(" ")[0], meals[resident.id])
        for resident in ledger.residents
        if meals.get(resident.id, 0) > 0
    ]
    market_by_resident = [
        ResidentTotal(resident.id, resident.name, market[resident.id])
        for resident in ledger.residents
        if market.get(resident.id, 0.0) > 0
    ]

    return PeriodOverview(
        period=ledger.period,
        total_meals=ledger.total_meals,
        total_market=ledger.total_market,
        total_bills=ledger.total_bills,
        resident_count=len(ledger.residents),
        meals_by_resident=meals_by_resident,
        market_by_resident=market_by_resident,
    )


def build_meal_grid(ledger: PeriodLedger) -> MealGrid:
    days = list(range(1, ledger.period.days_in_month + 1))
    cells = {(meal.resident_id, meal.date.day): meal.meal_count for meal in ledger.meals}

    rows = []
    for resident in ledger.residents:
        counts = [cells.get((resident.id, day), 0) for day in days]
        rows.append(MealGridRow(resident.id, resident.name, counts, sum(counts)))

    day_totals = [sum(row.counts[index] for row in rows) for index in range(len(days))]
    return MealGrid(period=ledger.period, days=days, rows=rows, day_totals=day_totals, total=sum(day_totals))
