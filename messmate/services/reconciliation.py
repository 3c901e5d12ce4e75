"""
Reconciliation engine: meal rate and per-resident balances for a month.

Pure functions over a snapshot; nothing here touches a store or persists.
Two settlement policies are kept side by side on purpose:

- Policy A, ``settle_market_only``: the monthly report. Only market spend
  is shared out through the meal rate; fixed fees are ignored.
- Policy B, ``settle_with_fixed_fee``: the detailed calculation. The fixed
  fee is added to the cost pool and also split equally as a deposit, so the
  balances of all residents sum to zero whenever any meal was eaten.

A month with no meals has a meal rate of 0, never NaN or infinity.
Negative balance: the resident owes the house. Otherwise a return is due.
"""

from collections import defaultdict
from dataclasses import dataclass

from messmate.core.period import Period
from messmate.ledger.records import (
    BillRecord,
    LedgerSnapshot,
    MarketRecord,
    MealRecord,
    Resident,
)


@dataclass(frozen=True)
class PeriodLedger:
    """Records that fall inside one period (residents are not date-filtered)"""

    period: Period
    residents: list[Resident]
    meals: list[MealRecord]
    market: list[MarketRecord]
    bills: list[BillRecord]

    @property
    def total_meals(self) -> int:
        return sum(meal.meal_count for meal in self.meals)

    @property
    def total_market(self) -> float:
        return sum(item.amount for item in self.market)

    @property
    def total_bills(self) -> float:
        return sum(bill.amount for bill in self.bills)

    def meals_by_resident(self) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        for meal in self.meals:
            totals[meal.resident_id] += meal.meal_count
        return totals

    def market_by_resident(self) -> dict[str, float]:
        totals: dict[str, float] = defaultdict(float)
        for item in self.market:
            totals[item.resident_id] += item.amount
        return totals


@dataclass(frozen=True)
class ResidentBalance:
    """One resident's settlement line"""

    resident_id: str
    name: str
    total_meals: int
    total_market: float
    meal_cost: float
    fixed_share: float
    total_deposit: float
    balance: float

    @property
    def owes(self) -> bool:
        return self.balance < 0

    @property
    def status(self) -> str:
        """"owed" when the resident owes the house, "return" otherwise"""
        return "owed" if self.owes else "return"


@dataclass(frozen=True)
class MarketSettlement:
    """Policy A result (monthly report)"""

    period: Period
    total_meals: int
    total_market: float
    meal_rate: float
    balances: list[ResidentBalance]


@dataclass(frozen=True)
class FullSettlement:
    """Policy B result (detailed calculation)"""

    period: Period
    total_meals: int
    total_market: float
    fixed_fee: float
    total_expense: float
    meal_rate: float
    fixed_share: float
    balances: list[ResidentBalance]

    @property
    def total_balance(self) -> float:
        return sum(line.balance for line in self.balances)


def filter_period(snapshot: LedgerSnapshot, period: Period) -> PeriodLedger:
    """Keep the meals, market entries and bills dated inside the period."""
    return PeriodLedger(
        period=period,
        residents=list(snapshot.residents),
        meals=[meal for meal in snapshot.meals if period.contains(meal.date)],
        market=[item for item in snapshot.market if period.contains(item.date)],
        bills=[bill for bill in snapshot.bills if period.contains(bill.date)],
    )


def meal_rate(total_cost: float, total_meals: int) -> float:
    """Cost per meal; 0 when no meals were eaten."""
    if total_meals <= 0:
        return 0.0
    return total_cost / total_meals


def settle_market_only(ledger: PeriodLedger) -> MarketSettlement:
    """
    Policy A: share market spend by meals eaten.

    balance = resident market spend - resident meals * (market / meals)
    """
    total_meals = ledger.total_meals
    total_market = ledger.total_market
    rate = meal_rate(total_market, total_meals)

    meals = ledger.meals_by_resident()
    market = ledger.market_by_resident()

    balances = []
    for resident in ledger.residents:
        resident_meals = meals.get(resident.id, 0)
        resident_market = market.get(resident.id, 0.0)
        meal_cost = resident_meals * rate
        balances.append(
            ResidentBalance(
                resident_id=resident.id,
                name=resident.name,
                total_meals=resident_meals,
                total_market=resident_market,
                meal_cost=meal_cost,
                fixed_share=0.0,
                total_deposit=resident_market,
                balance=resident_market - meal_cost,
            )
        )

    return MarketSettlement(
        period=ledger.period,
        total_meals=total_meals,
        total_market=total_market,
        meal_rate=rate,
        balances=balances,
    )


def settle_with_fixed_fee(ledger: PeriodLedger, fixed_fee: float) -> FullSettlement:
    """
    Policy B: share market spend plus a fixed fee.

    The fixed fee joins the cost pool behind the meal rate and is credited
    back to every resident in equal shares:

        meal_rate     = (market + fixed_fee) / meals
        fixed_share   = fixed_fee / max(1, residents)
        total_deposit = resident market spend + fixed_share
        balance       = total_deposit - resident meals * meal_rate

    Args:
        ledger: Records of the period
        fixed_fee: Non-market shared costs for the period (rent, bills, staff)
    """
    total_meals = ledger.total_meals
    total_market = ledger.total_market
    total_expense = total_market + fixed_fee
    rate = meal_rate(total_expense, total_meals)
    resident_count = max(1, len(ledger.residents))
    fixed_share = fixed_fee / resident_count

    meals = ledger.meals_by_resident()
    market = ledger.market_by_resident()

    balances = []
    for resident in ledger.residents:
        resident_meals = meals.get(resident.id, 0)
        resident_market = market.get(resident.id, 0.0)
        meal_cost = resident_meals * rate
        total_deposit = resident_market + fixed_share
        balances.append(
            ResidentBalance(
                resident_id=resident.id,
                name=resident.name,
                total_meals=resident_meals,
                total_market=resident_market,
                meal_cost=meal_cost,
                fixed_share=fixed_share,
                total_deposit=total_deposit,
                balance=total_deposit - meal_cost,
            )
        )

    return FullSettlement(
        period=ledger.period,
        total_meals=total_meals,
        total_market=total_market,
        fixed_fee=fixed_fee,
        total_expense=total_expense,
        meal_rate=rate,
        fixed_share=fixed_share,
        balances=balances,
    )
