"""Record shapes shared by both ledger backends."""

import datetime
from dataclasses import dataclass, field
from enum import Enum as PyEnum

from pydantic import BaseModel, ConfigDict, Field


class LedgerRecord(BaseModel):
    """Base for tenant-scoped ledger records.

    Records are immutable; an update produces a copy via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    tenant_id: str


class Resident(LedgerRecord):
    """A person sharing the household's meals and costs"""

    name: str = Field(..., min_length=1)
    join_date: datetime.date


class MealRecord(LedgerRecord):
    """Meals eaten by one resident on one day (at most one per resident/day)"""

    resident_id: str
    date: datetime.date
    meal_count: int = Field(..., ge=0)


class MarketRecord(LedgerRecord):
    """Groceries bought by a resident on behalf of the house"""

    resident_id: str
    date: datetime.date
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1)


class BillRecord(LedgerRecord):
    """Shared bill (rent, utilities, staff) feeding the fixed-fee pool"""

    name: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    date: datetime.date


class RecordKind(str, PyEnum):
    """The four tenant-scoped collections"""

    RESIDENTS = "residents"
    MEALS = "meals"
    MARKET = "market"
    BILLS = "bills"

    @property
    def record_type(self) -> type[LedgerRecord]:
        return RECORD_TYPES[self]


RECORD_TYPES: dict[RecordKind, type[LedgerRecord]] = {
    RecordKind.RESIDENTS: Resident,
    RecordKind.MEALS: MealRecord,
    RecordKind.MARKET: MarketRecord,
    RecordKind.BILLS: BillRecord,
}


def newest_first(records: list) -> list:
    """Sort dated records newest first; ties keep their existing order."""
    return sorted(records, key=lambda record: record.date, reverse=True)


@dataclass(frozen=True)
class LedgerSnapshot:
    """
    Complete copy of one tenant's four collections.

    The Record Repository holds exactly one snapshot and replaces it
    wholesale after every applied mutation. Use ``LedgerSnapshot.build`` so
    both backends hand out collections in the same order.
    """

    residents: list[Resident] = field(default_factory=list)
    meals: list[MealRecord] = field(default_factory=list)
    market: list[MarketRecord] = field(default_factory=list)
    bills: list[BillRecord] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        residents: list[Resident],
        meals: list[MealRecord],
        market: list[MarketRecord],
        bills: list[BillRecord],
    ) -> "LedgerSnapshot":
        return cls(
            residents=sorted(residents, key=lambda resident: resident.join_date),
            meals=sorted(meals, key=lambda meal: meal.date),
            market=newest_first(market),
            bills=newest_first(bills),
        )

    @classmethod
    def from_collections(cls, collections: dict[RecordKind, list]) -> "LedgerSnapshot":
        return cls.build(
            residents=list(collections.get(RecordKind.RESIDENTS, [])),
            meals=list(collections.get(RecordKind.MEALS, [])),
            market=list(collections.get(RecordKind.MARKET, [])),
            bills=list(collections.get(RecordKind.BILLS, [])),
        )

    def collection(self, kind: RecordKind) -> list:
        return getattr(self, kind.value)

    def resident(self, resident_id: str) -> Resident | None:
        return next((r for r in self.residents if r.id == resident_id), None)
