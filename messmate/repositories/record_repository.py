"""
Record Repository: typed façade over the active ledger store.

The repository exclusively owns the in-memory collections consumers read.
It never patches them: after every applied mutation it swaps in the snapshot
the store returned and notifies subscribers once. Input is assumed to be
validated by the caller (non-empty names, positive amounts, real dates).
"""

from datetime import date
from typing import Callable

import structlog

from messmate.ledger.records import (
    BillRecord,
    LedgerSnapshot,
    MarketRecord,
    MealRecord,
    RecordKind,
    Resident,
)
from messmate.ledger.store import LedgerMode, LedgerStore

logger = structlog.get_logger(__name__)

SnapshotListener = Callable[[LedgerSnapshot], None]


class RecordRepository:
    """Repository for Resident, MealRecord, MarketRecord and BillRecord operations"""

    def __init__(self, store: LedgerStore):
        self.store = store
        self._snapshot = LedgerSnapshot()
        self._listeners: list[SnapshotListener] = []

    @property
    def mode(self) -> LedgerMode:
        return self.store.mode

    @property
    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    @property
    def residents(self) -> list[Resident]:
        return self._snapshot.residents

    @property
    def meals(self) -> list[MealRecord]:
        return self._snapshot.meals

    @property
    def market(self) -> list[MarketRecord]:
        return self._snapshot.market

    @property
    def bills(self) -> list[BillRecord]:
        return self._snapshot.bills

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called with each new snapshot.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load(self) -> bool:
        """Fetch the full ledger from the store"""
        return self._replace(await self.store.snapshot())

    async def add_resident(self, name: str, join_date: date | None = None) -> bool:
        """Add a resident; the join date defaults to today"""
        fields = {"name": name, "join_date": join_date or date.today()}
        return self._replace(await self.store.create(RecordKind.RESIDENTS, fields))

    async def delete_resident(self, resident_id: str) -> bool:
        """Delete a resident together with its meal and market records"""
        return self._replace(await self.store.delete(RecordKind.RESIDENTS, resident_id))

    def find_meal(self, resident_id: str, day: date) -> MealRecord | None:
        return next(
            (m for m in self.meals if m.resident_id == resident_id and m.date == day),
            None,
        )

    async def set_meal_count(self, resident_id: str, day: date, meal_count: int) -> bool:
        """
        Upsert the meal cell for (resident, day).

        - count > 0, no record: create one
        - count > 0, record exists: update its count (same count: nothing to do)
        - count == 0, record exists: delete it
        - count == 0, no record: nothing to do

        A record with meal_count 0 is never stored.

        Returns:
            True if the snapshot changed
        """
        existing = self.find_meal(resident_id, day)

        if meal_count > 0:
            if existing is None:
                fields = {"resident_id": resident_id, "date": day, "meal_count": meal_count}
                return self._replace(await self.store.create(RecordKind.MEALS, fields))
            if existing.meal_count == meal_count:
                return False
            return self._replace(
                await self.store.update(RecordKind.MEALS, existing.id, {"meal_count": meal_count})
            )

        if existing is not None:
            return self._replace(await self.store.delete(RecordKind.MEALS, existing.id))
        return False

    async def add_market_record(
        self, resident_id: str, day: date, amount: float, description: str
    ) -> bool:
        fields = {
            "resident_id": resident_id,
            "date": day,
            "amount": amount,
            "description": description,
        }
        return self._replace(await self.store.create(RecordKind.MARKET, fields))

    async def delete_market_record(self, record_id: str) -> bool:
        return self._replace(await self.store.delete(RecordKind.MARKET, record_id))

    async def add_bill(self, name: str, amount: float, day: date) -> bool:
        fields = {"name": name, "amount": amount, "date": day}
        return self._replace(await self.store.create(RecordKind.BILLS, fields))

    async def delete_bill(self, bill_id: str) -> bool:
        return self._replace(await self.store.delete(RecordKind.BILLS, bill_id))

    def recent_market(self, limit: int = 10) -> list[MarketRecord]:
        """Newest market entries first"""
        return self.market[:limit]

    def _replace(self, snapshot: LedgerSnapshot | None) -> bool:
        if snapshot is None:
            # Abandoned by the store; keep what we have
            return False
        self._snapshot = snapshot
        logger.debug(
            "snapshot_replaced",
            mode=self.mode.value,
            residents=len(snapshot.residents),
            meals=len(snapshot.meals),
            market=len(snapshot.market),
            bills=len(snapshot.bills),
        )
        for listener in list(self._listeners):
            listener(snapshot)
        return True
