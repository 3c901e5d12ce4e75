import pytest
from datetime import date
from unittest.mock import AsyncMock

from messmate.ledger.records import LedgerSnapshot, RecordKind
from messmate.ledger.store import LedgerMode
from messmate.repositories.record_repository import RecordRepository
from tests.conftest import TODAY

DAY = date(2026, 10, 12)


async def repository_with_resident(store):
    repository = RecordRepository(store)
    await repository.load()
    await repository.add_resident("Nadia", date(2026, 10, 1))
    return repository, repository.residents[0].id


class TestMealUpsert:
    """set_meal_count keeps at most one positive record per resident and day"""

    @pytest.mark.asyncio
    async def test_create_then_update(self, guest_store):
        repository, resident_id = await repository_with_resident(guest_store)

        assert await repository.set_meal_count(resident_id, DAY, 5)
        assert await repository.set_meal_count(resident_id, DAY, 3)

        assert len(repository.meals) == 1
        assert repository.meals[0].meal_count == 3
        assert repository.find_meal(resident_id, DAY).meal_count == 3

    @pytest.mark.asyncio
    async def test_zero_deletes_existing_record(self, guest_store):
        repository, resident_id = await repository_with_resident(guest_store)
        await repository.set_meal_count(resident_id, DAY, 2)

        assert await repository.set_meal_count(resident_id, DAY, 0)

        assert repository.meals == []
        assert repository.find_meal(resident_id, DAY) is None

    @pytest.mark.asyncio
    async def test_zero_on_empty_cell_is_noop(self, guest_store):
        repository, resident_id = await repository_with_resident(guest_store)
        listener = []
        repository.subscribe(listener.append)

        assert not await repository.set_meal_count(resident_id, DAY, 0)

        assert repository.meals == []
        assert listener == []

    @pytest.mark.asyncio
    async def test_same_count_skips_the_store(self):
        store = AsyncMock()
        store.mode = LedgerMode.REMOTE
        repository = RecordRepository(store)
        store.create.return_value = LedgerSnapshot.from_collections(
            {
                RecordKind.MEALS: [
                    RecordKind.MEALS.record_type(
                        id="m1", tenant_id="t1", resident_id="r1", date=DAY, meal_count=2
                    )
                ]
            }
        )
        await repository.set_meal_count("r1", DAY, 2)

        assert not await repository.set_meal_count("r1", DAY, 2)
        store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cells_are_independent(self, guest_store):
        repository, resident_id = await repository_with_resident(guest_store)
        await repository.add_resident("Omar", date(2026, 10, 2))
        other_id = next(r.id for r in repository.residents if r.name == "Omar")

        await repository.set_meal_count(resident_id, DAY, 2)
        await repository.set_meal_count(other_id, DAY, 1)
        await repository.set_meal_count(resident_id, date(2026, 10, 13), 3)

        assert len(repository.meals) == 3
        assert repository.find_meal(other_id, DAY).meal_count == 1


class TestSubscriptions:
    """Listeners see every applied snapshot exactly once"""

    @pytest.mark.asyncio
    async def test_listener_receives_new_snapshot(self, guest_store):
        repository = RecordRepository(guest_store)
        seen = []
        repository.subscribe(seen.append)

        await repository.add_bill("Water", 250.0, TODAY)

        assert len(seen) == 1
        assert seen[0] is repository.snapshot
        assert seen[0].bills[0].name == "Water"

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_notifications(self, guest_store):
        repository = RecordRepository(guest_store)
        seen = []
        unsubscribe = repository.subscribe(seen.append)

        await repository.add_bill("Water", 250.0, TODAY)
        unsubscribe()
        unsubscribe()
        await repository.add_bill("Gas", 900.0, TODAY)

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_abandoned_write_keeps_snapshot(self):
        store = AsyncMock()
        store.mode = LedgerMode.REMOTE
        store.snapshot.return_value = LedgerSnapshot()
        store.create.return_value = None
        repository = RecordRepository(store)
        await repository.load()
        before = repository.snapshot
        seen = []
        repository.subscribe(seen.append)

        assert not await repository.add_resident("Nadia")

        assert repository.snapshot is before
        assert seen == []


class TestLedgerOperations:
    """Resident, market and bill operations through the repository"""

    @pytest.mark.asyncio
    async def test_delete_resident_cascades(self, seeded_guest_store):
        repository = RecordRepository(seeded_guest_store)
        await repository.load()

        await repository.delete_resident("sample-resident-3")

        assert len(repository.residents) == 2
        assert all(m.resident_id != "sample-resident-3" for m in repository.meals)
        assert all(m.resident_id != "sample-resident-3" for m in repository.market)

    @pytest.mark.asyncio
    async def test_recent_market_is_newest_first(self, seeded_guest_store):
        repository = RecordRepository(seeded_guest_store)
        await repository.load()
        await repository.add_market_record("sample-resident-2", TODAY, 120.0, "Bread")

        recent = repository.recent_market(limit=2)

        assert [m.description for m in recent] == ["Bread", "Chicken and onions"]

    @pytest.mark.asyncio
    async def test_market_and_bill_deletion(self, guest_store):
        repository, resident_id = await repository_with_resident(guest_store)
        await repository.add_market_record(resident_id, DAY, 75.0, "Lentils")
        await repository.add_bill("Water", 250.0, DAY)

        await repository.delete_market_record(repository.market[0].id)
        await repository.delete_bill(repository.bills[0].id)

        assert repository.market == []
        assert repository.bills == []

    @pytest.mark.asyncio
    async def test_join_date_defaults_to_today(self, guest_store):
        repository = RecordRepository(guest_store)
        await repository.add_resident("Nadia")
        assert repository.residents[0].join_date == date.today()

    def test_mode_follows_store(self, guest_store):
        assert RecordRepository(guest_store).mode is LedgerMode.GUEST
