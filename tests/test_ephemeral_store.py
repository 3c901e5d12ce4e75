import pytest
from datetime import date
from pydantic import ValidationError

from messmate.ledger.ephemeral import EphemeralLedgerStore, next_local_id
from messmate.ledger.records import RecordKind
from messmate.ledger.store import LedgerMode
from tests.conftest import TODAY


class TestSampleData:
    """Guest ledgers start from a sample household in the current month"""

    @pytest.mark.asyncio
    async def test_seeded_collections(self, seeded_guest_store):
        snapshot = await seeded_guest_store.snapshot()

        assert [r.name for r in snapshot.residents] == ["Rahim Uddin", "Karim Hasan", "Sadia Akter"]
        # Three days a month have no meals for residents 2 and 3
        assert len(snapshot.meals) == 19 + 15 + 15
        assert len(snapshot.market) == 4
        assert len(snapshot.bills) == 3

    @pytest.mark.asyncio
    async def test_seeded_records_stay_within_today(self, seeded_guest_store):
        snapshot = await seeded_guest_store.snapshot()
        for record in [*snapshot.meals, *snapshot.market, *snapshot.bills]:
            assert date(2026, 10, 1) <= record.date <= TODAY

    @pytest.mark.asyncio
    async def test_no_zero_meal_records(self, seeded_guest_store):
        meals = await seeded_guest_store.list(RecordKind.MEALS)
        assert all(meal.meal_count > 0 for meal in meals)

    @pytest.mark.asyncio
    async def test_early_in_month_has_fewer_records(self):
        store = EphemeralLedgerStore("guest", seed=True, today=date(2026, 10, 3))
        snapshot = await store.snapshot()
        assert len(snapshot.market) == 1
        assert [b.name for b in snapshot.bills] == ["House rent"]

    @pytest.mark.asyncio
    async def test_unseeded_store_is_empty(self, guest_store):
        snapshot = await guest_store.snapshot()
        assert snapshot.residents == []
        assert snapshot.meals == []
        assert snapshot.market == []
        assert snapshot.bills == []

    def test_mode_is_guest(self, guest_store):
        assert guest_store.mode is LedgerMode.GUEST


class TestEphemeralMutations:
    """Create, update and delete against the in-process ledger"""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_tenant(self, guest_store):
        snapshot = await guest_store.create(
            RecordKind.RESIDENTS, {"name": "Nadia", "join_date": date(2026, 10, 1)}
        )

        resident = snapshot.residents[0]
        assert resident.id.startswith("local-")
        assert resident.tenant_id == "guest"
        assert resident.name == "Nadia"

    @pytest.mark.asyncio
    async def test_new_market_entry_leads(self, seeded_guest_store):
        snapshot = await seeded_guest_store.create(
            RecordKind.MARKET,
            {
                "resident_id": "sample-resident-2",
                "date": TODAY,
                "amount": 320.0,
                "description": "Milk",
            },
        )
        assert snapshot.market[0].description == "Milk"

    @pytest.mark.asyncio
    async def test_update_replaces_record(self, seeded_guest_store):
        before = await seeded_guest_store.list(RecordKind.MEALS)
        target = before[0]

        snapshot = await seeded_guest_store.update(RecordKind.MEALS, target.id, {"meal_count": 9})

        updated = next(m for m in snapshot.meals if m.id == target.id)
        assert updated.meal_count == 9
        assert updated.date == target.date
        assert target.meal_count != 9

    @pytest.mark.asyncio
    async def test_delete_resident_removes_dependents(self, seeded_guest_store):
        snapshot = await seeded_guest_store.delete(RecordKind.RESIDENTS, "sample-resident-1")

        assert snapshot.resident("sample-resident-1") is None
        assert all(m.resident_id != "sample-resident-1" for m in snapshot.meals)
        assert all(m.resident_id != "sample-resident-1" for m in snapshot.market)
        assert len(snapshot.meals) == 30
        assert len(snapshot.market) == 2
        # Bills are not owned by residents
        assert len(snapshot.bills) == 3

    @pytest.mark.asyncio
    async def test_delete_unknown_record_is_harmless(self, seeded_guest_store):
        before = await seeded_guest_store.snapshot()
        after = await seeded_guest_store.delete(RecordKind.BILLS, "no-such-bill")
        assert after == before

    @pytest.mark.asyncio
    async def test_invalid_record_rejected(self, guest_store):
        with pytest.raises(ValidationError):
            await guest_store.create(
                RecordKind.MARKET,
                {"resident_id": "r1", "date": TODAY, "amount": 0, "description": "Nothing"},
            )


def test_local_ids_are_unique():
    ids = {next_local_id() for _ in range(1000)}
    assert len(ids) == 1000


@pytest.mark.asyncio
async def test_snapshot_is_isolated_from_later_writes():
    """A snapshot handed out earlier is never mutated by later writes"""
    store = EphemeralLedgerStore("guest", seed=False)
    first = await store.create(RecordKind.RESIDENTS, {"name": "Tania", "join_date": TODAY})
    await store.create(RecordKind.RESIDENTS, {"name": "Omar", "join_date": TODAY})
    assert [r.name for r in first.residents] == ["Tania"]
