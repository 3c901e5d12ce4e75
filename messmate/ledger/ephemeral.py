"""
Ephemeral (guest) ledger backend.

State lives in one in-process mapping from kind to records. Every mutation
builds the next mapping and swaps it in with a single assignment, so callers
never observe a half-applied change such as a resident whose meals survived
its deletion.
"""

import itertools
import time
from datetime import date
from typing import Any

import structlog

from messmate.ledger.records import LedgerRecord, LedgerSnapshot, RecordKind
from messmate.ledger.sample_data import sample_collections
from messmate.ledger.store import LedgerMode, LedgerStore

logger = structlog.get_logger(__name__)

_sequence = itertools.count(1)


def next_local_id() -> str:
    """Time-based id, unique for the lifetime of the process."""
    return f"local-{time.time_ns()}-{next(_sequence)}"


class EphemeralLedgerStore(LedgerStore):
    """Process-local ledger for guest sessions; never touches the network"""

    mode = LedgerMode.GUEST

    def __init__(self, tenant_id: str, seed: bool = True, today: date | None = None):
        self.tenant_id = tenant_id
        self._state: dict[RecordKind, tuple[LedgerRecord, ...]] = {kind: () for kind in RecordKind}
        if seed:
            for kind, rows in sample_collections(tenant_id, today).items():
                self._state[kind] = tuple(kind.record_type.model_validate(row) for row in rows)

    async def create(self, kind: RecordKind, fields: dict[str, Any]) -> LedgerSnapshot:
        record = kind.record_type.model_validate(
            {**fields, "id": next_local_id(), "tenant_id": self.tenant_id}
        )
        rows = self._state[kind]
        # Newest market entries lead, matching the order they are shown in
        rows = (record, *rows) if kind is RecordKind.MARKET else (*rows, record)
        self._replace({kind: rows})
        logger.info("guest_record_created", collection=kind.value, record_id=record.id)
        return self._snapshot()

    async def update(
        self, kind: RecordKind, record_id: str, fields: dict[str, Any]
    ) -> LedgerSnapshot:
        rows = tuple(
            row.model_copy(update=fields) if row.id == record_id else row
            for row in self._state[kind]
        )
        self._replace({kind: rows})
        return self._snapshot()

    async def delete(self, kind: RecordKind, record_id: str) -> LedgerSnapshot:
        changes = {kind: tuple(row for row in self._state[kind] if row.id != record_id)}
        if kind is RecordKind.RESIDENTS:
            for dependent in (RecordKind.MEALS, RecordKind.MARKET):
                changes[dependent] = tuple(
                    row for row in self._state[dependent] if row.resident_id != record_id
                )
        self._replace(changes)
        logger.info("guest_record_deleted", collection=kind.value, record_id=record_id)
        return self._snapshot()

    async def snapshot(self) -> LedgerSnapshot:
        return self._snapshot()

    def _replace(self, changes: dict[RecordKind, tuple[LedgerRecord, ...]]) -> None:
        self._state = {**self._state, **changes}

    def _snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot.from_collections(self._state)

    async def list(self, kind: RecordKind) -> list[LedgerRecord]:
        return self._snapshot().collection(kind)
