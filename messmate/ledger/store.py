"""
Ledger Store contract.

A LedgerStore is the authoritative copy of one tenant's records. Two
implementations exist and are selected once per session:

- EphemeralLedgerStore: process-local guest ledger, no network I/O
- RemoteLedgerStore: tenant-scoped calls through a PersistenceClient

Callers (the Record Repository, the reconciliation engine, the HTTP routes)
only ever see this interface and the record shapes in ``records``.
"""

from abc import ABC, abstractmethod
from enum import Enum as PyEnum
from typing import Any

from messmate.ledger.records import LedgerRecord, LedgerSnapshot, RecordKind


class LedgerMode(str, PyEnum):
    """Which backend a session runs against"""

    GUEST = "guest"
    REMOTE = "remote"


class LedgerStore(ABC):
    """
    Abstract persistence for the four record collections.

    Mutators return the refreshed snapshot when the mutation was applied and
    None when it was abandoned. Abandoned operations leave the store (and any
    snapshot the caller already holds) unchanged.
    """

    mode: LedgerMode

    @abstractmethod
    async def list(self, kind: RecordKind) -> list[LedgerRecord]:
        """
        List every record of a kind for the active tenant.

        Returns:
            Records in snapshot order, or an empty list if the read was abandoned
        """
        pass

    @abstractmethod
    async def create(self, kind: RecordKind, fields: dict[str, Any]) -> LedgerSnapshot | None:
        """
        Create a record; the store assigns the id and the tenant.

        Args:
            kind: Collection to insert into
            fields: Record fields without id and tenant_id

        Returns:
            Snapshot after the write, or None if abandoned
        """
        pass

    @abstractmethod
    async def update(
        self, kind: RecordKind, record_id: str, fields: dict[str, Any]
    ) -> LedgerSnapshot | None:
        """
        Replace fields of an existing record.

        Returns:
            Snapshot after the write, or None if abandoned
        """
        pass

    @abstractmethod
    async def delete(self, kind: RecordKind, record_id: str) -> LedgerSnapshot | None:
        """
        Delete a record. Deleting a resident also deletes its meal and
        market records.

        Returns:
            Snapshot after the write, or None if abandoned
        """
        pass

    @abstractmethod
    async def snapshot(self) -> LedgerSnapshot | None:
        """
        Read all four collections for the active tenant.

        Returns:
            Fresh snapshot, or None if the read was abandoned
        """
        pass
