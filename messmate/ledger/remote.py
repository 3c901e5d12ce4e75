"""
Remote ledger backend.

Every operation first resolves the acting user's group. If no group is
found the operation is abandoned: nothing is written, the failure is logged
and the caller keeps its previous snapshot. Backend failures are handled the
same way; there is no retry.

After each applied mutation the store re-lists all four collections for the
tenant and returns that canonical snapshot instead of patching a local copy,
since other members of the group may be writing concurrently.
"""

from typing import Any, Awaitable, Callable, TypeVar

import structlog

from messmate.core.exceptions import PersistenceFailure, TenantResolutionFailure
from messmate.ledger.contracts import ActorProvider, PersistenceClient, TenantResolver
from messmate.ledger.records import LedgerRecord, LedgerSnapshot, RecordKind
from messmate.ledger.store import LedgerMode, LedgerStore

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RemoteLedgerStore(LedgerStore):
    """Tenant-scoped ledger backed by a PersistenceClient"""

    mode = LedgerMode.REMOTE

    def __init__(
        self,
        actor_provider: ActorProvider,
        tenant_resolver: TenantResolver,
        client: PersistenceClient,
    ):
        self.actor_provider = actor_provider
        self.tenant_resolver = tenant_resolver
        self.client = client

    async def create(self, kind: RecordKind, fields: dict[str, Any]) -> LedgerSnapshot | None:
        async def insert(tenant_id: str) -> LedgerSnapshot:
            row = await self.client.insert(kind.value, {**fields, "tenant_id": tenant_id})
            logger.info("record_created", collection=kind.value, record_id=row.get("id"), tenant_id=tenant_id)
            return await self._refetch(tenant_id)

        return await self._run("create", kind, insert)

    async def update(
        self, kind: RecordKind, record_id: str, fields: dict[str, Any]
    ) -> LedgerSnapshot | None:
        async def update(tenant_id: str) -> LedgerSnapshot:
            row = await self.client.update(
                kind.value, record_id, fields, filters={"tenant_id": tenant_id}
            )
            if row is None:
                raise PersistenceFailure(f"{kind.value} record {record_id} not found for tenant")
            logger.info("record_updated", collection=kind.value, record_id=record_id, tenant_id=tenant_id)
            return await self._refetch(tenant_id)

        return await self._run("update", kind, update)

    async def delete(self, kind: RecordKind, record_id: str) -> LedgerSnapshot | None:
        async def delete(tenant_id: str) -> LedgerSnapshot:
            scope = {"tenant_id": tenant_id}
            cascade = None
            if kind is RecordKind.RESIDENTS:
                # Meals and market entries go with their resident or not at all
                cascade = {
                    dependent.value: {**scope, "resident_id": record_id}
                    for dependent in (RecordKind.MEALS, RecordKind.MARKET)
                }
            deleted = await self.client.delete(kind.value, record_id, filters=scope, cascade=cascade)
            if not deleted:
                raise PersistenceFailure(f"{kind.value} record {record_id} not found for tenant")
            logger.info("record_deleted", collection=kind.value, record_id=record_id, tenant_id=tenant_id)
            return await self._refetch(tenant_id)

        return await self._run("delete", kind, delete)

    async def snapshot(self) -> LedgerSnapshot | None:
        return await self._run("snapshot", None, self._refetch)

    async def _resolve_tenant(self) -> str:
        actor_id = self.actor_provider.current_actor()
        if actor_id is None:
            raise TenantResolutionFailure("No authenticated actor")
        tenant_id = await self.tenant_resolver.resolve(actor_id)
        if tenant_id is None:
            raise TenantResolutionFailure(f"No group found for actor {actor_id}")
        return tenant_id

    async def _select(self, kind: RecordKind, tenant_id: str) -> list[LedgerRecord]:
        rows = await self.client.select(kind.value, {"tenant_id": tenant_id})
        return [kind.record_type.model_validate(row) for row in rows]

    async def _refetch(self, tenant_id: str) -> LedgerSnapshot:
        """Read-after-write: reload all four collections for the tenant."""
        collections = {kind: await self._select(kind, tenant_id) for kind in RecordKind}
        return LedgerSnapshot.from_collections(collections)

    async def _run(
        self,
        operation: str,
        kind: RecordKind | None,
        action: Callable[[str], Awaitable[T]],
    ) -> T | None:
        collection = kind.value if kind else "all"
        try:
            tenant_id = await self._resolve_tenant()
            return await action(tenant_id)
        except TenantResolutionFailure as e:
            logger.error(
                "ledger_operation_abandoned",
                operation=operation,
                collection=collection,
                reason="tenant_unresolved",
                detail=str(e),
            )
        except PersistenceFailure as e:
            logger.error(
                "ledger_operation_abandoned",
                operation=operation,
                collection=collection,
                reason="persistence_failure",
                detail=str(e),
            )
        return None

    # Defined last: the method name shadows the builtin for later annotations
    async def list(self, kind: RecordKind) -> list[LedgerRecord]:
        records = await self._run("list", kind, lambda tenant_id: self._select(kind, tenant_id))
        return records if records is not None else []
