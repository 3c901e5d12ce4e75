"""
Boundary contracts consumed by the remote ledger.

The core never talks to authentication or the database directly: it asks an
ActorProvider who is acting, a TenantResolver which group that actor belongs
to, and a PersistenceClient to run tenant-filtered calls.
"""

from typing import Any, Protocol, runtime_checkable

from sqlalchemy.orm import Session

from messmate.repositories.tenant_membership_repository import TenantMembershipRepository
from messmate.repositories.user_repository import UserRepository


@runtime_checkable
class ActorProvider(Protocol):
    """Yields the current authenticated actor identity, or None"""

    def current_actor(self) -> str | None: ...


@runtime_checkable
class TenantResolver(Protocol):
    """Maps an actor identity to its tenant id, or None"""

    async def resolve(self, actor_id: str) -> str | None: ...


@runtime_checkable
class PersistenceClient(Protocol):
    """
    Generic collection access against the scoped backend.

    Implementations raise PersistenceFailure when the backend call fails.
    """

    async def select(self, collection: str, filters: dict[str, Any]) -> list[dict[str, Any]]: ...

    async def insert(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def update(
        self,
        collection: str,
        record_id: str,
        fields: dict[str, Any],
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None: ...

    async def delete(
        self,
        collection: str,
        record_id: str,
        filters: dict[str, Any] | None = None,
        cascade: dict[str, dict[str, Any]] | None = None,
    ) -> bool:
        """Delete a row and the dependent rows matched by ``cascade`` in one transaction"""
        ...


class StaticActorProvider:
    """Actor fixed for the lifetime of one request or session"""

    def __init__(self, actor_id: str | None):
        self.actor_id = actor_id

    def current_actor(self) -> str | None:
        return self.actor_id


class MembershipTenantResolver:
    """Resolves an actor's group through its (single) tenant membership"""

    def __init__(self, db: Session):
        self.user_repo = UserRepository(db)
        self.membership_repo = TenantMembershipRepository(db)

    async def resolve(self, actor_id: str) -> str | None:
        user = self.user_repo.get_by_auth_id(actor_id)
        if not user:
            return None
        membership = self.membership_repo.get_user_membership(user.id)
        return membership.tenant_id if membership else None
