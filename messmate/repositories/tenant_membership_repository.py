"""Repository for TenantMembership model operations."""

from sqlalchemy.orm import Session
from messmate.models.tenant_membership import TenantMembership


class TenantMembershipRepository:
    """Repository for TenantMembership model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_membership(self, user_id: int) -> TenantMembership | None:
        """
        Get the single membership of a user.

        Args:
            user_id: User ID

        Returns:
            TenantMembership object or None if the user has no group
        """
        return (
            self.db.query(TenantMembership)
            .filter(TenantMembership.user_id == user_id)
            .first()
        )

    def get_tenant_members(self, tenant_id: str) -> list[TenantMembership]:
        """
        Get all memberships for a tenant.

        Args:
            tenant_id: Tenant ID

        Returns:
            List of TenantMembership objects for the tenant
        """
        return (
            self.db.query(TenantMembership)
            .filter(TenantMembership.tenant_id == tenant_id)
            .order_by(TenantMembership.id)
            .all()
        )

    def create(self, membership: TenantMembership) -> TenantMembership:
        """
        Create a new tenant membership.

        Args:
            membership: TenantMembership object to create

        Returns:
            Created TenantMembership object with ID populated

        Raises:
            IntegrityError: If the user already has a membership
        """
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        return membership
