"""Tenant (group) model for multi-tenant isolation."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from messmate.models.base import Base, TimestampMixin, new_uuid

if TYPE_CHECKING:
    from messmate.models.tenant_membership import TenantMembership


class Tenant(Base, TimestampMixin):
    """
    Multi-tenant isolation boundary: one shared household ("mess").

    Residents, meals, market entries and bills all belong to a tenant.
    Actors reach a tenant's ledger through their membership.

    The guest sentinel tenant id is never stored here.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    memberships: Mapped[list["TenantMembership"]] = relationship(
        "TenantMembership",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name='{self.name}')>"
