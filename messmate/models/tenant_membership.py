"""Tenant membership model linking an actor to its group."""

from sqlalchemy import String, Integer, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from messmate.models.base import Base, TimestampMixin
from messmate.models.role import TenantRole

if TYPE_CHECKING:
    from messmate.models.user import User
    from messmate.models.tenant import Tenant


class TenantMembership(Base, TimestampMixin):
    """
    One-to-one link from an actor to the group whose ledger it uses.

    Constraints:
    - Unique(user_id) - an actor belongs to at most one group, so the
      actor -> tenant lookup is unambiguous
    - A group may have many members
    """

    __tablename__ = "tenant_memberships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    role: Mapped[TenantRole] = mapped_column(
        Enum(TenantRole, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=TenantRole.MEMBER,
    )

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="memberships")
    user: Mapped["User"] = relationship("User", back_populates="membership")

    def __repr__(self) -> str:
        return f"<TenantMembership(tenant_id={self.tenant_id}, user_id={self.user_id}, role={self.role.value})>"
