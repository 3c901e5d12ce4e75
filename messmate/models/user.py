from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from messmate.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from messmate.models.tenant_membership import TenantMembership


class User(Base, TimestampMixin):
    """
    Tracks authenticated actors.

    Only stores auth_user_id (sub from JWT) - no auth credentials.
    Auto-created on first API request with valid JWT.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    auth_user_id: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    # auth_user_id is the 'sub' claim from JWT

    # Relationships
    membership: Mapped["TenantMembership"] = relationship(
        "TenantMembership",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
