"""Group context for request authorization."""

from dataclasses import dataclass
from messmate.models.user import User
from messmate.models.tenant import Tenant
from messmate.models.role import TenantRole


@dataclass
class TenantContext:
    """
    The authenticated actor together with its group and role.

    Attributes:
        user: The authenticated User object
        tenant: The Tenant the user belongs to
        role: The user's role within this tenant
    """

    user: User
    tenant: Tenant
    role: TenantRole

    def is_owner(self) -> bool:
        """Check if user is the group owner."""
        return self.role == TenantRole.OWNER

    def __repr__(self) -> str:
        return f"<TenantContext(user_id={self.user.id}, tenant_id={self.tenant.id}, role={self.role.value})>"
