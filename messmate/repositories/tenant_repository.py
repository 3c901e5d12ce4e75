"""Repository for Tenant model operations."""

from sqlalchemy.orm import Session
from messmate.models.tenant import Tenant


class TenantRepository:
    """Repository for Tenant model operations"""

    def __init__(self, db: Session):
        self.db = db

    def create_no_commit(self, tenant: Tenant) -> Tenant:
        """
        Stage a new tenant without committing.

        Caller is responsible for commit, so the tenant and its owner
        membership are written atomically.
        """
        self.db.add(tenant)
        self.db.flush()  # Assign ID without committing
        return tenant
