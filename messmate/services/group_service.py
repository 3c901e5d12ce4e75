from sqlalchemy.orm import Session
import structlog

from messmate.models.tenant import Tenant
from messmate.models.tenant_membership import TenantMembership
from messmate.models.user import User
from messmate.models.tenant_context import TenantContext
from messmate.models.role import TenantRole
from messmate.repositories.tenant_repository import TenantRepository
from messmate.repositories.tenant_membership_repository import TenantMembershipRepository
from messmate.repositories.user_repository import UserRepository
from messmate.schemas.group_schemas import GroupCreate, GroupMemberAdd
from messmate.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)

logger = structlog.get_logger(__name__)


class GroupService:
    """Service layer for group (tenant) management business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.membership_repo = TenantMembershipRepository(db)
        self.user_repo = UserRepository(db)

    def create_group(self, data: GroupCreate, user: User) -> Tenant:
        """
        Create a group with the user as its owner.

        Args:
            data: Group name
            user: Authenticated user

        Returns:
            Created tenant

        Raises:
            ValidationException: If the user already belongs to a group
        """
        if self.membership_repo.get_user_membership(user.id):
            raise ValidationException("You already belong to a group")

        tenant = self.tenant_repo.create_no_commit(Tenant(name=data.name))
        self.db.add(TenantMembership(tenant_id=tenant.id, user_id=user.id, role=TenantRole.OWNER))
        self.db.commit()
        self.db.refresh(tenant)

        logger.info("group_created", tenant_id=tenant.id, owner=user.auth_user_id)
        return tenant

    def get_context(self, user: User) -> TenantContext:
        """
        Build the group context for a user.

        Raises:
            NotFoundException: If the user has no group
        """
        membership = self.membership_repo.get_user_membership(user.id)
        if not membership:
            raise NotFoundException("You do not belong to a group")
        return TenantContext(user=user, tenant=membership.tenant, role=membership.role)

    def get_members(self, context: TenantContext) -> list[dict]:
        """
        Get all members of the current group with user details.

        Args:
            context: Group context

        Returns:
            List of members with user info
        """
        memberships = self.membership_repo.get_tenant_members(context.tenant.id)

        result = []
        for membership in memberships:
            member = self.user_repo.get_by_id(membership.user_id)
            result.append(
                {
                    "id": membership.id,
                    "user_id": membership.user_id,
                    "auth_user_id": member.auth_user_id if member else "unknown",
                    "role": membership.role,
                    "created_at": membership.created_at,
                }
            )
        return result

    def add_member(self, data: GroupMemberAdd, context: TenantContext) -> TenantMembership:
        """
        Add an actor to the current group (OWNER only).

        Args:
            data: Actor to add
            context: Group context

        Returns:
            Created membership

        Raises:
            ForbiddenException: If the caller is not the owner
            ValidationException: If the actor already belongs to a group
        """
        if not context.is_owner():
            raise ForbiddenException("Only the group owner can add members")

        member = self.user_repo.get_or_create_by_auth_id(data.auth_user_id)

        if self.membership_repo.get_user_membership(member.id):
            raise ValidationException(f"User {data.auth_user_id} already belongs to a group")

        membership = TenantMembership(
            tenant_id=context.tenant.id,
            user_id=member.id,
            role=TenantRole.MEMBER,
        )
        membership = self.membership_repo.create(membership)
        logger.info("group_member_added", tenant_id=context.tenant.id, member=data.auth_user_id)
        return membership
