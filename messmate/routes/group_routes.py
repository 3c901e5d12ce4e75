from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from messmate.database import get_db
from messmate.dependencies import get_tenant_context, get_current_user
from messmate.models.tenant_context import TenantContext
from messmate.models.user import User
from messmate.services.group_service import GroupService
from messmate.schemas.group_schemas import (
    GroupCreate,
    GroupResponse,
    GroupMemberAdd,
    GroupMemberResponse,
)

router = APIRouter()


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    data: GroupCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create a group and become its owner.

    An actor belongs to at most one group; the group's ledger is the one
    every ledger endpoint uses for this actor.
    """
    service = GroupService(db)
    return service.create_group(data, user)


@router.get("/me", response_model=GroupResponse)
async def get_current_group(context: TenantContext = Depends(get_tenant_context)):
    """Get the caller's group"""
    return context.tenant


@router.get("/me/members", response_model=list[GroupMemberResponse])
async def list_members(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """List all members of the caller's group"""
    service = GroupService(db)
    return service.get_members(context)


@router.post("/me/members", response_model=GroupMemberResponse, status_code=status.HTTP_201_CREATED)
async def add_member(
    data: GroupMemberAdd,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Add an actor to the caller's group.

    - **Requires OWNER permissions**
    - The actor must not already belong to a group
    """
    service = GroupService(db)
    membership = service.add_member(data, context)
    return {
        "id": membership.id,
        "user_id": membership.user_id,
        "auth_user_id": data.auth_user_id,
        "role": membership.role,
        "created_at": membership.created_at,
    }
