from pydantic import BaseModel, Field
from datetime import datetime
from messmate.models.role import TenantRole


class GroupCreate(BaseModel):
    """Create a group; the caller becomes its owner"""

    name: str = Field(..., min_length=1, max_length=255)


class GroupResponse(BaseModel):
    """Group details response"""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GroupMemberAdd(BaseModel):
    """Add an actor to the owner's group"""

    auth_user_id: str = Field(..., description="Actor id (JWT sub) to add", min_length=1)


class GroupMemberResponse(BaseModel):
    """Group member details with user info"""

    id: int
    user_id: int
    auth_user_id: str
    role: TenantRole
    created_at: datetime

    model_config = {"from_attributes": True}
