"""
Team Use Case DTOs (Data Transfer Objects)

All Response classes for the team domain.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class InviteTeamMemberResponse(BaseModel):
    """Response for invite team member use case"""

    invitation_id: int
    status: str
    dispatch_state: str


class ResolveInvitationResponse(BaseModel):
    """Response for resolve invitation use case"""

    already_member: bool
    team_id: int
    role: str


class AuthCallbackResponse(BaseModel):
    """Where the client goes after completing identity verification"""

    redirect: str
    linked_team_id: Optional[int] = None


class RemoveTeamMemberResponse(BaseModel):
    """Response for remove team member use case"""

    removed: int


class MemberProfile(BaseModel):
    """Identity provider profile attached to a roster entry"""

    id: str
    name: Optional[str]
    email: str


class TeamMemberWithUser(BaseModel):
    id: int
    user_id: str
    team_id: int
    role: str
    joined_at: datetime
    user: MemberProfile


class TeamWithMembers(BaseModel):
    """Team aggregate returned to the caller"""

    id: int
    name: str
    stripe_customer_id: Optional[str]
    stripe_subscription_id: Optional[str]
    stripe_product_id: Optional[str]
    plan_name: Optional[str]
    subscription_status: Optional[str]
    created_at: datetime
    updated_at: datetime
    team_members: List[TeamMemberWithUser]
