"""
Team Use Cases

Membership, invitation and roster business logic.
"""

from .dtos import (
    AuthCallbackResponse,
    InviteTeamMemberResponse,
    MemberProfile,
    RemoveTeamMemberResponse,
    ResolveInvitationResponse,
    TeamMemberWithUser,
    TeamWithMembers,
)
from .get_team_use_case import GetTeamForUserUseCase
from .invite_team_member_use_case import InviteTeamMemberUseCase
from .remove_team_member_use_case import RemoveTeamMemberUseCase
from .resolve_invitation_use_case import (
    CompleteAuthCallbackUseCase,
    ResolveInvitationUseCase,
)

__all__ = [
    "InviteTeamMemberUseCase",
    "ResolveInvitationUseCase",
    "CompleteAuthCallbackUseCase",
    "RemoveTeamMemberUseCase",
    "GetTeamForUserUseCase",
    "InviteTeamMemberResponse",
    "ResolveInvitationResponse",
    "AuthCallbackResponse",
    "RemoveTeamMemberResponse",
    "MemberProfile",
    "TeamMemberWithUser",
    "TeamWithMembers",
]
