"""
Team Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ActivityType,
    InvitationStatus,
    SubscriptionStatus,
    TeamRole,
)

# Export all entities
from .team import Team
from .team_member import TeamMember
from .invitation import Invitation
from .activity_log import ActivityLog
from .user import AuthSession, User

__all__ = [
    # Enums
    "ActivityType",
    "InvitationStatus",
    "SubscriptionStatus",
    "TeamRole",
    # Entities
    "Team",
    "TeamMember",
    "Invitation",
    "ActivityLog",
    "User",
    "AuthSession",
]
