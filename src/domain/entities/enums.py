"""
Team Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TeamRole(str, Enum):
    """User role within a team"""

    owner = "owner"
    member = "member"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"


class ActivityType(str, Enum):
    """Closed set of audit action labels"""

    SIGN_UP = "SIGN_UP"
    SIGN_IN = "SIGN_IN"
    SIGN_OUT = "SIGN_OUT"
    UPDATE_PASSWORD = "UPDATE_PASSWORD"
    DELETE_ACCOUNT = "DELETE_ACCOUNT"
    UPDATE_ACCOUNT = "UPDATE_ACCOUNT"
    CREATE_TEAM = "CREATE_TEAM"
    REMOVE_TEAM_MEMBER = "REMOVE_TEAM_MEMBER"
    INVITE_TEAM_MEMBER = "INVITE_TEAM_MEMBER"
    ACCEPT_INVITATION = "ACCEPT_INVITATION"


class SubscriptionStatus(str, Enum):
    """Subscription states reported by the payment provider that we act on"""

    active = "active"
    trialing = "trialing"
    canceled = "canceled"
    unpaid = "unpaid"
