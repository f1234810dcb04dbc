"""
Use Cases

Organized into domain folders:
- auth/: Sign in, sign up, sign out
- account/: Password and profile changes, account deletion
- teams/: Invitations, membership resolution, roster
- activity/: Activity log reads
- billing/: Subscription sync from the payment provider
- seed/: Development data

Import from subdirectories for better organization.
"""

from .account import (
    DeleteAccountUseCase,
    SetInitialPasswordUseCase,
    UpdateAccountUseCase,
    UpdatePasswordUseCase,
)
from .activity import GetActivityLogsUseCase
from .auth import SignInUseCase, SignOutUseCase, SignUpUseCase
from .billing import UpdateTeamSubscriptionUseCase
from .seed import SeedDevDataUseCase
from .teams import (
    CompleteAuthCallbackUseCase,
    GetTeamForUserUseCase,
    InviteTeamMemberUseCase,
    RemoveTeamMemberUseCase,
    ResolveInvitationUseCase,
)

__all__ = [
    # Auth
    "SignInUseCase",
    "SignUpUseCase",
    "SignOutUseCase",
    # Account
    "UpdatePasswordUseCase",
    "SetInitialPasswordUseCase",
    "DeleteAccountUseCase",
    "UpdateAccountUseCase",
    # Teams
    "InviteTeamMemberUseCase",
    "ResolveInvitationUseCase",
    "CompleteAuthCallbackUseCase",
    "RemoveTeamMemberUseCase",
    "GetTeamForUserUseCase",
    # Activity
    "GetActivityLogsUseCase",
    # Billing
    "UpdateTeamSubscriptionUseCase",
    # Seed
    "SeedDevDataUseCase",
]
