"""
Delete Account Use Case

Removes the caller's membership and hard-deletes their identity.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType

from ._credentials import load_current_user, verify_password

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """
    Use case for account deletion.

    Business Rules:
    - Password must verify against the current email (PASSWORD_INCORRECT)
    - DELETE_ACCOUNT is recorded before anything is removed
    - Only the caller's own membership row is deleted; other members of the
      team (including when the caller owns it) are untouched
    - Session revocation afterwards is best-effort
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self,
        user_id: str,
        password: str,
        access_token: str,
        ip_address: Optional[str] = None,
    ) -> Result[None]:
        user = await load_current_user(self.identity_provider, user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User is not authenticated"))

        if not await verify_password(self.identity_provider, user.email, password):
            return Return.err(
                Error("PASSWORD_INCORRECT", "Incorrect password. Account deletion failed.")
            )

        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(user_id)
            team_id = membership.team_id if membership else None

            await ActivityRecorder(self.uow).record(
                team_id, user_id, ActivityType.DELETE_ACCOUNT, ip_address
            )

            if team_id is not None:
                await self.uow.team_members.delete_by_user_and_team(user_id, team_id)
                await self.uow.commit()

        try:
            await self.identity_provider.delete_user(user_id)
        except IdentityProviderError as exc:
            logger.error(f"Identity deletion failed for user {user_id}: {exc.message}")
            return Return.err(
                Error("ACCOUNT_DELETION_FAILED", "Failed to delete account. Please try again.")
            )

        try:
            await self.identity_provider.sign_out(access_token)
        except IdentityProviderError as exc:
            logger.info(f"Sign out after account deletion failed for user {user_id}: {exc.message}")

        return Return.ok(None)
