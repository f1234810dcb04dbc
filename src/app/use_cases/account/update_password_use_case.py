"""
Update Password Use Case
"""

from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType

from ._credentials import load_current_user, verify_password
from .dtos import MessageResponse


class UpdatePasswordUseCase:
    """
    Use case for changing the caller's password.

    Business Rules (checked in this order):
    - Caller must still exist at the identity provider (USER_NOT_FOUND)
    - Current password must verify (PASSWORD_INCORRECT)
    - New password must differ from the current one (PASSWORD_UNCHANGED)
    - Confirmation must equal the new password (PASSWORD_MISMATCH)
    - Records UPDATE_PASSWORD
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
        confirm_password: str,
        ip_address: Optional[str] = None,
    ) -> Result[MessageResponse]:
        user = await load_current_user(self.identity_provider, user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User is not authenticated"))

        if not await verify_password(self.identity_provider, user.email, current_password):
            return Return.err(Error("PASSWORD_INCORRECT", "Current password is incorrect."))

        if current_password == new_password:
            return Return.err(
                Error(
                    "PASSWORD_UNCHANGED",
                    "New password must be different from the current password.",
                )
            )

        if confirm_password != new_password:
            return Return.err(
                Error(
                    "PASSWORD_MISMATCH",
                    "New password and confirmation password do not match.",
                )
            )

        try:
            await self.identity_provider.update_user(user_id, password=new_password)
        except IdentityProviderError:
            return Return.err(
                Error("PASSWORD_UPDATE_FAILED", "Failed to update password. Please try again.")
            )

        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(user_id)
            await ActivityRecorder(self.uow).record(
                membership.team_id if membership else None,
                user_id,
                ActivityType.UPDATE_PASSWORD,
                ip_address,
            )

        return Return.ok(MessageResponse(message="Password updated successfully."))
