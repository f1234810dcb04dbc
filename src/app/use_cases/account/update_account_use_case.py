"""
Update Account Use Case
"""

from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType

from ._credentials import load_current_user
from .dtos import UpdateAccountResponse


class UpdateAccountUseCase:
    """
    Use case for updating the caller's display name and email.

    Business Rules:
    - Name is stored in identity metadata
    - Email is compared with the provider's current record and only a
      changed address is submitted, as the user, so the provider confirms it
    - Records UPDATE_ACCOUNT
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self,
        user_id: str,
        name: str,
        email: str,
        access_token: str,
        ip_address: Optional[str] = None,
    ) -> Result[UpdateAccountResponse]:
        user = await load_current_user(self.identity_provider, user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User is not authenticated"))

        try:
            await self.identity_provider.update_user(user_id, metadata={"name": name})
            if email != user.email:
                await self.identity_provider.request_email_change(access_token, email)
        except IdentityProviderError:
            return Return.err(
                Error("ACCOUNT_UPDATE_FAILED", "Failed to update account. Please try again.")
            )

        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(user_id)
            await ActivityRecorder(self.uow).record(
                membership.team_id if membership else None,
                user_id,
                ActivityType.UPDATE_ACCOUNT,
                ip_address,
            )

        return Return.ok(UpdateAccountResponse(name=name, message="Account updated successfully."))
