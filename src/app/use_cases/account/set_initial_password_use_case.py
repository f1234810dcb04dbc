"""
Set Initial Password Use Case

Used by invitees who arrived through an invitation link and have no
password yet. Not audited.
"""

from src.libs.result import Error, Result, Return
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider

from .dtos import MessageResponse


class SetInitialPasswordUseCase:
    def __init__(self, identity_provider: IIdentityProvider):
        self.identity_provider = identity_provider

    async def execute(
        self, user_id: str, password: str, confirm_password: str
    ) -> Result[MessageResponse]:
        if password != confirm_password:
            return Return.err(Error("PASSWORD_MISMATCH", "Passwords do not match."))

        try:
            await self.identity_provider.update_user(user_id, password=password)
        except IdentityProviderError:
            return Return.err(
                Error("PASSWORD_UPDATE_FAILED", "Failed to set password. Please try again.")
            )

        return Return.ok(MessageResponse(message="Password set successfully."))
