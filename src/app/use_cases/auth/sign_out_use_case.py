"""
Sign Out Use Case
"""

import logging
from typing import Optional

from src.libs.result import Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType

logger = logging.getLogger(__name__)


class SignOutUseCase:
    """
    Records SIGN_OUT and revokes the session at the identity provider.
    Revocation failures are logged; the caller is signed out either way.
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self, user_id: str, access_token: str, ip_address: Optional[str] = None
    ) -> Result[None]:
        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(user_id)
            await ActivityRecorder(self.uow).record(
                membership.team_id if membership else None,
                user_id,
                ActivityType.SIGN_OUT,
                ip_address,
            )

        try:
            await self.identity_provider.sign_out(access_token)
        except IdentityProviderError as exc:
            logger.warning(f"Session revocation failed for user {user_id}: {exc.message}")

        return Return.ok(None)
