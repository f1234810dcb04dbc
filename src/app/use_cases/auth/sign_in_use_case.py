"""
Sign In Use Case

Verifies credentials with the identity provider and records the sign-in.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType

from .dtos import SignInResponse

logger = logging.getLogger(__name__)


class SignInUseCase:
    """
    Use case for password sign-in.

    Business Rules:
    - Wrong credentials and provider failures both surface as
      INVALID_CREDENTIALS so the response never reveals which one happened
    - SIGN_IN is recorded only for users that belong to a team
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self, email: str, password: str, ip_address: Optional[str] = None
    ) -> Result[SignInResponse]:
        try:
            session = await self.identity_provider.sign_in_with_password(email, password)
        except IdentityProviderError as exc:
            logger.warning(f"Sign in failed at identity provider: {exc.message}")
            session = None

        if session is None:
            return Return.err(
                Error("INVALID_CREDENTIALS", "Invalid email or password. Please try again.")
            )

        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(session.user.id)
            team_id = membership.team_id if membership else None

            await ActivityRecorder(self.uow).record(
                team_id, session.user.id, ActivityType.SIGN_IN, ip_address
            )

        return Return.ok(
            SignInResponse(
                user_id=session.user.id,
                team_id=team_id,
                access_token=session.access_token,
                refresh_token=session.refresh_token,
            )
        )
