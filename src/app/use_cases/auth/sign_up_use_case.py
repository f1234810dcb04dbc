"""
Sign Up Use Case

Registers a user with the identity provider and places them in a team:
either the team of a pending invitation or a freshly created one.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    ActivityType,
    InvitationStatus,
    Team,
    TeamMember,
    TeamRole,
)

from .dtos import SignUpResponse

logger = logging.getLogger(__name__)


class SignUpUseCase:
    """
    Use case for registration.

    Business Rules:
    - The identity is created first; when the rest of sign-up cannot proceed
      (invalid invitation, team creation failure) it is deleted again
    - With an invitation id: the invitation must exist, match the email and
      still be pending (INVALID_INVITATION); it is marked accepted and the
      stored role is used
    - Without an invitation: a team named "<email>'s Team" is created and the
      user becomes its owner
    - Membership insert failure is logged, not fatal
    - Records ACCEPT_INVITATION or CREATE_TEAM, then SIGN_UP
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self,
        email: str,
        password: str,
        invite_id: Optional[int] = None,
        ip_address: Optional[str] = None,
    ) -> Result[SignUpResponse]:
        try:
            user = await self.identity_provider.create_user(
                email, password, metadata={"name": None}
            )
        except IdentityProviderError as exc:
            return Return.err(
                Error(
                    "SIGN_UP_FAILED",
                    exc.message or "Failed to create user. Please try again.",
                )
            )

        async with self.uow:
            recorder = ActivityRecorder(self.uow)

            if invite_id is not None:
                invitation = await self.uow.invitations.get_pending_by_id_and_email(
                    invite_id, email
                )
                if invitation is None:
                    await self._rollback_identity(user.id)
                    return Return.err(
                        Error("INVALID_INVITATION", "Invalid or expired invitation.")
                    )

                team_id = invitation.team_id
                role = invitation.role

                invitation.status = InvitationStatus.accepted
                await self.uow.invitations.update(invitation)
                await self.uow.commit()

                await recorder.record(team_id, user.id, ActivityType.ACCEPT_INVITATION, ip_address)
            else:
                try:
                    team = await self.uow.teams.create(Team(name=f"{email}'s Team"))
                    await self.uow.commit()
                except SQLAlchemyError as exc:
                    await self.uow.rollback()
                    logger.error(f"Team creation failed during sign up: {exc}")
                    await self._rollback_identity(user.id)
                    return Return.err(
                        Error("TEAM_CREATION_FAILED", "Failed to create team. Please try again.")
                    )

                team_id = team.id
                role = TeamRole.owner

                await recorder.record(team_id, user.id, ActivityType.CREATE_TEAM, ip_address)

            try:
                member = await self.uow.team_members.create_if_absent(
                    TeamMember(user_id=user.id, team_id=team_id, role=role)
                )
                if member is not None:
                    await self.uow.commit()
            except SQLAlchemyError as exc:
                await self.uow.rollback()
                logger.error(f"Failed to create team member for user {user.id}: {exc}")

            await recorder.record(team_id, user.id, ActivityType.SIGN_UP, ip_address)

        response = SignUpResponse(user_id=user.id, team_id=team_id, role=role.value)

        try:
            session = await self.identity_provider.sign_in_with_password(email, password)
        except IdentityProviderError as exc:
            logger.warning(f"Post sign-up session could not be issued: {exc.message}")
            session = None

        if session is not None:
            response.access_token = session.access_token
            response.refresh_token = session.refresh_token

        return Return.ok(response)

    async def _rollback_identity(self, user_id: str) -> None:
        try:
            await self.identity_provider.delete_user(user_id)
        except IdentityProviderError as exc:
            logger.error(f"Could not delete identity {user_id} after failed sign up: {exc.message}")
