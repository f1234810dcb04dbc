"""
Invite Team Member Use Case

Creates a pending invitation and sends the invitation email through the
identity provider. The two steps are not atomic: the row is committed first
and deleted again if the email cannot be sent.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType, Invitation, TeamRole
from src.domain.invitation_dispatch import InvitationDispatch

from .dtos import InviteTeamMemberResponse

logger = logging.getLogger(__name__)


class InviteTeamMemberUseCase:
    """
    Use case for inviting a user to the inviter's team.

    Business Rules:
    - Inviter must belong to a team (NO_TEAM)
    - Existing members of the team cannot be invited (ALREADY_MEMBER)
    - At most one pending invitation per (team, email) (INVITE_ALREADY_EXISTS)
    - If the invitation email fails, the invitation row is deleted once and
      the email failure is reported (INVITE_SEND_FAILED)
    - INVITE_TEAM_MEMBER is recorded only after the email went out
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider, redirect_to: str):
        self.uow = uow
        self.identity_provider = identity_provider
        self.redirect_to = redirect_to

    async def execute(
        self,
        inviter_user_id: str,
        email: str,
        role: str,
        ip_address: Optional[str] = None,
    ) -> Result[InviteTeamMemberResponse]:
        """
        Execute invite team member use case.

        Args:
            inviter_user_id: Identity of the user sending the invite
            email: Email address to invite
            role: Role to assign (owner/member)
            ip_address: Originating IP for the activity log

        Returns:
            Result with InviteTeamMemberResponse DTO, or Error
        """
        async with self.uow:
            try:
                team_role = TeamRole(role)
            except ValueError:
                return Return.err(
                    Error("INVALID_ROLE", f"Invalid role: {role}. Must be one of: owner, member")
                )

            inviter_membership = await self.uow.team_members.get_by_user_id(inviter_user_id)
            if inviter_membership is None:
                return Return.err(Error("NO_TEAM", "User is not part of a team"))

            team_id = inviter_membership.team_id

            # Existing account that already belongs to this team
            try:
                existing_user = await self.identity_provider.get_user_by_email(email)
            except IdentityProviderError as exc:
                logger.error(f"User lookup failed while inviting {email}: {exc.message}")
                return Return.err(
                    Error(
                        "IDENTITY_PROVIDER_ERROR",
                        "Failed to send invitation. Please try again.",
                    )
                )

            if existing_user:
                existing_member = await self.uow.team_members.get_by_user_and_team(
                    existing_user.id, team_id
                )
                if existing_member:
                    return Return.err(
                        Error("ALREADY_MEMBER", "User is already a member of this team")
                    )

            pending_invitation = await self.uow.invitations.get_pending_by_team_and_email(
                team_id, email
            )
            if pending_invitation:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "An invitation has already been sent to this email",
                    )
                )

            invitation = await self.uow.invitations.create_if_absent(
                Invitation(
                    team_id=team_id,
                    email=email,
                    role=team_role,
                    invited_by=inviter_user_id,
                )
            )
            if invitation is None:
                # Lost the race against a concurrent invite for the same email
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "An invitation has already been sent to this email",
                    )
                )
            await self.uow.commit()

            dispatch = InvitationDispatch(invitation.id)

            try:
                await self.identity_provider.invite_user_by_email(
                    email,
                    metadata={
                        "invited_team_id": team_id,
                        "invited_role": team_role.value,
                        "invitation_id": invitation.id,
                    },
                    redirect_to=self.redirect_to,
                )
            except IdentityProviderError as exc:
                await self._compensate(dispatch, exc.message)
                return Return.err(
                    Error("INVITE_SEND_FAILED", f"Failed to send invitation: {exc.message}")
                )

            dispatch.mark_sent()
            logger.info(f"Invitation {invitation.id} sent for team {team_id}")

            response = InviteTeamMemberResponse(
                invitation_id=invitation.id,
                status=invitation.status.value,
                dispatch_state=dispatch.state.value,
            )

            await ActivityRecorder(self.uow).record(
                team_id, inviter_user_id, ActivityType.INVITE_TEAM_MEMBER, ip_address
            )

            return Return.ok(response)

    async def _compensate(self, dispatch: InvitationDispatch, reason: str) -> None:
        """Delete the invitation whose email could not be sent. Single attempt."""
        try:
            await self.uow.invitations.delete(dispatch.invitation_id)
            await self.uow.commit()
        except SQLAlchemyError:
            await self.uow.rollback()
            dispatch.mark_rollback_failed(reason)
            logger.error(
                f"Invitation {dispatch.invitation_id} left pending: email failed ({reason}) "
                f"and the compensating delete failed"
            )
            return

        dispatch.mark_rolled_back(reason)
        logger.warning(
            f"Invitation {dispatch.invitation_id} rolled back after email failure: {reason}"
        )
