"""
Resolve Invitation Use Case

Turns a redeemed invitation into a team membership after the invitee has
completed identity verification out-of-band.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from src.libs.parsing import as_int
from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType, InvitationStatus, TeamMember, TeamRole

from .dtos import AuthCallbackResponse, ResolveInvitationResponse

logger = logging.getLogger(__name__)

INVITATION_METADATA_KEYS = ("invited_team_id", "invited_role", "invitation_id")


class ResolveInvitationUseCase:
    """
    Use case for linking a verified invitee to the inviting team.

    Business Rules:
    - Replays are idempotent: an existing (user, team) membership is success
      with no write
    - A new membership needs an invitation for exactly this team and role,
      either in the invitee's identity metadata or as a pending invitation
      addressed to their email (NOT_INVITED)
    - Membership insert failure is fatal (MEMBERSHIP_CREATION_FAILED)
    - Marking the invitation accepted and clearing the invitee's invitation
      metadata are best-effort; their failures are logged only
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self,
        user_id: str,
        team_id: int,
        role: str,
        invitation_id: Optional[int] = None,
        ip_address: Optional[str] = None,
    ) -> Result[ResolveInvitationResponse]:
        """
        Execute resolve invitation use case.

        Args:
            user_id: Identity of the invitee
            team_id: Team the invitation was issued for
            role: Role carried by the invitation
            invitation_id: Invitation to mark accepted when none is found
                through the invitee's metadata or email
            ip_address: Originating IP for the activity log

        Returns:
            Result with ResolveInvitationResponse DTO, or Error
        """
        async with self.uow:
            try:
                team_role = TeamRole(role)
            except ValueError:
                return Return.err(
                    Error("INVALID_ROLE", f"Invalid role: {role}. Must be one of: owner, member")
                )

            existing_member = await self.uow.team_members.get_by_user_and_team(user_id, team_id)
            if existing_member:
                return Return.ok(
                    ResolveInvitationResponse(
                        already_member=True, team_id=team_id, role=existing_member.role.value
                    )
                )

            team = await self.uow.teams.get_by_id(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            try:
                invited, granted_invitation_id = await self._find_invitation(
                    user_id, team_id, team_role
                )
            except IdentityProviderError as exc:
                logger.error(f"Could not load user {user_id} to check invitation: {exc.message}")
                return Return.err(
                    Error("IDENTITY_PROVIDER_ERROR", "Failed to verify invitation")
                )

            if not invited:
                logger.warning(
                    f"User {user_id} tried to join team {team_id} as {team_role.value} "
                    f"without an invitation"
                )
                return Return.err(Error("NOT_INVITED", "Forbidden"))

            if granted_invitation_id is not None:
                invitation_id = granted_invitation_id

            try:
                member = await self.uow.team_members.create_if_absent(
                    TeamMember(user_id=user_id, team_id=team_id, role=team_role)
                )
                if member is not None:
                    await self.uow.commit()
            except SQLAlchemyError as exc:
                await self.uow.rollback()
                logger.error(f"Failed to add user {user_id} to team {team_id}: {exc}")
                return Return.err(
                    Error("MEMBERSHIP_CREATION_FAILED", "Failed to add user to team")
                )

            if member is None:
                # A concurrent redemption created the row first
                return Return.ok(
                    ResolveInvitationResponse(
                        already_member=True, team_id=team_id, role=team_role.value
                    )
                )

            if invitation_id is not None:
                await self._mark_accepted(invitation_id, team_id)

            await self._clear_invitation_metadata(user_id)

            await ActivityRecorder(self.uow).record(
                team_id, user_id, ActivityType.ACCEPT_INVITATION, ip_address
            )

            return Return.ok(
                ResolveInvitationResponse(
                    already_member=False, team_id=team_id, role=team_role.value
                )
            )

    async def _find_invitation(
        self, user_id: str, team_id: int, team_role: TeamRole
    ) -> Tuple[bool, Optional[int]]:
        """(invited, invitation id) for this user, team and role"""
        user = await self.identity_provider.get_user_by_id(user_id)
        if user is None:
            return False, None

        metadata = user.user_metadata
        if (
            as_int(metadata.get("invited_team_id")) == team_id
            and metadata.get("invited_role") == team_role.value
        ):
            return True, as_int(metadata.get("invitation_id"))

        if not user.email:
            return False, None
        invitation = await self.uow.invitations.get_pending_by_team_and_email(team_id, user.email)
        if invitation is not None and invitation.role == team_role:
            return True, invitation.id

        return False, None

    async def _mark_accepted(self, invitation_id: int, team_id: int) -> None:
        try:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if (
                invitation is None
                or invitation.team_id != team_id
                or invitation.status == InvitationStatus.accepted
            ):
                return
            invitation.status = InvitationStatus.accepted
            await self.uow.invitations.update(invitation)
            await self.uow.commit()
        except SQLAlchemyError as exc:
            await self.uow.rollback()
            logger.warning(f"Could not mark invitation {invitation_id} accepted: {exc}")

    async def _clear_invitation_metadata(self, user_id: str) -> None:
        try:
            await self.identity_provider.update_user(
                user_id, metadata={key: None for key in INVITATION_METADATA_KEYS}
            )
        except IdentityProviderError as exc:
            logger.warning(f"Could not clear invitation metadata for user {user_id}: {exc.message}")


class CompleteAuthCallbackUseCase:
    """
    Use case run when a user lands back from the identity provider.

    Business Rules:
    - Invitation metadata on the identity (team + role) triggers resolution,
      after which the invitee must set a password
    - Users without invitation metadata go to the dashboard
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self, user_id: str, ip_address: Optional[str] = None
    ) -> Result[AuthCallbackResponse]:
        try:
            user = await self.identity_provider.get_user_by_id(user_id)
        except IdentityProviderError as exc:
            logger.error(f"Could not load user {user_id} on auth callback: {exc.message}")
            return Return.err(
                Error("IDENTITY_PROVIDER_ERROR", "Failed to complete sign in. Please try again.")
            )

        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        team_id = as_int(user.user_metadata.get("invited_team_id"))
        role = user.user_metadata.get("invited_role")
        if team_id is None or not role:
            return Return.ok(AuthCallbackResponse(redirect="/dashboard"))

        result = await ResolveInvitationUseCase(self.uow, self.identity_provider).execute(
            user_id,
            team_id,
            role,
            invitation_id=as_int(user.user_metadata.get("invitation_id")),
            ip_address=ip_address,
        )
        if result.is_err():
            return Return.err(result.error)

        return Return.ok(AuthCallbackResponse(redirect="/set-password", linked_team_id=team_id))
