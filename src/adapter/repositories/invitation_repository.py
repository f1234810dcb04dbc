from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: int) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_team_and_email(
        self, team_id: int, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by team and email"""
        stmt = select(Invitation).where(
            Invitation.team_id == team_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_id_and_email(
        self, invitation_id: int, email: str
    ) -> Optional[Invitation]:
        """Get an invitation only if it is pending and addressed to email"""
        stmt = select(Invitation).where(
            Invitation.id == invitation_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_if_absent(self, invitation: Invitation) -> Optional[Invitation]:
        """
        Insert a pending invitation, relying on the partial unique index.

        A conflicting insert rolls back the session's uncommitted work and
        returns None.
        """
        self.session.add(invitation)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            return None
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def delete(self, invitation_id: int) -> int:
        """Delete invitation by ID"""
        stmt = delete(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.rowcount
