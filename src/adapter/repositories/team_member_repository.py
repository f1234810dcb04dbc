from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.team_member_repository import ITeamMemberRepository
from src.domain.entities import TeamMember


class TeamMemberRepository(ITeamMemberRepository):
    """TeamMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str) -> Optional[TeamMember]:
        """Get the membership a user currently belongs to (oldest first)"""
        stmt = (
            select(TeamMember)
            .where(TeamMember.user_id == user_id)
            .order_by(TeamMember.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_user_and_team(
        self, user_id: str, team_id: int
    ) -> Optional[TeamMember]:
        """Get membership by user and team"""
        stmt = select(TeamMember).where(
            TeamMember.user_id == user_id, TeamMember.team_id == team_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_team_id(self, team_id: int) -> List[TeamMember]:
        """Get all memberships for a team"""
        stmt = select(TeamMember).where(TeamMember.team_id == team_id).order_by(TeamMember.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_if_absent(self, member: TeamMember) -> Optional[TeamMember]:
        """
        Insert a membership, relying on the (user_id, team_id) unique index.

        A conflicting insert rolls back the session's uncommitted work and
        returns None, so callers commit earlier steps before calling this.
        """
        self.session.add(member)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            return None
        await self.session.refresh(member)
        return member

    async def delete_by_id_and_team(self, member_id: int, team_id: int) -> int:
        """Delete the membership matching both id and team"""
        stmt = delete(TeamMember).where(
            TeamMember.id == member_id, TeamMember.team_id == team_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_by_user_and_team(self, user_id: str, team_id: int) -> int:
        """Delete the membership of a user in a team"""
        stmt = delete(TeamMember).where(
            TeamMember.user_id == user_id, TeamMember.team_id == team_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount
