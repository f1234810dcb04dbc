from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.activity_log_repository import ActivityLogRepository
from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.team_member_repository import TeamMemberRepository
from src.adapter.repositories.team_repository import TeamRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.teams = TeamRepository(self.session)
        self.team_members = TeamMemberRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.activity_logs = ActivityLogRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
