from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.activity_log_repository import IActivityLogRepository
from src.domain.entities import ActivityLog


class ActivityLogRepository(IActivityLogRepository):
    """ActivityLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, activity_log: ActivityLog) -> ActivityLog:
        """Append a new activity log row (immutable)"""
        self.session.add(activity_log)
        await self.session.flush()
        await self.session.refresh(activity_log)
        return activity_log

    async def get_recent_by_team(self, team_id: int, limit: int = 10) -> List[ActivityLog]:
        """Get the most recent activity rows of a team, newest first"""
        stmt = (
            select(ActivityLog)
            .where(ActivityLog.team_id == team_id)
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
