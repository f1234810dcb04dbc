"""
Activity Recorder

Appends audit rows for state-changing actions. Recording is best-effort:
a failed insert is logged and swallowed so it never aborts the action it
accompanies.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityLog, ActivityType

logger = logging.getLogger(__name__)


class ActivityRecorder:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        team_id: Optional[int],
        user_id: Optional[str],
        action: ActivityType,
        ip_address: Optional[str] = None,
    ) -> Optional[ActivityLog]:
        """
        Append one activity row and commit it.

        No-op when team_id is None (actor without a team).

        Returns:
            The stored row, or None if nothing was written
        """
        if team_id is None:
            return None

        activity_log = ActivityLog(
            team_id=team_id,
            user_id=user_id,
            action=action,
            ip_address=ip_address or "",
        )
        try:
            activity_log = await self.uow.activity_logs.create(activity_log)
            await self.uow.commit()
        except SQLAlchemyError:
            logger.exception(f"Failed to record activity {action.value} for team {team_id}")
            await self.uow.rollback()
            return None
        return activity_log
