from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import ActivityLog


class IActivityLogRepository(ABC):
    """ActivityLog repository interface - application layer"""

    @abstractmethod
    async def create(self, activity_log: ActivityLog) -> ActivityLog:
        """Append a new activity log row (immutable)"""
        pass

    @abstractmethod
    async def get_recent_by_team(self, team_id: int, limit: int = 10) -> List[ActivityLog]:
        """
        Get the most recent activity rows of a team.

        Returns:
            Rows ordered by timestamp DESC, then id DESC, at most `limit`
        """
        pass
