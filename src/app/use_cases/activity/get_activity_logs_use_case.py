"""
Get Activity Logs Use Case

Returns the caller's team's most recent audit rows with actor names.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from src.libs.result import Result, Return
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

ACTIVITY_LOG_LIMIT = 10


class ActivityLogEntry(BaseModel):
    """Single activity row in response"""

    id: int
    action: str
    timestamp: datetime
    ip_address: str
    user_name: Optional[str]


class GetActivityLogsUseCase:
    """
    Use case for reading recent activity.

    Business Rules:
    - Scoped to the caller's team; no team means an empty list
    - At most 10 rows, newest first
    - Each distinct actor is resolved once: metadata name, else email,
      else "Unknown"; actors the provider no longer knows resolve to None
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(self, user_id: str) -> Result[List[ActivityLogEntry]]:
        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(user_id)
            if membership is None:
                return Return.ok([])

            logs = await self.uow.activity_logs.get_recent_by_team(
                membership.team_id, limit=ACTIVITY_LOG_LIMIT
            )

            user_names: Dict[str, Optional[str]] = {}
            for actor_id in dict.fromkeys(log.user_id for log in logs if log.user_id):
                user_names[actor_id] = await self._resolve_name(actor_id)

            return Return.ok(
                [
                    ActivityLogEntry(
                        id=log.id,
                        action=log.action.value,
                        timestamp=log.timestamp,
                        ip_address=log.ip_address,
                        user_name=user_names.get(log.user_id) if log.user_id else None,
                    )
                    for log in logs
                ]
            )

    async def _resolve_name(self, user_id: str) -> Optional[str]:
        try:
            user = await self.identity_provider.get_user_by_id(user_id)
        except IdentityProviderError as exc:
            logger.warning(f"Name lookup failed for user {user_id}: {exc.message}")
            return None
        return user.display_name if user else None
