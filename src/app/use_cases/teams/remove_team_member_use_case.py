"""
Remove Team Member Use Case

Deletes one membership row from the caller's team.
"""

from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.activity_recorder import ActivityRecorder
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityType

from .dtos import RemoveTeamMemberResponse


class RemoveTeamMemberUseCase:
    """
    Use case for removing a member from the caller's team.

    Business Rules:
    - Caller must belong to a team (NO_TEAM)
    - Only the row matching both member id and the caller's team is deleted,
      so ids from other teams are never touched
    - REMOVE_TEAM_MEMBER is attributed to the caller, not the removed member
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: str, member_id: int, ip_address: Optional[str] = None
    ) -> Result[RemoveTeamMemberResponse]:
        async with self.uow:
            actor_membership = await self.uow.team_members.get_by_user_id(actor_user_id)
            if actor_membership is None:
                return Return.err(Error("NO_TEAM", "User is not part of a team"))

            team_id = actor_membership.team_id
            removed = await self.uow.team_members.delete_by_id_and_team(member_id, team_id)
            await self.uow.commit()

            await ActivityRecorder(self.uow).record(
                team_id, actor_user_id, ActivityType.REMOVE_TEAM_MEMBER, ip_address
            )

            return Return.ok(RemoveTeamMemberResponse(removed=removed))
