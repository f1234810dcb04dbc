from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import TeamMember


class ITeamMemberRepository(ABC):
    """TeamMember repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[TeamMember]:
        """Get the membership a user currently belongs to"""
        pass

    @abstractmethod
    async def get_by_user_and_team(
        self, user_id: str, team_id: int
    ) -> Optional[TeamMember]:
        """Get membership by user and team"""
        pass

    @abstractmethod
    async def get_by_team_id(self, team_id: int) -> List[TeamMember]:
        """Get all memberships for a team"""
        pass

    @abstractmethod
    async def create_if_absent(self, member: TeamMember) -> Optional[TeamMember]:
        """
        Insert a membership unless (user_id, team_id) already exists.

        Returns the stored row, or None when the unique index rejected it.
        """
        pass

    @abstractmethod
    async def delete_by_id_and_team(self, member_id: int, team_id: int) -> int:
        """Delete the membership matching both id and team. Returns rows deleted."""
        pass

    @abstractmethod
    async def delete_by_user_and_team(self, user_id: str, team_id: int) -> int:
        """Delete the membership of a user in a team. Returns rows deleted."""
        pass
