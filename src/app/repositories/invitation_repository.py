from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: int) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_pending_by_team_and_email(
        self, team_id: int, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by team and email"""
        pass

    @abstractmethod
    async def get_pending_by_id_and_email(
        self, invitation_id: int, email: str
    ) -> Optional[Invitation]:
        """Get an invitation only if it is pending and addressed to email"""
        pass

    @abstractmethod
    async def create_if_absent(self, invitation: Invitation) -> Optional[Invitation]:
        """
        Insert a pending invitation unless one exists for (team_id, email).

        Returns the stored row, or None when the unique index rejected it.
        """
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def delete(self, invitation_id: int) -> int:
        """Delete invitation by ID. Returns rows deleted."""
        pass
