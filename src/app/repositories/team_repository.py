from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Team


class ITeamRepository(ABC):
    """Team repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, team_id: int) -> Optional[Team]:
        """Get team by ID"""
        pass

    @abstractmethod
    async def get_by_stripe_customer_id(self, customer_id: str) -> Optional[Team]:
        """Get team linked to a payment-provider customer"""
        pass

    @abstractmethod
    async def create(self, team: Team) -> Team:
        """Create a new team"""
        pass

    @abstractmethod
    async def update(self, team: Team) -> Team:
        """Update existing team"""
        pass
