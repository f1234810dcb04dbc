from abc import ABC, abstractmethod

from src.app.repositories.activity_log_repository import IActivityLogRepository
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.team_member_repository import ITeamMemberRepository
from src.app.repositories.team_repository import ITeamRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    teams: ITeamRepository
    team_members: ITeamMemberRepository
    invitations: IInvitationRepository
    activity_logs: IActivityLogRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
