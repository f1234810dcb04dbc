import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.teams = MagicMock()
    uow.teams.get_by_id = AsyncMock(return_value=None)
    uow.teams.get_by_stripe_customer_id = AsyncMock(return_value=None)
    uow.teams.create = AsyncMock()
    uow.teams.update = AsyncMock()

    uow.team_members = MagicMock()
    uow.team_members.get_by_user_id = AsyncMock(return_value=None)
    uow.team_members.get_by_user_and_team = AsyncMock(return_value=None)
    uow.team_members.get_by_team_id = AsyncMock(return_value=[])
    uow.team_members.create_if_absent = AsyncMock()
    uow.team_members.delete_by_id_and_team = AsyncMock(return_value=1)
    uow.team_members.delete_by_user_and_team = AsyncMock(return_value=1)

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_team_and_email = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_id_and_email = AsyncMock(return_value=None)
    uow.invitations.create_if_absent = AsyncMock()
    uow.invitations.update = AsyncMock()
    uow.invitations.delete = AsyncMock()

    uow.activity_logs = MagicMock()
    uow.activity_logs.create = AsyncMock(side_effect=lambda log: log)
    uow.activity_logs.get_recent_by_team = AsyncMock(return_value=[])

    return uow


@pytest.fixture
def identity_provider():
    """Mock identity provider; every port method is an AsyncMock"""
    provider = MagicMock()
    provider.create_user = AsyncMock()
    provider.sign_in_with_password = AsyncMock(return_value=None)
    provider.sign_out = AsyncMock()
    provider.update_user = AsyncMock()
    provider.request_email_change = AsyncMock()
    provider.delete_user = AsyncMock()
    provider.invite_user_by_email = AsyncMock()
    provider.get_user_by_id = AsyncMock(return_value=None)
    provider.get_user_by_email = AsyncMock(return_value=None)
    return provider
