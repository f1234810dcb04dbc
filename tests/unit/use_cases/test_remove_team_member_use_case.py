import pytest

from src.app.use_cases.teams import RemoveTeamMemberUseCase
from src.domain.entities import ActivityType, TeamMember, TeamRole
from tests.fixtures.helpers import recorded_actions


@pytest.mark.asyncio
async def test_removal_is_scoped_to_actor_team(mock_uow):
    """Only the (member id, actor team) pair is deleted; the actor is logged"""
    mock_uow.team_members.get_by_user_id.return_value = TeamMember(
        id=1, user_id="owner-1", team_id=10, role=TeamRole.owner
    )

    result = await RemoveTeamMemberUseCase(mock_uow).execute("owner-1", 2, "1.2.3.4")

    assert result.is_ok()
    assert result.value.removed == 1
    mock_uow.team_members.delete_by_id_and_team.assert_awaited_once_with(2, 10)

    assert recorded_actions(mock_uow) == [ActivityType.REMOVE_TEAM_MEMBER]
    log = mock_uow.activity_logs.create.await_args.args[0]
    assert log.user_id == "owner-1"
    assert log.team_id == 10


@pytest.mark.asyncio
async def test_member_of_another_team_is_not_removed(mock_uow):
    mock_uow.team_members.get_by_user_id.return_value = TeamMember(
        id=1, user_id="owner-1", team_id=10, role=TeamRole.owner
    )
    mock_uow.team_members.delete_by_id_and_team.return_value = 0

    result = await RemoveTeamMemberUseCase(mock_uow).execute("owner-1", 77)

    assert result.is_ok()
    assert result.value.removed == 0


@pytest.mark.asyncio
async def test_actor_without_team(mock_uow):
    result = await RemoveTeamMemberUseCase(mock_uow).execute("lonely", 2)

    assert result.is_err()
    assert result.error.code == "NO_TEAM"
    mock_uow.team_members.delete_by_id_and_team.assert_not_awaited()
    mock_uow.activity_logs.create.assert_not_awaited()
