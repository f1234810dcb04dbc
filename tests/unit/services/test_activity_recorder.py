import pytest
from sqlalchemy.exc import OperationalError

from src.app.services.activity_recorder import ActivityRecorder
from src.domain.entities import ActivityType


@pytest.mark.asyncio
async def test_record_appends_row_and_commits(mock_uow):
    log = await ActivityRecorder(mock_uow).record(3, "user-1", ActivityType.SIGN_IN, "10.0.0.1")

    assert log.team_id == 3
    assert log.user_id == "user-1"
    assert log.action == ActivityType.SIGN_IN
    assert log.ip_address == "10.0.0.1"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_ip_is_stored_as_empty_string(mock_uow):
    log = await ActivityRecorder(mock_uow).record(3, "user-1", ActivityType.SIGN_IN)

    assert log.ip_address == ""


@pytest.mark.asyncio
async def test_no_team_is_a_no_op(mock_uow):
    log = await ActivityRecorder(mock_uow).record(None, "user-1", ActivityType.SIGN_IN)

    assert log is None
    mock_uow.activity_logs.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_store_failure_is_swallowed(mock_uow):
    mock_uow.activity_logs.create.side_effect = OperationalError("INSERT", {}, Exception("locked"))

    log = await ActivityRecorder(mock_uow).record(3, "user-1", ActivityType.SIGN_IN)

    assert log is None
    mock_uow.rollback.assert_awaited_once()
