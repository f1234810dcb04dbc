from typing import List

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.activity import ActivityLogEntry, GetActivityLogsUseCase
from src.depends import CurrentUser, get_current_user, get_identity_provider, get_unit_of_work

router = APIRouter(tags=["Activity"])


@router.get("/activity", status_code=status.HTTP_200_OK, response_model=List[ActivityLogEntry])
async def get_activity_logs(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """Ten most recent activity rows of the caller's team, newest first"""
    use_case = GetActivityLogsUseCase(uow, identity_provider)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
