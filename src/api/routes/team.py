from typing import Optional

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.teams import GetTeamForUserUseCase, TeamWithMembers
from src.depends import CurrentUser, get_identity_provider, get_optional_user, get_unit_of_work

router = APIRouter(tags=["Team"])


@router.get("/team", status_code=status.HTTP_200_OK, response_model=Optional[TeamWithMembers])
async def get_team(
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Caller's team with its roster, or null.

    Anonymous callers and users without a team both get null.
    """
    if current_user is None:
        return None

    use_case = GetTeamForUserUseCase(uow, identity_provider)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
