from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel

from src.api.error import MessageError
from src.libs.parsing import as_int
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.teams import (
    AuthCallbackResponse,
    CompleteAuthCallbackUseCase,
    ResolveInvitationUseCase,
)
from src.depends import (
    CurrentUser,
    get_client_ip,
    get_current_user,
    get_identity_provider,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

LINK_TEAM_REQUIRED_FIELDS = ("userId", "teamId", "role")


class LinkTeamResponse(BaseModel):
    success: bool
    message: Optional[str] = None


@router.post(
    "/link-team",
    status_code=status.HTTP_200_OK,
    response_model=LinkTeamResponse,
    response_model_exclude_none=True,
)
async def link_team(
    body: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    """
    Link the caller to the team they were invited to.

    Raises:
        - 400 Bad Request: missing or malformed userId/teamId/role, invalid role
        - 403 Forbidden: userId is not the caller, or the caller holds no
          invitation for this team and role
        - 404 Not Found: team does not exist
        - 500 Internal Server Error: membership insert failed
    """
    if any(not body.get(field) for field in LINK_TEAM_REQUIRED_FIELDS):
        raise MessageError("Missing required fields")

    team_id = as_int(body["teamId"])
    if team_id is None:
        raise MessageError("Missing required fields")

    if body["userId"] != current_user.user_id:
        raise MessageError("Forbidden", status_code=status.HTTP_403_FORBIDDEN)

    use_case = ResolveInvitationUseCase(uow, identity_provider)
    result = await use_case.execute(
        current_user.user_id,
        team_id,
        body["role"],
        invitation_id=as_int(body.get("invitationId")),
        ip_address=ip_address,
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise MessageError(error.message)
        elif error.code == "TEAM_NOT_FOUND":
            raise MessageError(error.message, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NOT_INVITED":
            raise MessageError(error.message, status_code=status.HTTP_403_FORBIDDEN)
        raise MessageError(error.message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if result.value.already_member:
        return LinkTeamResponse(success=True, message="Already a member")
    return LinkTeamResponse(success=True)


@router.post(
    "/callback",
    status_code=status.HTTP_200_OK,
    response_model=AuthCallbackResponse,
    response_model_exclude_none=True,
)
async def auth_callback(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    """
    Finish an identity-provider redirect.

    Invitees are linked to the team carried in their metadata and sent to
    set a password; everyone else goes to the dashboard.
    """
    use_case = CompleteAuthCallbackUseCase(uow, identity_provider)
    result = await use_case.execute(current_user.user_id, ip_address)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise MessageError(error.message, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVALID_ROLE", "TEAM_NOT_FOUND"):
            raise MessageError(error.message)
        raise MessageError(error.message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value
