from typing import Any, Dict, Literal

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from config import ApplicationConfig
from src.api.utils.actions import ActionState, action_error, parse_form
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.teams import InviteTeamMemberUseCase, RemoveTeamMemberUseCase
from src.depends import (
    CurrentUser,
    get_client_ip,
    get_current_user,
    get_identity_provider,
    get_unit_of_work,
)

router = APIRouter(prefix="/actions/team", tags=["Team Actions"])


class RemoveTeamMemberForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    member_id: int = Field(..., alias="memberId")


class InviteTeamMemberForm(BaseModel):
    email: EmailStr
    role: Literal["member", "owner"]


@router.post(
    "/remove-member",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def remove_team_member(
    payload: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    ip_address: str = Depends(get_client_ip),
):
    """Remove a member of the caller's own team"""
    form = parse_form(RemoveTeamMemberForm, payload)

    result = await RemoveTeamMemberUseCase(uow).execute(
        current_user.user_id, form.member_id, ip_address
    )
    if result.is_err():
        return action_error(result.error)

    return ActionState(success="Team member removed successfully")


@router.post(
    "/invite-member",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def invite_team_member(
    payload: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    """
    Invite someone to the caller's team by email.

    The invitee is redirected to /auth/callback on the web app, which links
    the account to the team.
    """
    form = parse_form(InviteTeamMemberForm, payload)

    use_case = InviteTeamMemberUseCase(
        uow, identity_provider, redirect_to=f"{ApplicationConfig.BASE_URL}/auth/callback"
    )
    result = await use_case.execute(current_user.user_id, form.email, form.role, ip_address)
    if result.is_err():
        return action_error(result.error)

    return ActionState(success="Invitation sent successfully")
