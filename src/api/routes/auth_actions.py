from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.api.utils.actions import ActionState, action_error, parse_form
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import SignInUseCase, SignOutUseCase, SignUpUseCase
from src.depends import (
    CurrentUser,
    get_client_ip,
    get_current_user,
    get_identity_provider,
    get_unit_of_work,
)

router = APIRouter(prefix="/actions", tags=["Auth Actions"])


class SignInForm(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=100)


class SignUpForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8)
    invite_id: Optional[int] = Field(None, alias="inviteId")

    @field_validator("invite_id", mode="before")
    @classmethod
    def blank_invite_id(cls, value: Any) -> Any:
        return None if value == "" else value


@router.post(
    "/sign-in",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def sign_in(
    payload: Dict[str, Any] = Body(...),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    """Password sign-in. Wrong credentials echo the submitted fields back."""
    form = parse_form(SignInForm, payload)

    result = await SignInUseCase(uow, identity_provider).execute(
        form.email, form.password, ip_address
    )
    if result.is_err():
        return action_error(result.error, email=form.email, password=form.password)

    session = result.value
    return ActionState(
        redirect="/dashboard",
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


@router.post(
    "/sign-up",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def sign_up(
    payload: Dict[str, Any] = Body(...),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    """Registration, optionally redeeming an invitation"""
    form = parse_form(SignUpForm, payload)

    result = await SignUpUseCase(uow, identity_provider).execute(
        form.email, form.password, invite_id=form.invite_id, ip_address=ip_address
    )
    if result.is_err():
        return action_error(result.error, email=form.email, password=form.password)

    response = result.value
    return ActionState(
        redirect="/dashboard",
        access_token=response.access_token,
        refresh_token=response.refresh_token,
    )


@router.post(
    "/sign-out",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def sign_out(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    await SignOutUseCase(uow, identity_provider).execute(
        current_user.user_id, current_user.access_token, ip_address
    )
    return ActionState(redirect="/sign-in")
