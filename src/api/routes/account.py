from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.api.utils.actions import ActionState, action_error, parse_form
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.account import (
    DeleteAccountUseCase,
    SetInitialPasswordUseCase,
    UpdateAccountUseCase,
    UpdatePasswordUseCase,
)
from src.depends import (
    CurrentUser,
    get_client_ip,
    get_current_user,
    get_identity_provider,
    get_unit_of_work,
)

router = APIRouter(prefix="/actions/account", tags=["Account Actions"])


class UpdatePasswordForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword", min_length=8, max_length=100)
    new_password: str = Field(..., alias="newPassword", min_length=8, max_length=100)
    confirm_password: str = Field(..., alias="confirmPassword", min_length=8, max_length=100)


class SetPasswordForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(..., min_length=8, max_length=100)
    confirm_password: str = Field(..., alias="confirmPassword", min_length=8, max_length=100)


class DeleteAccountForm(BaseModel):
    password: str = Field(..., min_length=8, max_length=100)


class UpdateAccountForm(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


@router.post(
    "/update-password",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def update_password(
    payload: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    form = parse_form(UpdatePasswordForm, payload)

    result = await UpdatePasswordUseCase(uow, identity_provider).execute(
        current_user.user_id,
        form.current_password,
        form.new_password,
        form.confirm_password,
        ip_address,
    )
    if result.is_err():
        return action_error(
            result.error,
            currentPassword=form.current_password,
            newPassword=form.new_password,
            confirmPassword=form.confirm_password,
        )

    return ActionState(success=result.value.message)


@router.post(
    "/set-password",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def set_password(
    payload: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """Initial password for invitees who signed in through an emailed link"""
    form = parse_form(SetPasswordForm, payload)

    result = await SetInitialPasswordUseCase(identity_provider).execute(
        current_user.user_id, form.password, form.confirm_password
    )
    if result.is_err():
        return action_error(result.error)

    return ActionState(success=result.value.message, redirect="/dashboard")


@router.post(
    "/delete",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def delete_account(
    payload: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    form = parse_form(DeleteAccountForm, payload)

    result = await DeleteAccountUseCase(uow, identity_provider).execute(
        current_user.user_id,
        form.password,
        current_user.access_token,
        ip_address,
    )
    if result.is_err():
        return action_error(result.error, password=form.password)

    return ActionState(redirect="/sign-in")


@router.post(
    "/update",
    status_code=status.HTTP_200_OK,
    response_model=ActionState,
    response_model_exclude_none=True,
)
async def update_account(
    payload: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    ip_address: str = Depends(get_client_ip),
):
    form = parse_form(UpdateAccountForm, payload)

    result = await UpdateAccountUseCase(uow, identity_provider).execute(
        current_user.user_id,
        form.name,
        form.email,
        current_user.access_token,
        ip_address,
    )
    if result.is_err():
        return action_error(result.error, name=form.name, email=form.email)

    return ActionState(name=result.value.name, success=result.value.message)
