"""
Account Use Cases

Credential and profile changes for the signed-in user.
"""

from .delete_account_use_case import DeleteAccountUseCase
from .dtos import MessageResponse, UpdateAccountResponse
from .set_initial_password_use_case import SetInitialPasswordUseCase
from .update_account_use_case import UpdateAccountUseCase
from .update_password_use_case import UpdatePasswordUseCase

__all__ = [
    "UpdatePasswordUseCase",
    "SetInitialPasswordUseCase",
    "DeleteAccountUseCase",
    "UpdateAccountUseCase",
    "MessageResponse",
    "UpdateAccountResponse",
]
