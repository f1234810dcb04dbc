"""
Authentication Use Cases

All authentication-related business logic.
"""

from .dtos import SignInResponse, SignUpResponse
from .sign_in_use_case import SignInUseCase
from .sign_out_use_case import SignOutUseCase
from .sign_up_use_case import SignUpUseCase

__all__ = [
    "SignInUseCase",
    "SignUpUseCase",
    "SignOutUseCase",
    "SignInResponse",
    "SignUpResponse",
]
