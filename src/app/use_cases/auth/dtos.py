"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel


class SignInResponse(BaseModel):
    """Response for sign in use case"""

    user_id: str
    team_id: Optional[int]
    access_token: str
    refresh_token: str


class SignUpResponse(BaseModel):
    """Response for sign up use case"""

    user_id: str
    team_id: int
    role: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
