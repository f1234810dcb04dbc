"""
Account Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Human readable confirmation of a completed account change"""

    message: str


class UpdateAccountResponse(BaseModel):
    """Response for update account use case"""

    name: str
    message: str
