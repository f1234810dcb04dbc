"""
User Entity

Identity-provider owned user profile. Never persisted in the relational
store; populated from identity provider responses.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    User profile as reported by the identity provider.

    Business Rules:
    - id is opaque and stable; team_members.user_id refers to it
    - Display name lives in free-form metadata under "name"
    - Invitation redemption data travels in metadata under
      invited_team_id / invited_role / invitation_id
    """

    id: str
    email: str = ""
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    @property
    def name(self) -> Optional[str]:
        return self.user_metadata.get("name") or None

    @property
    def display_name(self) -> str:
        return self.name or self.email or "Unknown"


class AuthSession(BaseModel):
    """Session tokens issued by the identity provider on sign-in"""

    access_token: str
    refresh_token: str
    user: User
