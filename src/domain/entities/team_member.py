"""
TeamMember Entity

Links an identity-provider user to a Team with a role.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TeamRole


class TeamMember(SQLModel, table=True):
    """
    TeamMember entity - links a user to a team with a role.

    Business Rules:
    - user_id is the opaque identity-provider id (users are not stored here)
    - (user_id, team_id) is unique; inserts that collide are reported as
      "already a member" by the repository
    - Deleted on member removal or account deletion
    """

    __tablename__ = "team_members"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: str = Field(max_length=255, nullable=False, index=True)
    team_id: int = Field(foreign_key="teams.id", nullable=False, index=True)

    role: TeamRole = Field(nullable=False)

    # Timestamps
    joined_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_team_member_user_team", "user_id", "team_id", unique=True),
    )
