"""
Invitation Entity

Pending offers of membership in a team.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import InvitationStatus, TeamRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending offer of membership tied to an email.

    Business Rules:
    - Transitions pending -> accepted exactly once, irreversibly
    - At most one pending invitation per (team_id, email), enforced by a
      partial unique index
    - Deleted only as the compensation for a failed invitation email
    """

    __tablename__ = "invitations"

    id: Optional[int] = Field(default=None, primary_key=True)

    team_id: int = Field(foreign_key="teams.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: TeamRole = Field(nullable=False)
    invited_by: str = Field(max_length=255, nullable=False)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Timestamps
    invited_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index(
            "uq_invitation_pending_team_email",
            "team_id",
            "email",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("idx_invitation_status", "status"),
    )
