"""
ActivityLog Entity

Append-only audit trail of state-changing actions.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import ActivityType


class ActivityLog(SQLModel, table=True):
    """
    ActivityLog entity - immutable audit row.

    Business Rules:
    - Never updated or deleted by normal operation
    - team_id nullable for actors without a team
    - user_id nullable for system actions
    - ip_address is best-effort and may be empty
    """

    __tablename__ = "activity_logs"

    id: Optional[int] = Field(default=None, primary_key=True)

    team_id: Optional[int] = Field(default=None, foreign_key="teams.id", index=True)
    user_id: Optional[str] = Field(default=None, max_length=255)

    action: ActivityType = Field(nullable=False)
    ip_address: str = Field(default="", max_length=45)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_activity_team_timestamp", "team_id", "timestamp"),)
