"""
Team Entity

The tenancy unit: groups members and carries billing linkage.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Team(SQLModel, table=True):
    """
    Team entity - billing and membership grouping.

    Business Rules:
    - Owned by no single user; referenced by many memberships
    - Billing fields stay null until a subscription exists
    - stripe_customer_id is unique when set
    """

    __tablename__ = "teams"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)

    # Billing linkage
    stripe_customer_id: Optional[str] = Field(default=None, unique=True, max_length=255)
    stripe_subscription_id: Optional[str] = Field(default=None, unique=True, max_length=255)
    stripe_product_id: Optional[str] = Field(default=None, max_length=255)
    plan_name: Optional[str] = Field(default=None, max_length=50)
    subscription_status: Optional[str] = Field(default=None, max_length=20)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_team_subscription_status", "subscription_status"),)
