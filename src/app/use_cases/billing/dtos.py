"""
Billing Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


class SubscriptionSyncResponse(BaseModel):
    """Outcome of applying a subscription webhook event"""

    handled: bool
    team_id: Optional[int] = None
    subscription_status: Optional[str] = None
