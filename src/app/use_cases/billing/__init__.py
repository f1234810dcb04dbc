"""
Billing Use Cases
"""

from .dtos import SubscriptionSyncResponse
from .update_team_subscription_use_case import UpdateTeamSubscriptionUseCase

__all__ = ["UpdateTeamSubscriptionUseCase", "SubscriptionSyncResponse"]
