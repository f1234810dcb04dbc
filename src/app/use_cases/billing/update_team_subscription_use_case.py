"""
Update Team Subscription Use Case

Mirrors payment-provider subscription changes onto the owning team.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from src.libs.result import Result, Return
from src.app.services.payment_gateway import IPaymentGateway
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SubscriptionStatus

from .dtos import SubscriptionSyncResponse

logger = logging.getLogger(__name__)

SUBSCRIPTION_EVENTS = {
    "customer.subscription.updated",
    "customer.subscription.deleted",
}

_LIVE_STATUSES = {SubscriptionStatus.active.value, SubscriptionStatus.trialing.value}
_ENDED_STATUSES = {SubscriptionStatus.canceled.value, SubscriptionStatus.unpaid.value}


class UpdateTeamSubscriptionUseCase:
    """
    Use case for syncing a subscription event onto a team.

    Business Rules:
    - Only customer.subscription.updated/deleted are applied
    - Unknown customers are logged and ignored
    - active/trialing store subscription id, product id and product name
    - canceled/unpaid clear those three and store the status
    """

    def __init__(self, uow: UnitOfWork, payment_gateway: IPaymentGateway):
        self.uow = uow
        self.payment_gateway = payment_gateway

    async def execute(self, event_type: str, subscription: Dict[str, Any]) -> Result[SubscriptionSyncResponse]:
        if event_type not in SUBSCRIPTION_EVENTS:
            logger.info(f"Ignoring unhandled payment event {event_type}")
            return Return.ok(SubscriptionSyncResponse(handled=False))

        customer_id = subscription.get("customer")
        status = subscription.get("status")

        async with self.uow:
            team = await self.uow.teams.get_by_stripe_customer_id(customer_id)
            if team is None:
                logger.error(f"Team not found for payment customer {customer_id}")
                return Return.ok(SubscriptionSyncResponse(handled=False))

            if status in _LIVE_STATUSES:
                product_id = _product_id(subscription)
                team.stripe_subscription_id = subscription.get("id")
                team.stripe_product_id = product_id
                team.plan_name = (
                    await self.payment_gateway.get_product_name(product_id) if product_id else None
                )
            elif status in _ENDED_STATUSES:
                team.stripe_subscription_id = None
                team.stripe_product_id = None
                team.plan_name = None
            else:
                logger.info(f"Subscription status {status} for team {team.id} left unchanged")
                return Return.ok(
                    SubscriptionSyncResponse(handled=False, team_id=team.id, subscription_status=status)
                )

            team.subscription_status = status
            team.updated_at = datetime.utcnow()
            await self.uow.teams.update(team)
            await self.uow.commit()

            logger.info(f"Team {team.id} subscription synced: {status}")
            return Return.ok(
                SubscriptionSyncResponse(handled=True, team_id=team.id, subscription_status=status)
            )


def _product_id(subscription: Dict[str, Any]) -> Optional[str]:
    items = (subscription.get("items") or {}).get("data") or []
    if not items:
        return None
    plan = items[0].get("plan") or {}
    return plan.get("product")
