"""
Stripe implementation of the payment gateway port.
"""

import json
import logging
from typing import Any, Dict

import stripe
from fastapi.concurrency import run_in_threadpool

from src.app.services.payment_gateway import InvalidWebhookSignature, IPaymentGateway

logger = logging.getLogger(__name__)


class StripePaymentGateway(IPaymentGateway):
    def __init__(self, secret_key: str, webhook_secret: str):
        stripe.api_key = secret_key
        self.webhook_secret = webhook_secret

    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """Verify webhook signature and parse event."""
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            logger.warning(f"Webhook signature verification failed: {exc}")
            raise InvalidWebhookSignature(str(exc)) from exc

        # Plain dicts keep the use case independent of StripeObject
        event = json.loads(payload)
        return {"type": event.get("type", ""), "data": event.get("data", {}).get("object", {})}

    async def get_product_name(self, product_id: str) -> str:
        product = await run_in_threadpool(stripe.Product.retrieve, product_id)
        return product.name

    async def create_recurring_product(
        self,
        name: str,
        description: str,
        unit_amount: int,
        currency: str = "usd",
        interval: str = "month",
        trial_period_days: int = 0,
    ) -> str:
        product = await run_in_threadpool(
            stripe.Product.create, name=name, description=description
        )
        await run_in_threadpool(
            stripe.Price.create,
            product=product.id,
            unit_amount=unit_amount,
            currency=currency,
            recurring={"interval": interval, "trial_period_days": trial_period_days},
        )
        logger.info(f"Created product {product.id} ({name}) at {unit_amount} {currency}/{interval}")
        return product.id
