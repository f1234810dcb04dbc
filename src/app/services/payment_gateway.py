from abc import ABC, abstractmethod
from typing import Any, Dict


class InvalidWebhookSignature(Exception):
    """Raised when a webhook payload fails signature verification"""


class IPaymentGateway(ABC):
    """Payment provider port - application layer"""

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """
        Verify and parse a webhook event.

        Returns:
            {"type": <event type>, "data": <event object as dict>}

        Raises:
            InvalidWebhookSignature: payload or signature is invalid
        """
        pass

    @abstractmethod
    async def get_product_name(self, product_id: str) -> str:
        """Resolve a product id to its display name"""
        pass

    @abstractmethod
    async def create_recurring_product(
        self,
        name: str,
        description: str,
        unit_amount: int,
        currency: str = "usd",
        interval: str = "month",
        trial_period_days: int = 0,
    ) -> str:
        """Create a product with one recurring price. Returns the product id."""
        pass
