import logging

from fastapi import APIRouter, Depends, Header, Request, status

from src.api.error import ClientError, ServerError
from src.app.services.payment_gateway import InvalidWebhookSignature, IPaymentGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.billing import UpdateTeamSubscriptionUseCase
from src.depends import get_payment_gateway, get_unit_of_work
from src.libs.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stripe", tags=["Billing"])


@router.post("/webhook", status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header("", alias="stripe-signature"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    payment_gateway: IPaymentGateway = Depends(get_payment_gateway),
):
    """
    Payment provider webhook.

    Subscription updates and deletions are mirrored onto the team; every
    other verified event is acknowledged without action.

    Raises:
        - 400 Bad Request: INVALID_SIGNATURE
    """
    payload = await request.body()

    try:
        event = payment_gateway.construct_event(payload, stripe_signature)
    except InvalidWebhookSignature:
        raise ClientError(Error("INVALID_SIGNATURE", "Webhook signature verification failed."))

    use_case = UpdateTeamSubscriptionUseCase(uow, payment_gateway)
    result = await use_case.execute(event["type"], event["data"])

    if result.is_err():
        raise ServerError(result.error)

    return {"received": True}
