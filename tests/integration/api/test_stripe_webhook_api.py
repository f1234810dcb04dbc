import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Team
from tests.fixtures.fakes import FakePaymentGateway

SIGNED = {"stripe-signature": FakePaymentGateway.VALID_SIGNATURE}


async def _team(db_session, team_id):
    result = await db_session.execute(select(Team).where(Team.id == team_id))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_subscription_update_and_cancel(
    client: AsyncClient, db_session, identity_provider, make_team, test_data
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner, stripe_customer_id="cus_123")
    team_id = team.id

    response = await client.post(
        "/api/stripe/webhook",
        content=test_data.webhook_payload("subscription_updated_event"),
        headers=SIGNED,
    )

    assert response.status_code == 200
    assert response.json() == {"received": True}
    team = await _team(db_session, team_id)
    assert team.stripe_subscription_id == "sub_123"
    assert team.stripe_product_id == "prod_base"
    assert team.plan_name == "Base"
    assert team.subscription_status == "active"

    response = await client.post(
        "/api/stripe/webhook",
        content=test_data.webhook_payload("subscription_deleted_event"),
        headers=SIGNED,
    )

    assert response.status_code == 200
    team = await _team(db_session, team_id)
    assert team.stripe_subscription_id is None
    assert team.stripe_product_id is None
    assert team.plan_name is None
    assert team.subscription_status == "canceled"
    assert team.stripe_customer_id == "cus_123"


@pytest.mark.asyncio
async def test_unknown_customer_is_acknowledged(client: AsyncClient, test_data):
    response = await client.post(
        "/api/stripe/webhook",
        content=test_data.webhook_payload("subscription_updated_event", customer="cus_unknown"),
        headers=SIGNED,
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unhandled_event_is_acknowledged(client: AsyncClient, test_data):
    response = await client.post(
        "/api/stripe/webhook",
        content=test_data.webhook_payload("invoice_paid_event"),
        headers=SIGNED,
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_bad_signature(client: AsyncClient, test_data):
    response = await client.post(
        "/api/stripe/webhook",
        content=test_data.webhook_payload("subscription_updated_event"),
        headers={"stripe-signature": "t=1,v1=forged"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_SIGNATURE"
