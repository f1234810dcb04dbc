import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import (
    ActivityLog,
    ActivityType,
    Invitation,
    InvitationStatus,
    Team,
    TeamMember,
    TeamRole,
)
from tests.fixtures.helpers import auth_headers


@pytest.mark.asyncio
async def test_sign_up_creates_team_and_owner(client: AsyncClient, db_session, identity_provider):
    response = await client.post(
        "/actions/sign-up",
        json={"email": "new@example.com", "password": "password123"},
        headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["redirect"] == "/dashboard"
    assert data["access_token"]
    assert "error" not in data

    user = await identity_provider.get_user_by_email("new@example.com")
    assert user.user_metadata == {"name": None}

    result = await db_session.execute(select(Team))
    teams = result.scalars().all()
    assert [team.name for team in teams] == ["new@example.com's Team"]
    team_id = teams[0].id

    result = await db_session.execute(select(TeamMember))
    assert [(m.user_id, m.team_id, m.role) for m in result.scalars().all()] == [
        (user.id, team_id, TeamRole.owner)
    ]

    result = await db_session.execute(select(ActivityLog).order_by(ActivityLog.id))
    logs = result.scalars().all()
    assert [log.action for log in logs] == [ActivityType.CREATE_TEAM, ActivityType.SIGN_UP]
    assert {log.ip_address for log in logs} == {"203.0.113.5"}


@pytest.mark.asyncio
async def test_sign_up_with_invitation_joins_team(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    invitation = Invitation(
        team_id=team_id, email="b@example.com", role=TeamRole.member, invited_by=owner.id
    )
    db_session.add(invitation)
    await db_session.commit()
    invitation_id = invitation.id

    response = await client.post(
        "/actions/sign-up",
        json={"email": "b@example.com", "password": "password123", "inviteId": str(invitation_id)},
    )

    assert response.status_code == 200
    assert response.json()["redirect"] == "/dashboard"

    result = await db_session.execute(select(Team))
    assert len(result.scalars().all()) == 1

    invitee = await identity_provider.get_user_by_email("b@example.com")
    result = await db_session.execute(
        select(TeamMember).where(TeamMember.user_id == invitee.id)
    )
    assert [(m.team_id, m.role) for m in result.scalars().all()] == [(team_id, TeamRole.member)]

    result = await db_session.execute(select(Invitation).where(Invitation.id == invitation_id))
    assert result.scalar_one().status == InvitationStatus.accepted


@pytest.mark.asyncio
async def test_sign_up_with_foreign_invitation_is_rolled_back(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    invitation = Invitation(
        team_id=team.id, email="someone@example.com", role=TeamRole.member, invited_by=owner.id
    )
    db_session.add(invitation)
    await db_session.commit()

    response = await client.post(
        "/actions/sign-up",
        json={"email": "b@example.com", "password": "password123", "inviteId": invitation.id},
    )

    assert response.status_code == 200
    assert response.json()["error"] == "Invalid or expired invitation."
    assert await identity_provider.get_user_by_email("b@example.com") is None


@pytest.mark.asyncio
async def test_sign_up_validation_message(client: AsyncClient):
    response = await client.post(
        "/actions/sign-up", json={"email": "new@example.com", "password": "short"}
    )

    assert response.status_code == 200
    assert response.json() == {"error": "String should have at least 8 characters"}


@pytest.mark.asyncio
async def test_sign_in_wrong_password_echoes_fields(client: AsyncClient, identity_provider):
    identity_provider.add_user("a@example.com", password="password123")

    response = await client.post(
        "/actions/sign-in", json={"email": "a@example.com", "password": "wrongpassword"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "error": "Invalid email or password. Please try again.",
        "email": "a@example.com",
        "password": "wrongpassword",
    }


@pytest.mark.asyncio
async def test_sign_in_records_activity(
    client: AsyncClient, db_session, identity_provider, make_team
):
    user = identity_provider.add_user("a@example.com", password="password123")
    team, _ = await make_team(user)
    team_id = team.id

    response = await client.post(
        "/actions/sign-in", json={"email": "a@example.com", "password": "password123"}
    )

    assert response.status_code == 200
    assert response.json()["redirect"] == "/dashboard"
    result = await db_session.execute(select(ActivityLog))
    assert [(log.team_id, log.action) for log in result.scalars().all()] == [
        (team_id, ActivityType.SIGN_IN)
    ]


@pytest.mark.asyncio
async def test_sign_out_revokes_session(
    client: AsyncClient, db_session, identity_provider, make_team
):
    user = identity_provider.add_user("a@example.com")
    await make_team(user)
    headers = auth_headers(identity_provider, user)

    response = await client.post("/actions/sign-out", headers=headers)

    assert response.json() == {"redirect": "/sign-in"}
    assert identity_provider.signed_out_tokens == [headers["Authorization"].split(" ", 1)[1]]
    result = await db_session.execute(select(ActivityLog))
    assert [log.action for log in result.scalars().all()] == [ActivityType.SIGN_OUT]
