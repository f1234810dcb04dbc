import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Invitation, InvitationStatus, TeamMember, TeamRole
from tests.fixtures.helpers import auth_headers


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"userId": "x", "teamId": 1},
        {"userId": "x", "role": "member"},
        {"userId": "x", "teamId": "abc", "role": "member"},
    ],
)
async def test_missing_fields(client: AsyncClient, identity_provider, body):
    user = identity_provider.add_user("b@example.com")

    response = await client.post(
        "/api/auth/link-team", json=body, headers=auth_headers(identity_provider, user)
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


@pytest.mark.asyncio
async def test_linking_someone_else_is_forbidden(
    client: AsyncClient, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    intruder = identity_provider.add_user("c@example.com")

    response = await client.post(
        "/api/auth/link-team",
        json={"userId": owner.id, "teamId": team.id, "role": "owner"},
        headers=auth_headers(identity_provider, intruder),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unauthenticated_request_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/auth/link-team", json={"userId": "x", "teamId": 1, "role": "member"}
    )

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/auth/link-team",
        json={"userId": "x", "teamId": 1, "role": "member"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unknown_team(client: AsyncClient, identity_provider):
    user = identity_provider.add_user("b@example.com")

    response = await client.post(
        "/api/auth/link-team",
        json={"userId": user.id, "teamId": 999, "role": "member"},
        headers=auth_headers(identity_provider, user),
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Team not found"}


@pytest.mark.asyncio
async def test_uninvited_user_cannot_join(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    outsider = identity_provider.add_user("c@example.com")

    response = await client.post(
        "/api/auth/link-team",
        json={"userId": outsider.id, "teamId": team_id, "role": "owner"},
        headers=auth_headers(identity_provider, outsider),
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}
    result = await db_session.execute(select(TeamMember).where(TeamMember.user_id == outsider.id))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_invitee_cannot_raise_own_role(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    invitee = identity_provider.add_user(
        "b@example.com", metadata={"invited_team_id": team_id, "invited_role": "member"}
    )

    response = await client.post(
        "/api/auth/link-team",
        json={"userId": invitee.id, "teamId": team_id, "role": "owner"},
        headers=auth_headers(identity_provider, invitee),
    )

    assert response.status_code == 403
    result = await db_session.execute(select(TeamMember).where(TeamMember.user_id == invitee.id))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_pending_invitation_for_email_allows_join(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    invitee = identity_provider.add_user("b@example.com")
    invitation = Invitation(
        team_id=team_id,
        email="b@example.com",
        role=TeamRole.member,
        invited_by=owner.id,
        status=InvitationStatus.pending,
    )
    db_session.add(invitation)
    await db_session.commit()
    invitation_id = invitation.id

    response = await client.post(
        "/api/auth/link-team",
        json={"userId": invitee.id, "teamId": team_id, "role": "member"},
        headers=auth_headers(identity_provider, invitee),
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    result = await db_session.execute(select(TeamMember).where(TeamMember.user_id == invitee.id))
    assert [(m.team_id, m.role) for m in result.scalars().all()] == [(team_id, TeamRole.member)]
    stored = await db_session.get(Invitation, invitation_id)
    await db_session.refresh(stored)
    assert stored.status == InvitationStatus.accepted
