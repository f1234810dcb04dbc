import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import (
    ActivityLog,
    ActivityType,
    Invitation,
    InvitationStatus,
    TeamMember,
    TeamRole,
)
from tests.fixtures.helpers import auth_headers


async def _invitations(db_session, team_id):
    result = await db_session.execute(select(Invitation).where(Invitation.team_id == team_id))
    return list(result.scalars().all())


async def _members(db_session, team_id):
    result = await db_session.execute(
        select(TeamMember).where(TeamMember.team_id == team_id).order_by(TeamMember.id)
    )
    return list(result.scalars().all())


async def _actions(db_session, team_id):
    result = await db_session.execute(
        select(ActivityLog).where(ActivityLog.team_id == team_id).order_by(ActivityLog.id)
    )
    return [(log.action, log.user_id) for log in result.scalars().all()]


@pytest.mark.asyncio
async def test_invite_then_redeem_through_callback(
    client: AsyncClient, db_session, identity_provider, make_team
):
    """Owner invites b@example.com; B lands on the callback and joins as member"""
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id

    invite_response = await client.post(
        "/actions/team/invite-member",
        json={"email": "b@example.com", "role": "member"},
        headers=auth_headers(identity_provider, owner),
    )

    assert invite_response.status_code == 200
    assert invite_response.json() == {"success": "Invitation sent successfully"}

    invitations = await _invitations(db_session, team_id)
    assert len(invitations) == 1
    invitation_id = invitations[0].id
    assert invitations[0].status == InvitationStatus.pending
    assert invitations[0].invited_by == owner.id
    assert await _actions(db_session, team_id) == [(ActivityType.INVITE_TEAM_MEMBER, owner.id)]

    sent = identity_provider.sent_invitations[0]
    assert sent["metadata"] == {
        "invited_team_id": team_id,
        "invited_role": "member",
        "invitation_id": invitation_id,
    }
    assert sent["redirect_to"].endswith("/auth/callback")

    invitee = await identity_provider.get_user_by_email("b@example.com")
    callback_response = await client.post(
        "/api/auth/callback", headers=auth_headers(identity_provider, invitee)
    )

    assert callback_response.status_code == 200
    assert callback_response.json()["redirect"] == "/set-password"

    members = await _members(db_session, team_id)
    assert [(m.user_id, m.role) for m in members] == [
        (owner.id, TeamRole.owner),
        (invitee.id, TeamRole.member),
    ]
    invitations = await _invitations(db_session, team_id)
    assert invitations[0].status == InvitationStatus.accepted
    assert await _actions(db_session, team_id) == [
        (ActivityType.INVITE_TEAM_MEMBER, owner.id),
        (ActivityType.ACCEPT_INVITATION, invitee.id),
    ]
    assert invitee.user_metadata["invited_team_id"] is None


@pytest.mark.asyncio
async def test_link_team_replay_creates_one_membership(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    invitee = identity_provider.add_user(
        "b@example.com", metadata={"invited_team_id": team_id, "invited_role": "member"}
    )
    body = {"userId": invitee.id, "teamId": team_id, "role": "member"}

    first = await client.post(
        "/api/auth/link-team", json=body, headers=auth_headers(identity_provider, invitee)
    )
    second = await client.post(
        "/api/auth/link-team", json=body, headers=auth_headers(identity_provider, invitee)
    )

    assert first.status_code == 200
    assert first.json() == {"success": True}
    assert second.status_code == 200
    assert second.json() == {"success": True, "message": "Already a member"}

    members = await _members(db_session, team_id)
    assert [m.user_id for m in members].count(invitee.id) == 1


@pytest.mark.asyncio
async def test_duplicate_pending_invitation_is_rejected(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    headers = auth_headers(identity_provider, owner)
    payload = {"email": "b@example.com", "role": "member"}

    await client.post("/actions/team/invite-member", json=payload, headers=headers)
    response = await client.post("/actions/team/invite-member", json=payload, headers=headers)

    assert response.status_code == 200
    assert response.json() == {"error": "An invitation has already been sent to this email"}
    assert len(await _invitations(db_session, team_id)) == 1
    assert len(identity_provider.sent_invitations) == 1


@pytest.mark.asyncio
async def test_inviting_existing_member_writes_nothing(
    client: AsyncClient, db_session, identity_provider, make_team, add_member
):
    owner = identity_provider.add_user("a@example.com")
    member = identity_provider.add_user("b@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    await add_member(member, team)

    response = await client.post(
        "/actions/team/invite-member",
        json={"email": "b@example.com", "role": "member"},
        headers=auth_headers(identity_provider, owner),
    )

    assert response.json() == {"error": "User is already a member of this team"}
    assert await _invitations(db_session, team_id) == []
    assert await _actions(db_session, team_id) == []
    assert identity_provider.sent_invitations == []


@pytest.mark.asyncio
async def test_email_failure_removes_invitation(
    client: AsyncClient, db_session, identity_provider, make_team
):
    owner = identity_provider.add_user("a@example.com")
    team, _ = await make_team(owner)
    team_id = team.id
    identity_provider.fail_invite_with = "Email rate limit exceeded"

    response = await client.post(
        "/actions/team/invite-member",
        json={"email": "b@example.com", "role": "member"},
        headers=auth_headers(identity_provider, owner),
    )

    assert response.status_code == 200
    assert response.json() == {"error": "Failed to send invitation: Email rate limit exceeded"}
    assert await _invitations(db_session, team_id) == []
    assert await _actions(db_session, team_id) == []

    # The email can be invited again once sending works
    identity_provider.fail_invite_with = None
    retry = await client.post(
        "/actions/team/invite-member",
        json={"email": "b@example.com", "role": "member"},
        headers=auth_headers(identity_provider, owner),
    )
    assert retry.json() == {"success": "Invitation sent successfully"}


@pytest.mark.asyncio
async def test_invite_validation_error(client: AsyncClient, identity_provider, make_team):
    owner = identity_provider.add_user("a@example.com")
    await make_team(owner)

    response = await client.post(
        "/actions/team/invite-member",
        json={"email": "b@example.com", "role": "admin"},
        headers=auth_headers(identity_provider, owner),
    )

    assert response.status_code == 200
    assert response.json() == {"error": "Input should be 'member' or 'owner'"}
