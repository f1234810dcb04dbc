"""
Get Team Use Case

Resolves the caller's team together with its roster.
"""

import asyncio
import logging
from typing import Optional

from src.libs.result import Result, Return
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TeamMember, User

from .dtos import MemberProfile, TeamMemberWithUser, TeamWithMembers

logger = logging.getLogger(__name__)


class GetTeamForUserUseCase:
    """
    Use case for loading the caller's team aggregate.

    Business Rules:
    - Users without a membership get no team (value None, not an error)
    - Every member is enriched with name/email from the identity provider;
      lookups run concurrently, one per member
    - A failed or missing profile yields name=None, email=""
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(self, user_id: str) -> Result[Optional[TeamWithMembers]]:
        async with self.uow:
            membership = await self.uow.team_members.get_by_user_id(user_id)
            if membership is None:
                return Return.ok(None)

            team = await self.uow.teams.get_by_id(membership.team_id)
            if team is None:
                return Return.ok(None)

            members = await self.uow.team_members.get_by_team_id(team.id)

            profiles = await asyncio.gather(
                *(self._lookup_profile(member.user_id) for member in members)
            )

            return Return.ok(
                TeamWithMembers(
                    id=team.id,
                    name=team.name,
                    stripe_customer_id=team.stripe_customer_id,
                    stripe_subscription_id=team.stripe_subscription_id,
                    stripe_product_id=team.stripe_product_id,
                    plan_name=team.plan_name,
                    subscription_status=team.subscription_status,
                    created_at=team.created_at,
                    updated_at=team.updated_at,
                    team_members=[
                        _with_profile(member, profile)
                        for member, profile in zip(members, profiles)
                    ],
                )
            )

    async def _lookup_profile(self, user_id: str) -> Optional[User]:
        try:
            return await self.identity_provider.get_user_by_id(user_id)
        except IdentityProviderError as exc:
            logger.warning(f"Profile lookup failed for user {user_id}: {exc.message}")
            return None


def _with_profile(member: TeamMember, profile: Optional[User]) -> TeamMemberWithUser:
    return TeamMemberWithUser(
        id=member.id,
        user_id=member.user_id,
        team_id=member.team_id,
        role=member.role.value,
        joined_at=member.joined_at,
        user=MemberProfile(
            id=member.user_id,
            name=profile.name if profile else None,
            email=profile.email if profile else "",
        ),
    )
