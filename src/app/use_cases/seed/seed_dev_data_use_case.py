"""
Seed Dev Data Use Case

Creates a confirmed test user who owns "Test Team", then the Base and Plus
subscription plans at the payment provider.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.payment_gateway import IPaymentGateway
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Team, TeamMember, TeamRole

from .dtos import SeedResponse

logger = logging.getLogger(__name__)

SEED_EMAIL = "test@test.com"
SEED_PASSWORD = "admin123"
SEED_USER_NAME = "Test User"
SEED_TEAM_NAME = "Test Team"
SEED_TRIAL_DAYS = 7

# (name, description, monthly price in cents)
SEED_PLANS = (
    ("Base", "Base subscription plan", 800),
    ("Plus", "Plus subscription plan", 1200),
)


class SeedDevDataUseCase:
    """
    Use case for populating a fresh development environment.

    Business Rules:
    - The user is created through the identity provider (SEED_USER_FAILED)
    - The user owns the seeded team
    - Each plan is a monthly price with a 7 day trial
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity_provider: IIdentityProvider,
        payment_gateway: IPaymentGateway,
    ):
        self.uow = uow
        self.identity_provider = identity_provider
        self.payment_gateway = payment_gateway

    async def execute(
        self, email: str = SEED_EMAIL, password: str = SEED_PASSWORD
    ) -> Result[SeedResponse]:
        try:
            user = await self.identity_provider.create_user(
                email, password, metadata={"name": SEED_USER_NAME}
            )
        except IdentityProviderError as exc:
            logger.error(f"Failed to create seed user {email}: {exc.message}")
            return Return.err(Error("SEED_USER_FAILED", f"Failed to create user: {exc.message}"))
        logger.info(f"Initial user created: {user.id}")

        async with self.uow:
            team = await self.uow.teams.create(Team(name=SEED_TEAM_NAME))
            team_id = team.id
            await self.uow.team_members.create_if_absent(
                TeamMember(user_id=user.id, team_id=team_id, role=TeamRole.owner)
            )
            await self.uow.commit()
        logger.info(f"Team {team_id} created with owner {user.id}")

        product_ids = []
        for name, description, unit_amount in SEED_PLANS:
            product_ids.append(
                await self.payment_gateway.create_recurring_product(
                    name,
                    description,
                    unit_amount,
                    trial_period_days=SEED_TRIAL_DAYS,
                )
            )
        logger.info("Subscription plans created")

        return Return.ok(SeedResponse(user_id=user.id, team_id=team_id, product_ids=product_ids))
