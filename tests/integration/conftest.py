import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.fakes import FakeIdentityProvider, FakePaymentGateway
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_identity_provider, get_payment_gateway, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.entities import Team, TeamMember, TeamRole


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest_asyncio.fixture
def payment_gateway():
    return FakePaymentGateway(products={"prod_base": "Base"})


@pytest_asyncio.fixture
async def client(db_session, identity_provider, payment_gateway):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def make_team(db_session):
    """Create a team with the given user as its first member"""

    async def _make_team(user, name="Acme", role=TeamRole.owner, **fields):
        team = Team(name=name, **fields)
        db_session.add(team)
        await db_session.flush()
        member = TeamMember(user_id=user.id, team_id=team.id, role=role)
        db_session.add(member)
        await db_session.commit()
        return team, member

    return _make_team


@pytest_asyncio.fixture
async def add_member(db_session):
    async def _add_member(user, team, role=TeamRole.member):
        member = TeamMember(user_id=user.id, team_id=team.id, role=role)
        db_session.add(member)
        await db_session.commit()
        return member

    return _add_member
