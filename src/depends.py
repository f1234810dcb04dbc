from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.stripe_payment_gateway import StripePaymentGateway
from src.adapter.services.supabase_identity_provider import SupabaseIdentityProvider
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.payment_gateway import IPaymentGateway

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    access_token: str


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache(maxsize=1)
def get_identity_provider() -> IIdentityProvider:
    return SupabaseIdentityProvider(
        ApplicationConfig.SUPABASE_URL,
        ApplicationConfig.SUPABASE_ANON_KEY,
        ApplicationConfig.SUPABASE_SERVICE_ROLE_KEY,
    )


@lru_cache(maxsize=1)
def get_payment_gateway() -> IPaymentGateway:
    return StripePaymentGateway(
        ApplicationConfig.STRIPE_SECRET_KEY,
        ApplicationConfig.STRIPE_WEBHOOK_SECRET,
    )


def get_client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For, else the peer address, else empty"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def _to_current_user(token: str) -> Optional[CurrentUser]:
    payload = verify_jwt(token)
    if payload is None:
        return None
    return CurrentUser(
        user_id=payload["sub"],
        access_token=token,
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """
    Dependency to extract and verify the bearer token from the Authorization header.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    user = _to_current_user(credentials.credentials)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[CurrentUser]:
    """Same as get_current_user but yields None instead of rejecting the request"""
    if credentials is None:
        return None
    return _to_current_user(credentials.credentials)
