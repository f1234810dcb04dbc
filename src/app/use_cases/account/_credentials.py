import logging
from typing import Optional

from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.domain.entities import User

logger = logging.getLogger(__name__)


async def load_current_user(identity_provider: IIdentityProvider, user_id: str) -> Optional[User]:
    """Current provider record of the caller; None when it cannot be loaded"""
    try:
        return await identity_provider.get_user_by_id(user_id)
    except IdentityProviderError as exc:
        logger.warning(f"Could not load user {user_id}: {exc.message}")
        return None


async def verify_password(identity_provider: IIdentityProvider, email: str, password: str) -> bool:
    """Check a password by signing in with it; provider errors count as a mismatch"""
    try:
        session = await identity_provider.sign_in_with_password(email, password)
    except IdentityProviderError as exc:
        logger.warning(f"Password verification failed at identity provider: {exc.message}")
        return False
    return session is not None
