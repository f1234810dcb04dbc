from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode an access token issued by the identity provider

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid, expired or missing a subject
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience=ApplicationConfig.SUPABASE_JWT_AUDIENCE,
        )
    except JWTError:
        return None

    if not payload.get("sub"):
        return None
    return payload
