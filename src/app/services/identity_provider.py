from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from src.domain.entities import AuthSession, User


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects or fails a request"""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class IIdentityProvider(ABC):
    """
    Identity provider port - application layer.

    Owns users, credentials, sessions and per-user metadata. Every method
    raises IdentityProviderError on provider failure unless documented
    otherwise.
    """

    @abstractmethod
    async def create_user(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> User:
        """Register a new user with a password"""
        pass

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> Optional[AuthSession]:
        """Verify credentials. Returns None when they are wrong."""
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token"""
        pass

    @abstractmethod
    async def update_user(
        self,
        user_id: str,
        *,
        password: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> User:
        """Set the password and/or merge metadata keys with admin rights"""
        pass

    @abstractmethod
    async def request_email_change(self, access_token: str, email: str) -> None:
        """
        Change the email of the user behind access_token, acting as that user.

        The provider applies the new address only after it has been confirmed.
        """
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        """Hard-delete a user"""
        pass

    @abstractmethod
    async def invite_user_by_email(
        self, email: str, metadata: Dict[str, Any], redirect_to: str
    ) -> User:
        """Send an invitation email; metadata is attached to the invitee account"""
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Lookup a user by id"""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Lookup a user by email"""
        pass
