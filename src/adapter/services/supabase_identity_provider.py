"""
Supabase Auth implementation of the identity provider port.

Admin operations use the service-role key. Password checks and email
changes use a fresh anon-key client per call. Email changes run as the
user, so the provider confirms the new address before applying it.
"""

import logging
from typing import Any, Dict, Optional

from fastapi.concurrency import run_in_threadpool
from supabase import AuthApiError, AuthError, Client, create_client
from supabase.client import ClientOptions

from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.domain.entities import AuthSession, User

logger = logging.getLogger(__name__)

LIST_USERS_PAGE_SIZE = 200


def _to_user(supabase_user: Any) -> User:
    return User(
        id=str(supabase_user.id),
        email=supabase_user.email or "",
        user_metadata=supabase_user.user_metadata or {},
        created_at=supabase_user.created_at,
    )


def _provider_error(exc: AuthError) -> IdentityProviderError:
    return IdentityProviderError(exc.message, getattr(exc, "code", None))


class SupabaseIdentityProvider(IIdentityProvider):
    def __init__(self, url: str, anon_key: str, service_role_key: str):
        self.url = url
        self.anon_key = anon_key
        self.admin: Client = create_client(
            url,
            service_role_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )

    def _anon_client(self) -> Client:
        return create_client(
            self.url,
            self.anon_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )

    async def create_user(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> User:
        try:
            response = await run_in_threadpool(
                self.admin.auth.admin.create_user,
                {
                    "email": email,
                    "password": password,
                    "email_confirm": True,
                    "user_metadata": metadata or {},
                },
            )
        except AuthError as exc:
            raise _provider_error(exc) from exc
        return _to_user(response.user)

    async def sign_in_with_password(self, email: str, password: str) -> Optional[AuthSession]:
        client = self._anon_client()
        try:
            response = await run_in_threadpool(
                client.auth.sign_in_with_password, {"email": email, "password": password}
            )
        except AuthApiError as exc:
            if exc.status == 400:
                return None
            raise _provider_error(exc) from exc
        except AuthError as exc:
            raise _provider_error(exc) from exc

        if response.session is None or response.user is None:
            return None
        return AuthSession(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            user=_to_user(response.user),
        )

    async def sign_out(self, access_token: str) -> None:
        try:
            await run_in_threadpool(self.admin.auth.admin.sign_out, access_token, "global")
        except AuthError as exc:
            raise _provider_error(exc) from exc

    async def update_user(
        self,
        user_id: str,
        *,
        password: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> User:
        attributes: Dict[str, Any] = {}
        if password is not None:
            attributes["password"] = password
        if metadata is not None:
            attributes["user_metadata"] = metadata

        try:
            response = await run_in_threadpool(
                self.admin.auth.admin.update_user_by_id, user_id, attributes
            )
        except AuthError as exc:
            raise _provider_error(exc) from exc
        return _to_user(response.user)

    async def request_email_change(self, access_token: str, email: str) -> None:
        def _update_as_user():
            client = self._anon_client()
            # Only the access token is known here; it must still be valid
            client.auth.set_session(access_token, "")
            return client.auth.update_user({"email": email})

        try:
            await run_in_threadpool(_update_as_user)
        except AuthError as exc:
            raise _provider_error(exc) from exc

    async def delete_user(self, user_id: str) -> None:
        try:
            await run_in_threadpool(self.admin.auth.admin.delete_user, user_id)
        except AuthError as exc:
            raise _provider_error(exc) from exc

    async def invite_user_by_email(
        self, email: str, metadata: Dict[str, Any], redirect_to: str
    ) -> User:
        try:
            response = await run_in_threadpool(
                self.admin.auth.admin.invite_user_by_email,
                email,
                {"data": metadata, "redirect_to": redirect_to},
            )
        except AuthError as exc:
            logger.warning(f"Invitation email to {email} rejected: {exc.message}")
            raise _provider_error(exc) from exc
        return _to_user(response.user)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        try:
            response = await run_in_threadpool(self.admin.auth.admin.get_user_by_id, user_id)
        except AuthApiError as exc:
            if exc.status == 404:
                return None
            raise _provider_error(exc) from exc
        except AuthError as exc:
            raise _provider_error(exc) from exc
        return _to_user(response.user) if response.user else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        page = 1
        while True:
            try:
                users = await run_in_threadpool(
                    self.admin.auth.admin.list_users, page, LIST_USERS_PAGE_SIZE
                )
            except AuthError as exc:
                raise _provider_error(exc) from exc

            for supabase_user in users:
                if (supabase_user.email or "").lower() == wanted:
                    return _to_user(supabase_user)

            if len(users) < LIST_USERS_PAGE_SIZE:
                return None
            page += 1
