"""
Signed-in admin session: login, logout and restoring a stored session.

The session owns the current :class:`~audition_admin.schemas.User` and shares
its lifecycle with the stored credentials: whenever the refresh coordinator
ends the session, the user is dropped as well.
"""

from __future__ import annotations

import logging
from typing import Optional

from audition_admin.clients.auth_api import AuthApi
from audition_admin.schemas import User
from audition_admin.services.credentials import CredentialStore
from audition_admin.services.permissions import PermissionEvaluator
from audition_admin.services.profile import ProfileService
from audition_admin.services.token_refresh import RefreshCoordinator

logger = logging.getLogger(__name__)


class NotAuthenticatedError(Exception):
    """Raised when an operation needs a signed-in user and there is none."""


class AdminSession:
    """Tracks who is signed in and keeps credentials in step with that."""

    def __init__(
        self,
        *,
        auth_api: AuthApi,
        credentials: CredentialStore,
        coordinator: RefreshCoordinator,
        profile_service: ProfileService,
    ) -> None:
        self._auth = auth_api
        self._credentials = credentials
        self._profile = profile_service
        self._user: Optional[User] = None
        coordinator.add_session_listener(self._on_session_ended)

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def permissions(self) -> PermissionEvaluator:
        return PermissionEvaluator.for_user(self._user)

    def require_user(self) -> User:
        if self._user is None:
            raise NotAuthenticatedError("Not signed in.")
        return self._user

    async def login(self, email: str, password: str) -> User:
        result = await self._auth.login(email, password)
        self._credentials.set_tokens(result.access_token, result.refresh_token)
        self._user = result.user
        logger.info("Signed in as %s", result.user.email)
        return result.user

    async def logout(self) -> None:
        """Revoke the refresh token if possible, then always forget credentials locally."""
        refresh_token = self._credentials.get_refresh_token()
        if refresh_token:
            try:
                await self._auth.logout(refresh_token)
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Logout request failed; clearing local session anyway: %s", exc)
        self._credentials.clear_tokens()
        self._user = None

    async def restore(self) -> Optional[User]:
        """Load the user for stored credentials, if any.

        An expired access token is refreshed transparently by the coordinator.
        If the profile cannot be loaded the stored credentials are discarded
        and the error is re-raised.
        """
        if not self._credentials.get_access_token() or not self._credentials.get_refresh_token():
            self._user = None
            return None

        try:
            self._user = await self._profile.get()
        except Exception:
            self._credentials.clear_tokens()
            self._user = None
            raise
        return self._user

    async def forgot_password(self, email: str) -> None:
        await self._auth.forgot_password(email)

    async def reset_password(self, token: str, new_password: str) -> None:
        await self._auth.reset_password(token, new_password)

    def _on_session_ended(self, error: BaseException) -> None:
        if self._user is not None:
            logger.info("Session ended: %s", error)
        self._user = None


__all__ = ["AdminSession", "NotAuthenticatedError"]
