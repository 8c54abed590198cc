"""
Bearer-token attachment and coordinated access-token refresh.

Every outgoing admin request passes through :class:`RefreshCoordinator`. When
the backend rejects an access token, the first failing request refreshes it
once; requests that fail while that refresh is in flight wait for its outcome
instead of refreshing again. Each failed request is replayed at most once.

A refresh episode that cannot recover (no refresh token stored, or the refresh
call failing) wipes the stored credentials and fails every waiting request.
Redirecting the user to a login prompt is left to the caller, which can
subscribe with :meth:`RefreshCoordinator.add_session_listener`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

import httpx

from audition_admin.services.credentials import CredentialStore
from audition_admin.utils.http import ApiError, bearer

logger = logging.getLogger(__name__)

Dispatch = Callable[[httpx.Request], Awaitable[httpx.Response]]
Refresher = Callable[[str], Awaitable[str]]
SessionListener = Callable[[BaseException], None]


@dataclass
class RefreshState:
    """Refresh-in-progress flag and the requests waiting on that refresh."""

    refreshing: bool = False
    queue: List["asyncio.Future[str]"] = field(default_factory=list)

    def enqueue(self) -> "asyncio.Future[str]":
        waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self.queue.append(waiter)
        return waiter

    def settle(
        self,
        *,
        token: Optional[str] = None,
        error: Optional[BaseException] = None,
    ) -> int:
        """End the episode and settle every waiter, in arrival order, with one outcome."""
        self.refreshing = False
        waiters, self.queue = self.queue, []
        for waiter in waiters:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(token)
        return len(waiters)


class RefreshCoordinator:
    """Attach credentials to requests and recover from expired access tokens."""

    def __init__(
        self,
        credentials: CredentialStore,
        refresher: Refresher,
        *,
        state: RefreshState | None = None,
    ) -> None:
        self._credentials = credentials
        self._refresher = refresher
        self._state = state or RefreshState()
        self._listeners: List[SessionListener] = []

    @property
    def state(self) -> RefreshState:
        return self._state

    def add_session_listener(self, listener: SessionListener) -> None:
        """Call ``listener`` with the terminal error whenever credentials are wiped."""
        self._listeners.append(listener)

    def authorize(self, request: httpx.Request) -> httpx.Request:
        token = self._credentials.get_access_token()
        if token:
            request.headers["Authorization"] = bearer(token)
        return request

    async def send(self, request: httpx.Request, dispatch: Dispatch) -> httpx.Response:
        """Send ``request`` through ``dispatch``, refreshing and replaying once on a 401."""
        self.authorize(request)
        try:
            return await dispatch(request)
        except ApiError as exc:
            if not exc.is_unauthorized:
                raise
            failure = exc
        return await self._recover(request, dispatch, failure)

    async def _recover(
        self, request: httpx.Request, dispatch: Dispatch, failure: ApiError
    ) -> httpx.Response:
        state = self._state

        if state.refreshing:
            logger.debug(
                "Refresh already in flight; queueing %s %s",
                request.method,
                request.url.path,
            )
            token = await state.enqueue()
            request.headers["Authorization"] = bearer(token)
            return await dispatch(request)

        # Must be set before the first await so concurrent failures queue up.
        state.refreshing = True
        try:
            access_token = await self._refresh(failure)
        except asyncio.CancelledError:
            # The session was not proven dead; release waiters, keep credentials.
            if state.refreshing:
                state.settle(error=failure)
            raise
        except BaseException as exc:
            if state.refreshing:
                state.settle(error=exc)
            raise

        request.headers["Authorization"] = bearer(access_token)
        return await dispatch(request)

    async def _refresh(self, failure: ApiError) -> str:
        """Run one refresh episode and settle the queue with its outcome."""
        refresh_token = self._credentials.get_refresh_token()

        if not refresh_token:
            logger.warning("Access token rejected and no refresh token stored; ending session")
            self._end_session(failure)
            raise failure

        logger.info("Access token rejected; refreshing")
        try:
            access_token = await self._refresher(refresh_token)
        except Exception as exc:
            logger.warning("Token refresh failed; ending session: %s", exc)
            self._end_session(exc)
            raise

        # Re-read so a refresh token replaced or removed meanwhile is not overwritten.
        self._credentials.set_tokens(access_token, self._credentials.get_refresh_token())
        released = self._state.settle(token=access_token)
        logger.info("Access token refreshed; releasing %d queued request(s)", released)
        return access_token

    def _end_session(self, error: BaseException) -> None:
        try:
            self._credentials.clear_tokens()
        finally:
            self._state.settle(error=error)
        for listener in list(self._listeners):
            try:
                listener(error)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Session listener failed")


__all__ = ["Dispatch", "RefreshCoordinator", "RefreshState", "Refresher", "SessionListener"]
